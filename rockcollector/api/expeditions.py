"""Expedition endpoints: status, start, claim."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from rockcollector.api.deps import CatalogDep, SessionDep, load_game, save_game
from rockcollector.models.expedition import SlotStatus
from rockcollector.services.expeditions import SlotView

router = APIRouter(prefix="/game/{player_id}/expeditions", tags=["expeditions"])


class PackGrantModel(BaseModel):
    pack_type: str
    count: int = 1


class ExpeditionSlotResponse(BaseModel):
    """One expedition slot as shown to the player."""

    index: int
    name: str
    status: SlotStatus
    duration_text: str
    remaining_ms: int | None = Field(
        default=None,
        description="Milliseconds until completion (out slots only)",
    )
    remaining_text: str | None = None
    reward: PackGrantModel | None = Field(
        default=None,
        description="Resolved reward (complete slots only)",
    )

    @classmethod
    def from_view(cls, view: SlotView) -> "ExpeditionSlotResponse":
        return cls(
            index=view.index,
            name=view.name,
            status=view.status,
            duration_text=view.duration_text,
            remaining_ms=view.remaining_ms,
            remaining_text=view.remaining_text,
            reward=(
                PackGrantModel(pack_type=view.reward.pack_type, count=view.reward.count)
                if view.reward
                else None
            ),
        )


class ClaimResponse(BaseModel):
    slot: int
    reward: PackGrantModel
    pack_inventory: dict[str, int] = Field(default_factory=dict)


@router.get("", response_model=list[ExpeditionSlotResponse])
async def list_expeditions(
    player_id: str,
    session: SessionDep,
    catalog: CatalogDep,
) -> list[ExpeditionSlotResponse]:
    """All three slots with countdowns."""
    engine = await load_game(session, player_id, catalog)
    await save_game(session, player_id, engine)
    return [ExpeditionSlotResponse.from_view(view) for view in engine.expedition_status()]


@router.post("/{slot}/start", response_model=ExpeditionSlotResponse)
async def start_expedition(
    player_id: str,
    slot: int,
    session: SessionDep,
    catalog: CatalogDep,
) -> ExpeditionSlotResponse:
    """
    Send an expedition out from an empty slot.

    Returns 409 if the slot is already out or complete.
    """
    engine = await load_game(session, player_id, catalog)
    engine.start_expedition(slot)
    await save_game(session, player_id, engine)
    return ExpeditionSlotResponse.from_view(engine.expedition_status()[slot])


@router.post("/{slot}/claim", response_model=ClaimResponse)
async def claim_expedition(
    player_id: str,
    slot: int,
    session: SessionDep,
    catalog: CatalogDep,
) -> ClaimResponse:
    """
    Collect a finished expedition's pack and free the slot.

    Returns 409 if the slot is not complete.
    """
    engine = await load_game(session, player_id, catalog)
    reward = engine.claim_expedition(slot)
    await save_game(session, player_id, engine)
    return ClaimResponse(
        slot=slot,
        reward=PackGrantModel(pack_type=reward.pack_type, count=reward.count),
        pack_inventory=dict(engine.state.player.pack_inventory),
    )
