"""Duplicate converter endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from rockcollector.api.deps import CatalogDep, SessionDep, load_game, save_game
from rockcollector.models.inventory import BASE_ART, Foil
from rockcollector.services.converter import ConversionPreview

router = APIRouter(prefix="/game/{player_id}/converter", tags=["converter"])


class ToggleRequest(BaseModel):
    """Identifies the inventory stack to (de)select."""

    card_id: str
    art: int = BASE_ART
    foil: Foil = Foil.NORMAL


class SelectedCardModel(BaseModel):
    card_id: str
    art: int
    foil: Foil
    count: int


class ConversionResponse(BaseModel):
    """Current selection, its points and the pack they would buy."""

    points: int = 0
    reward: str | None = Field(
        default=None,
        description="Best pack the points qualify for, or null below the lowest threshold",
    )
    selected: list[SelectedCardModel] = Field(default_factory=list)

    @classmethod
    def from_preview(cls, preview: ConversionPreview) -> "ConversionResponse":
        return cls(
            points=preview.points,
            reward=preview.reward,
            selected=[
                SelectedCardModel(
                    card_id=entry.card_id, art=entry.art, foil=entry.foil, count=entry.count
                )
                for entry in preview.selected
            ],
        )


class ConfirmResponse(ConversionResponse):
    pack_inventory: dict[str, int] = Field(default_factory=dict)


@router.get("", response_model=ConversionResponse)
async def get_conversion(
    player_id: str,
    session: SessionDep,
    catalog: CatalogDep,
) -> ConversionResponse:
    """Preview the current selection."""
    engine = await load_game(session, player_id, catalog)
    await save_game(session, player_id, engine)
    return ConversionResponse.from_preview(engine.conversion_preview())


@router.post("/toggle", response_model=ConversionResponse)
async def toggle_selection(
    player_id: str,
    request: ToggleRequest,
    session: SessionDep,
    catalog: CatalogDep,
) -> ConversionResponse:
    """Select one more spare copy of a stack, or deselect it at the cap."""
    engine = await load_game(session, player_id, catalog)
    preview = engine.toggle_conversion_selection(request.card_id, request.art, request.foil)
    await save_game(session, player_id, engine)
    return ConversionResponse.from_preview(preview)


@router.delete("", response_model=ConversionResponse)
async def clear_selection(
    player_id: str,
    session: SessionDep,
    catalog: CatalogDep,
) -> ConversionResponse:
    """Drop the selection (the player left the packs view)."""
    engine = await load_game(session, player_id, catalog)
    engine.clear_conversion_selection()
    await save_game(session, player_id, engine)
    return ConversionResponse.from_preview(engine.conversion_preview())


@router.post("/confirm", response_model=ConfirmResponse)
async def confirm_conversion(
    player_id: str,
    session: SessionDep,
    catalog: CatalogDep,
) -> ConfirmResponse:
    """
    Trade the selected duplicates for one pack.

    Returns 409 if the selection does not reach any threshold.
    """
    engine = await load_game(session, player_id, catalog)
    result = engine.confirm_conversion()
    await save_game(session, player_id, engine)
    preview = ConversionResponse.from_preview(result)
    return ConfirmResponse(
        **preview.model_dump(),
        pack_inventory=dict(engine.state.player.pack_inventory),
    )
