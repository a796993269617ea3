"""
Game state endpoints.

Read-only state queries, the host tick, save reset, archive and museum.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from rockcollector.api.deps import CatalogDep, SessionDep, load_game, save_game
from rockcollector.api.expeditions import ExpeditionSlotResponse
from rockcollector.api.minigames import FishingStepModel, SiftingStepModel
from rockcollector.config import settings
from rockcollector.db.operations import delete_save
from rockcollector.models.catalog import GameCatalog
from rockcollector.models.game_state import MuseumState
from rockcollector.models.inventory import BASE_ART, Foil, InventoryCardEntry
from rockcollector.services.archive import ArchiveSort
from rockcollector.services.sessions import drop_player_session

router = APIRouter(prefix="/game/{player_id}", tags=["game"])


class OwnedCardModel(BaseModel):
    """One inventory stack."""

    card_id: str
    name: str | None = None
    rarity: str | None = None
    art: int = BASE_ART
    foil: Foil = Foil.NORMAL
    count: int = 1

    @classmethod
    def from_entry(cls, entry: InventoryCardEntry, catalog: GameCatalog) -> "OwnedCardModel":
        card = catalog.get_card(entry.card_id)
        return cls(
            card_id=entry.card_id,
            name=card.name if card else None,
            rarity=card.rarity.value if card else None,
            art=entry.art,
            foil=entry.foil,
            count=entry.count,
        )


class DisplayedCardModel(BaseModel):
    card_id: str
    art: int = BASE_ART
    foil: Foil = Foil.NORMAL


class MuseumModel(BaseModel):
    background: str
    frame: str
    slots: list[DisplayedCardModel | None]

    @classmethod
    def from_state(cls, museum: MuseumState) -> "MuseumModel":
        return cls(
            background=museum.background,
            frame=museum.frame,
            slots=[
                None
                if shown is None
                else DisplayedCardModel(card_id=shown.card_id, art=shown.art, foil=shown.foil)
                for shown in museum.slots
            ],
        )


class GameStateResponse(BaseModel):
    """Full game state plus derived progression queries."""

    player_id: str
    packs_opened: int = 0
    uniques_owned: int = 0
    unique_card_count: int = 0
    unlocked_regions: list[str] = Field(default_factory=list)
    pack_inventory: dict[str, int] = Field(default_factory=dict)
    cards: list[OwnedCardModel] = Field(default_factory=list)
    expeditions: list[ExpeditionSlotResponse] = Field(default_factory=list)
    museum: MuseumModel


class TickResponse(BaseModel):
    completed_expeditions: list[int] = Field(default_factory=list)
    fishing: list[FishingStepModel] = Field(default_factory=list)
    sifting: SiftingStepModel | None = None


class ArchiveResponse(BaseModel):
    player_id: str
    sort: ArchiveSort
    cards: list[OwnedCardModel] = Field(default_factory=list)


class MuseumPlaceRequest(BaseModel):
    card_id: str
    art: int = BASE_ART
    foil: Foil = Foil.NORMAL


class DeleteResponse(BaseModel):
    player_id: str
    deleted: bool


@router.get("", response_model=GameStateResponse)
async def get_game_state(
    player_id: str,
    session: SessionDep,
    catalog: CatalogDep,
) -> GameStateResponse:
    """
    Get a player's game.

    Starts a fresh game if the player has no save yet.
    """
    engine = await load_game(session, player_id, catalog)
    await save_game(session, player_id, engine)

    state = engine.state
    return GameStateResponse(
        player_id=player_id,
        packs_opened=state.player.packs_opened,
        uniques_owned=state.player.uniques_owned,
        unique_card_count=engine.unique_card_count(),
        unlocked_regions=engine.unlocked_regions(),
        pack_inventory=dict(state.player.pack_inventory),
        cards=[OwnedCardModel.from_entry(entry, catalog) for entry in state.inventory],
        expeditions=[ExpeditionSlotResponse.from_view(view) for view in engine.expedition_status()],
        museum=MuseumModel.from_state(state.museum),
    )


@router.delete("", response_model=DeleteResponse)
async def reset_game(player_id: str, session: SessionDep) -> DeleteResponse:
    """Delete a player's save. The next load starts a fresh game."""
    deleted = await delete_save(session, player_id, settings.save_key)
    drop_player_session(player_id)
    return DeleteResponse(player_id=player_id, deleted=deleted)


@router.post("/tick", response_model=TickResponse)
async def tick(player_id: str, session: SessionDep, catalog: CatalogDep) -> TickResponse:
    """Advance every timer to now, including slots caught up while loading."""
    engine = await load_game(session, player_id, catalog)
    result = engine.tick()
    await save_game(session, player_id, engine)
    completed = sorted(set(engine.caught_up) | set(result.completed_expeditions))
    return TickResponse(
        completed_expeditions=completed,
        fishing=[FishingStepModel.from_step(step) for step in result.fishing],
        sifting=SiftingStepModel.from_step(result.sifting) if result.sifting else None,
    )


@router.get("/archive", response_model=ArchiveResponse)
async def get_archive(
    player_id: str,
    session: SessionDep,
    catalog: CatalogDep,
    sort: ArchiveSort = ArchiveSort.NAME_ASC,
) -> ArchiveResponse:
    """Owned cards in display order."""
    engine = await load_game(session, player_id, catalog)
    await save_game(session, player_id, engine)
    return ArchiveResponse(
        player_id=player_id,
        sort=sort,
        cards=[OwnedCardModel.from_entry(entry, catalog) for entry in engine.sorted_archive(sort)],
    )


@router.put("/museum/{slot}", response_model=DisplayedCardModel)
async def place_in_museum(
    player_id: str,
    slot: int,
    request: MuseumPlaceRequest,
    session: SessionDep,
    catalog: CatalogDep,
) -> DisplayedCardModel:
    """Show an owned card variant in a museum slot."""
    engine = await load_game(session, player_id, catalog)
    shown = engine.place_in_museum(slot, request.card_id, request.art, request.foil)
    await save_game(session, player_id, engine)
    return DisplayedCardModel(card_id=shown.card_id, art=shown.art, foil=shown.foil)


@router.delete("/museum/{slot}", response_model=MuseumModel)
async def clear_museum_slot(
    player_id: str,
    slot: int,
    session: SessionDep,
    catalog: CatalogDep,
) -> MuseumModel:
    """Empty a museum slot."""
    engine = await load_game(session, player_id, catalog)
    engine.clear_museum_slot(slot)
    await save_game(session, player_id, engine)
    return MuseumModel.from_state(engine.state.museum)
