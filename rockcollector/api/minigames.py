"""Minigame endpoints: fishing and sifting."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from rockcollector.api.deps import CatalogDep, SessionDep, load_game, save_game
from rockcollector.models.loot import LootKind
from rockcollector.services.minigames import (
    FishingEvent,
    FishingState,
    FishingStep,
    MinigameReward,
    SiftingEvent,
    SiftingStep,
)

router = APIRouter(prefix="/game/{player_id}/minigames", tags=["minigames"])


class MinigameRewardModel(BaseModel):
    kind: LootKind
    pack_type: str | None = None
    card_id: str | None = None
    message: str | None = None
    granted: bool = False

    @classmethod
    def from_reward(cls, reward: MinigameReward) -> "MinigameRewardModel":
        return cls(
            kind=reward.kind,
            pack_type=reward.pack_type,
            card_id=reward.card_id,
            message=reward.message,
            granted=reward.granted,
        )


class FishingStepModel(BaseModel):
    event: FishingEvent
    state: FishingState
    reward: MinigameRewardModel | None = None

    @classmethod
    def from_step(cls, step: FishingStep) -> "FishingStepModel":
        return cls(
            event=step.event,
            state=step.state,
            reward=MinigameRewardModel.from_reward(step.reward) if step.reward else None,
        )


class SiftingStepModel(BaseModel):
    event: SiftingEvent
    rock_id: str | None = None
    remaining_targets: list[str] = Field(default_factory=list)
    reward: MinigameRewardModel | None = None

    @classmethod
    def from_step(cls, step: SiftingStep) -> "SiftingStepModel":
        return cls(
            event=step.event,
            rock_id=step.rock_id,
            remaining_targets=step.remaining_targets,
            reward=MinigameRewardModel.from_reward(step.reward) if step.reward else None,
        )


class SiftingRoundResponse(BaseModel):
    """A freshly started sifting round."""

    find_list: list[str]
    sieve: list[str]
    seconds_left: int


@router.post("/fishing", response_model=list[FishingStepModel])
async def fishing_action(
    player_id: str,
    session: SessionDep,
    catalog: CatalogDep,
) -> list[FishingStepModel]:
    """Press the fishing button: cast, reel, or scare the fish."""
    engine = await load_game(session, player_id, catalog)
    steps = engine.fishing_action()
    await save_game(session, player_id, engine)
    return [FishingStepModel.from_step(step) for step in steps]


@router.post("/sifting/start", response_model=SiftingRoundResponse)
async def start_sifting(
    player_id: str,
    session: SessionDep,
    catalog: CatalogDep,
) -> SiftingRoundResponse:
    """Start a new sifting round, replacing any round in progress."""
    engine = await load_game(session, player_id, catalog)
    engine.start_sifting()
    await save_game(session, player_id, engine)
    sifting = engine.session.sifting
    return SiftingRoundResponse(
        find_list=list(sifting.find_list),
        sieve=list(sifting.sieve),
        seconds_left=sifting.seconds_left(engine.clock()),
    )


@router.post("/sifting/{rock_id}", response_model=SiftingStepModel)
async def sifting_action(
    player_id: str,
    rock_id: str,
    session: SessionDep,
    catalog: CatalogDep,
) -> SiftingStepModel:
    """Pick a rock from the sieve."""
    engine = await load_game(session, player_id, catalog)
    step = engine.sifting_action(rock_id)
    await save_game(session, player_id, engine)
    return SiftingStepModel.from_step(step)


@router.post("/leave", status_code=204)
async def leave_minigames(player_id: str, session: SessionDep, catalog: CatalogDep) -> None:
    """Leaving the minigame view cancels any pending round."""
    engine = await load_game(session, player_id, catalog)
    engine.leave_minigames()
    await save_game(session, player_id, engine)
