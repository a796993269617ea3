"""
Minigames: fishing and sifting.

Both minigames resolve loot the same way: a weighted table of pack grants,
one region-scoped wild card grant and a "nothing" outcome. What differs is
WHEN the roll happens: each game is a small state machine advanced against
explicit millisecond deadlines.

Fishing: IDLE -act-> WAITING (3-8s) -> BITE (2s window) -act-> REELING
(2.5s cooldown) -> IDLE. Acting while WAITING scares the fish (-> IDLE).
Letting the bite window lapse -> IDLE with no reward.

Sifting: a round shows 3 targets among 7 decoys with a 20s deadline.
Finding every target wins a reward roll; the deadline passing loses.
"""

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from rockcollector.config import (
    FISHING_BITE_WINDOW_MS,
    FISHING_CATCH_COOLDOWN_MS,
    FISHING_WAIT_MIN_MS,
    FISHING_WAIT_SPREAD_MS,
    MINIGAME_ROCK_LIST,
    SIFTING_DECOY_COUNT,
    SIFTING_ROUND_MS,
    SIFTING_TARGET_COUNT,
)
from rockcollector.models.catalog import GameCatalog
from rockcollector.models.game_state import GameState
from rockcollector.models.loot import LootEntry, LootKind
from rockcollector.services.card_resolver import CardResolver, Resolution
from rockcollector.services.region_gate import unlocked_regions
from rockcollector.services.weighted import RandomSource, WeightedEntry, weighted_choice

logger = logging.getLogger(__name__)


# --- Reward resolution ---


@dataclass(frozen=True)
class MinigameReward:
    """
    A resolved minigame loot roll.

    Attributes:
        kind: Which table branch was hit
        pack_type: Pack granted (PACK branch)
        card_id: Card granted (CARD branch), None if the region had no cards
        message: Flavor text (NONE branch)
        resolution: The wild draw details (CARD branch)
    """

    kind: LootKind
    pack_type: str | None = None
    card_id: str | None = None
    message: str | None = None
    resolution: Resolution | None = None

    @property
    def granted(self) -> bool:
        """True if anything was added to the save."""
        if self.kind == LootKind.PACK:
            return self.pack_type is not None
        if self.kind == LootKind.CARD:
            return self.card_id is not None
        return False


def resolve_minigame_reward(
    table: Sequence[LootEntry],
    catalog: GameCatalog,
    state: GameState,
    rng: RandomSource,
) -> MinigameReward:
    """
    Roll a minigame loot table and apply the grant to `state`.

    Card grants are base art, non-foil, drawn with the wild rarity table
    from the entry's region (or its substitute if locked).
    """
    entry = weighted_choice([WeightedEntry(value=row, weight=row.chance) for row in table], rng)

    if entry.kind == LootKind.PACK and entry.pack_type is not None:
        if not state.player.add_packs(entry.pack_type, 1):
            logger.warning("Minigame reward pack type %s is not tracked", entry.pack_type)
            return MinigameReward(kind=LootKind.PACK)
        return MinigameReward(kind=LootKind.PACK, pack_type=entry.pack_type)

    if entry.kind == LootKind.CARD and entry.region is not None:
        unlocked = unlocked_regions(catalog, state.player.packs_opened, state.inventory)
        resolution = CardResolver(catalog, rng).resolve_by_region_wild(entry.region, unlocked)
        if resolution.card_id is not None:
            state.inventory.add(resolution.card_id)
            state.refresh_unique_count()
        return MinigameReward(
            kind=LootKind.CARD, card_id=resolution.card_id, resolution=resolution
        )

    return MinigameReward(kind=LootKind.NONE, message=entry.message)


# --- Fishing ---


class FishingState(str, Enum):
    IDLE = "idle"
    WAITING = "waiting"
    BITE = "bite"
    REELING = "reeling"


class FishingEvent(str, Enum):
    CAST = "cast"
    SCARED_AWAY = "scared_away"
    BITE = "bite"
    CAUGHT = "caught"
    GOT_AWAY = "got_away"
    READY = "ready"
    BUSY = "busy"


@dataclass(frozen=True)
class FishingStep:
    """One transition of the fishing state machine."""

    event: FishingEvent
    state: FishingState
    reward: MinigameReward | None = None


class FishingGame:
    """Fishing state machine with a single pending deadline."""

    def __init__(self) -> None:
        self.state = FishingState.IDLE
        self.deadline: int | None = None

    def cancel(self) -> None:
        """Drop any pending deadline and return to IDLE."""
        self.state = FishingState.IDLE
        self.deadline = None

    def advance(self, now: int) -> list[FishingStep]:
        """Fire every deadline that has passed by `now`."""
        steps: list[FishingStep] = []
        while self.deadline is not None and now >= self.deadline:
            if self.state == FishingState.WAITING:
                self.state = FishingState.BITE
                self.deadline += FISHING_BITE_WINDOW_MS
                steps.append(FishingStep(FishingEvent.BITE, self.state))
            elif self.state == FishingState.BITE:
                self.cancel()
                steps.append(FishingStep(FishingEvent.GOT_AWAY, self.state))
            else:
                self.cancel()
                steps.append(FishingStep(FishingEvent.READY, self.state))
        return steps

    def act(
        self,
        now: int,
        rng: RandomSource,
        on_catch: Callable[[], MinigameReward],
    ) -> list[FishingStep]:
        """
        Handle one player action.

        Pending deadlines are fired first, so a late reel after the window
        closed counts as a fresh cast.

        Returns:
            Every transition that happened, the action's own step last.
        """
        steps = self.advance(now)

        if self.state == FishingState.IDLE:
            self.state = FishingState.WAITING
            self.deadline = now + FISHING_WAIT_MIN_MS + int(rng.random() * FISHING_WAIT_SPREAD_MS)
            steps.append(FishingStep(FishingEvent.CAST, self.state))
        elif self.state == FishingState.WAITING:
            self.cancel()
            steps.append(FishingStep(FishingEvent.SCARED_AWAY, self.state))
        elif self.state == FishingState.BITE:
            self.state = FishingState.REELING
            self.deadline = now + FISHING_CATCH_COOLDOWN_MS
            reward = on_catch()
            steps.append(FishingStep(FishingEvent.CAUGHT, self.state, reward))
        else:
            steps.append(FishingStep(FishingEvent.BUSY, self.state))

        return steps


# --- Sifting ---


class SiftingEvent(str, Enum):
    STARTED = "started"
    FOUND = "found"
    MISS = "miss"
    WON = "won"
    TIME_UP = "time_up"
    NOT_ACTIVE = "not_active"


@dataclass(frozen=True)
class SiftingStep:
    """Result of a sifting action or deadline check."""

    event: SiftingEvent
    rock_id: str | None = None
    remaining_targets: list[str] = field(default_factory=list)
    reward: MinigameReward | None = None


def _shuffled(items: Sequence[str], rng: RandomSource) -> list[str]:
    keyed = [(rng.random(), item) for item in items]
    return [item for _, item in sorted(keyed, key=lambda pair: pair[0])]


class SiftingRound:
    """A timed find-the-rocks round. At most one round is live at a time."""

    def __init__(self) -> None:
        self.active = False
        self.find_list: list[str] = []
        self.sieve: list[str] = []
        self.deadline: int | None = None

    def cancel(self) -> None:
        self.active = False
        self.find_list = []
        self.sieve = []
        self.deadline = None

    def start(
        self,
        now: int,
        rng: RandomSource,
        rock_list: Sequence[str] = MINIGAME_ROCK_LIST,
    ) -> SiftingStep:
        """Start a new round, superseding any round in progress."""
        targets = _shuffled(rock_list, rng)[:SIFTING_TARGET_COUNT]
        pool = [rock for rock in rock_list if rock not in targets]
        decoys = _shuffled(pool, rng)[:SIFTING_DECOY_COUNT]

        self.active = True
        self.find_list = list(targets)
        self.sieve = _shuffled(targets + decoys, rng)
        self.deadline = now + SIFTING_ROUND_MS
        return SiftingStep(SiftingEvent.STARTED, remaining_targets=list(self.find_list))

    def seconds_left(self, now: int) -> int:
        if not self.active or self.deadline is None:
            return 0
        return max(math.ceil((self.deadline - now) / 1000), 0)

    def advance(self, now: int) -> SiftingStep | None:
        """End the round as lost once the deadline has passed."""
        if self.active and self.deadline is not None and now >= self.deadline:
            self.cancel()
            return SiftingStep(SiftingEvent.TIME_UP)
        return None

    def pick(
        self,
        rock_id: str,
        now: int,
        on_win: Callable[[], MinigameReward],
    ) -> SiftingStep:
        """
        The player picks a rock from the sieve.

        A target is marked found; finding the last one wins and rolls the
        reward. Anything else is a miss. Picks after the deadline lose.
        """
        expired = self.advance(now)
        if expired is not None:
            return expired
        if not self.active:
            return SiftingStep(SiftingEvent.NOT_ACTIVE, rock_id=rock_id)

        if rock_id not in self.find_list:
            return SiftingStep(
                SiftingEvent.MISS, rock_id=rock_id, remaining_targets=list(self.find_list)
            )

        self.find_list.remove(rock_id)
        if self.find_list:
            return SiftingStep(
                SiftingEvent.FOUND, rock_id=rock_id, remaining_targets=list(self.find_list)
            )

        self.cancel()
        return SiftingStep(SiftingEvent.WON, rock_id=rock_id, reward=on_win())
