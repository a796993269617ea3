"""
Game engine: the single owner of one player's game.

Holds the catalog, the persisted GameState, the transient PlayerSession,
a random source, a millisecond clock and a save hook. Every operation that
changes persisted state calls the save hook before returning. A load that
changes nothing does not save.

Usage:
    state, needs_save = GameState.from_save(blob)
    engine = GameEngine(catalog, state, save=store)
    if needs_save:
        engine.save()
    engine.check_on_load()      # before anything else
    reveal = engine.open_pack("basic")
"""

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from rockcollector.config import FISHING_REWARDS, SIFTING_REWARDS
from rockcollector.models.catalog import GameCatalog
from rockcollector.models.expedition import ExpeditionSlot, PackGrant
from rockcollector.models.failure import FailureKind, PreconditionRejected
from rockcollector.models.game_state import DisplayedCard, GameState
from rockcollector.models.inventory import BASE_ART, Foil, InventoryCardEntry
from rockcollector.services import converter, museum
from rockcollector.services.archive import ArchiveSort, sort_archive
from rockcollector.services.expeditions import ExpeditionManager, SlotView
from rockcollector.services.minigames import (
    FishingStep,
    MinigameReward,
    SiftingStep,
    resolve_minigame_reward,
)
from rockcollector.services.pack_opener import PackReveal, open_pack
from rockcollector.services.region_gate import unique_card_count, unlocked_regions
from rockcollector.services.sessions import PlayerSession
from rockcollector.services.weighted import RandomSource

logger = logging.getLogger(__name__)

Clock = Callable[[], int]
SaveHook = Callable[[GameState], None]


def system_clock() -> int:
    """Wall clock in milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class TickResult:
    """What one host tick changed."""

    completed_expeditions: list[int] = field(default_factory=list)
    fishing: list[FishingStep] = field(default_factory=list)
    sifting: SiftingStep | None = None


class GameEngine:
    """One player's game: catalog, persisted state and transient session."""

    def __init__(
        self,
        catalog: GameCatalog,
        state: GameState,
        rng: RandomSource | None = None,
        clock: Clock | None = None,
        save: SaveHook | None = None,
        session: PlayerSession | None = None,
    ) -> None:
        self.catalog = catalog
        self.state = state
        self.rng: RandomSource = rng if rng is not None else random.Random()
        self.clock: Clock = clock if clock is not None else system_clock
        self.session = session if session is not None else PlayerSession()
        self._save_hook = save
        self.save_count = 0
        self.loaded = False
        self.caught_up: list[int] = []
        self.expeditions = ExpeditionManager(state, self.rng)

    # --- Persistence ---

    def save(self) -> None:
        """Persist the current state through the save hook."""
        self.save_count += 1
        if self._save_hook is not None:
            self._save_hook(self.state)

    @property
    def dirty(self) -> bool:
        """True once any save has been requested."""
        return self.save_count > 0

    # --- Lifecycle ---

    def check_on_load(self) -> list[int]:
        """
        Startup catch-up. Must run before any tick or player action.

        Completes expeditions that finished while the player was away and
        saves when any did. Running it again is harmless: completed slots
        stay complete.
        """
        completed = self.expeditions.check_on_load(self.clock())
        self.loaded = True
        self.caught_up.extend(completed)
        if completed:
            self.save()
        return completed

    def tick(self) -> TickResult:
        """Per-second host tick driving every deadline."""
        now = self.clock()
        completed = self.expeditions.tick(now)
        fishing = self.session.fishing.advance(now)
        sifting = self.session.sifting.advance(now)
        if completed:
            self.save()
        return TickResult(completed_expeditions=completed, fishing=fishing, sifting=sifting)

    # --- Queries ---

    def unlocked_regions(self) -> list[str]:
        return unlocked_regions(self.catalog, self.state.player.packs_opened, self.state.inventory)

    def unique_card_count(self) -> int:
        return unique_card_count(self.state.inventory)

    def expedition_status(self) -> list[SlotView]:
        return self.expeditions.view(self.clock())

    def sorted_archive(self, mode: ArchiveSort = ArchiveSort.NAME_ASC) -> list[InventoryCardEntry]:
        return sort_archive(self.state.inventory, self.catalog, mode)

    # --- Packs ---

    def open_pack(self, pack_type: str) -> PackReveal:
        reveal = open_pack(self.catalog, self.state, pack_type, self.rng)
        self.save()
        return reveal

    def add_packs(self, pack_type: str, count: int = 1) -> bool:
        added = self.state.player.add_packs(pack_type, count)
        if added:
            self.save()
        return added

    # --- Expeditions ---

    def start_expedition(self, index: int) -> ExpeditionSlot:
        slot = self.expeditions.start(index, self.clock())
        self.save()
        return slot

    def claim_expedition(self, index: int) -> PackGrant:
        reward = self.expeditions.claim(index)
        self.save()
        return reward

    # --- Minigames ---

    def _minigame_reward(self, table_name: str) -> MinigameReward:
        table = FISHING_REWARDS if table_name == "fishing" else SIFTING_REWARDS
        reward = resolve_minigame_reward(table, self.catalog, self.state, self.rng)
        logger.info("%s reward: %s", table_name, reward.kind.value)
        if reward.granted:
            self.save()
        return reward

    def fishing_action(self) -> list[FishingStep]:
        """The player pressed the fishing button."""
        return self.session.fishing.act(
            self.clock(), self.rng, lambda: self._minigame_reward("fishing")
        )

    def start_sifting(self) -> SiftingStep:
        return self.session.sifting.start(self.clock(), self.rng)

    def sifting_action(self, rock_id: str) -> SiftingStep:
        """The player picked a rock from the sieve."""
        return self.session.sifting.pick(
            rock_id, self.clock(), lambda: self._minigame_reward("sifting")
        )

    def leave_minigames(self) -> None:
        """Leaving the minigame view cancels every pending minigame deadline."""
        self.session.fishing.cancel()
        self.session.sifting.cancel()

    # --- Conversion ---

    def toggle_conversion_selection(
        self, card_id: str, art: int = BASE_ART, foil: Foil = Foil.NORMAL
    ) -> converter.ConversionPreview:
        stack = self.state.inventory.find(card_id, art, foil)
        if stack is None:
            raise PreconditionRejected(
                FailureKind.NOT_OWNED, f"{card_id} (art {art}, {foil.value}) is not owned"
            )
        self.session.selection.toggle(stack)
        return self.conversion_preview()

    def clear_conversion_selection(self) -> None:
        """Leaving the packs view drops the selection."""
        self.session.selection.clear()

    def conversion_preview(self) -> converter.ConversionPreview:
        return self.session.selection.preview(self.catalog)

    def confirm_conversion(self) -> converter.ConversionPreview:
        result = converter.confirm(self.state, self.session.selection, self.catalog)
        self.save()
        return result

    # --- Museum ---

    def place_in_museum(
        self, slot: int, card_id: str, art: int = BASE_ART, foil: Foil = Foil.NORMAL
    ) -> DisplayedCard:
        shown = museum.place_in_museum(self.state, slot, card_id, art, foil)
        self.save()
        return shown

    def clear_museum_slot(self, slot: int) -> None:
        museum.clear_museum_slot(self.state, slot)
        self.save()
