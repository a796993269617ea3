"""
Expedition Manager: three independent timed slots.

Slot lifecycle: EMPTY -> start -> OUT -> (now >= end_ts) -> COMPLETE -> claim -> EMPTY.

tick() and check_on_load() share one transition rule. A slot that finished
while the player was away completes exactly once when next checked, no
matter how many ticks were missed. Started expeditions cannot be recalled.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from rockcollector.config import EXPEDITIONS
from rockcollector.models.expedition import (
    ExpeditionDefinition,
    ExpeditionSlot,
    PackGrant,
    SlotStatus,
)
from rockcollector.models.failure import ConfigurationError, FailureKind, PreconditionRejected
from rockcollector.models.game_state import GameState
from rockcollector.services.weighted import RandomSource, percent_chance

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SlotView:
    """Read-only snapshot of one slot for status queries."""

    index: int
    name: str
    status: SlotStatus
    duration_text: str
    remaining_ms: int | None = None
    remaining_text: str | None = None
    reward: PackGrant | None = None


def format_duration(ms: int) -> str:
    """Countdown text: H:MM:SS when an hour or more remains, else MM:SS."""
    ms = max(ms, 0)
    seconds = (ms // 1000) % 60
    minutes = (ms // (1000 * 60)) % 60
    hours = ms // (1000 * 60 * 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


class ExpeditionManager:
    """Drives the expedition slots of one game state."""

    def __init__(
        self,
        state: GameState,
        rng: RandomSource,
        definitions: Sequence[ExpeditionDefinition] = EXPEDITIONS,
    ) -> None:
        self.state = state
        self.rng = rng
        self.definitions = definitions

    @property
    def slots(self) -> list[ExpeditionSlot]:
        return self.state.expeditions

    def _definition(self, index: int) -> ExpeditionDefinition:
        if not 0 <= index < len(self.definitions) or index >= len(self.slots):
            raise ConfigurationError(FailureKind.UNKNOWN_SLOT, f"No expedition slot {index}")
        return self.definitions[index]

    def roll_reward(self, index: int) -> PackGrant:
        """One bonus roll decides between the slot's base and bonus pack."""
        definition = self._definition(index)
        hit_bonus = percent_chance(definition.bonus_chance, self.rng)
        return PackGrant(
            pack_type=definition.bonus_pack if hit_bonus else definition.base_pack,
            count=1,
        )

    def start(self, index: int, now: int) -> ExpeditionSlot:
        """
        Send an expedition out from an empty slot.

        Raises:
            ConfigurationError: If the slot index does not exist
            PreconditionRejected: If the slot is not empty
        """
        definition = self._definition(index)
        slot = self.slots[index]
        if slot.status != SlotStatus.EMPTY:
            raise PreconditionRejected(
                FailureKind.SLOT_BUSY, f"Expedition slot {index} is {slot.status.value}"
            )

        end_ts = now + definition.duration_ms
        self.slots[index] = ExpeditionSlot(status=SlotStatus.OUT, end_ts=end_ts)
        logger.info("Started %s (slot %d), ends at %d", definition.name, index, end_ts)
        return self.slots[index]

    def advance(self, now: int) -> list[int]:
        """
        Complete every OUT slot whose end time has passed.

        Returns:
            Indices of slots that completed on this call.
        """
        completed: list[int] = []
        for index, slot in enumerate(self.slots):
            if slot.status != SlotStatus.OUT or slot.end_ts is None:
                continue
            if now >= slot.end_ts:
                self.slots[index] = ExpeditionSlot(
                    status=SlotStatus.COMPLETE,
                    end_ts=slot.end_ts,
                    reward=self.roll_reward(index),
                )
                completed.append(index)
                logger.info("Expedition slot %d complete", index)
        return completed

    def tick(self, now: int) -> list[int]:
        """Per-second host tick."""
        return self.advance(now)

    def check_on_load(self, now: int) -> list[int]:
        """Startup catch-up pass; same rule as tick, applied once."""
        completed = self.advance(now)
        if completed:
            logger.info("Caught up %d expedition(s) finished while away", len(completed))
        return completed

    def claim(self, index: int) -> PackGrant:
        """
        Collect a completed expedition's reward and free the slot.

        Raises:
            ConfigurationError: If the slot index does not exist
            PreconditionRejected: If the slot is not complete
        """
        self._definition(index)
        slot = self.slots[index]
        if slot.status != SlotStatus.COMPLETE or slot.reward is None:
            raise PreconditionRejected(
                FailureKind.SLOT_NOT_COMPLETE,
                f"Expedition slot {index} is {slot.status.value}, not complete",
            )

        reward = slot.reward
        if not self.state.player.add_packs(reward.pack_type, reward.count):
            logger.warning("Expedition reward pack type %s is not tracked", reward.pack_type)
        self.slots[index] = ExpeditionSlot()
        return reward

    def view(self, now: int) -> list[SlotView]:
        """Snapshot of all slots for display."""
        views: list[SlotView] = []
        for index, slot in enumerate(self.slots):
            definition = self._definition(index)
            remaining = None
            if slot.status == SlotStatus.OUT and slot.end_ts is not None:
                remaining = max(slot.end_ts - now, 0)
            views.append(
                SlotView(
                    index=index,
                    name=definition.name,
                    status=slot.status,
                    duration_text=definition.duration_text,
                    remaining_ms=remaining,
                    remaining_text=format_duration(remaining) if remaining is not None else None,
                    reward=slot.reward,
                )
            )
        return views
