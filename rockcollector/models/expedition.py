"""
Expedition slot model.

Lifecycle per slot: EMPTY -> (start) -> OUT -> (now >= end_ts) -> COMPLETE
-> (claim) -> EMPTY.
"""

from dataclasses import dataclass
from enum import Enum


class SlotStatus(str, Enum):
    """Expedition slot state."""

    EMPTY = "empty"
    OUT = "out"
    COMPLETE = "complete"


@dataclass(frozen=True, slots=True)
class PackGrant:
    """A reward of `count` packs of one type."""

    pack_type: str
    count: int = 1


@dataclass(frozen=True, slots=True)
class ExpeditionDefinition:
    """
    Static configuration of one expedition slot.

    Attributes:
        name: Display name
        duration_ms: Time from start to completion
        duration_text: Short label for the duration (e.g., "5m")
        base_pack: Pack granted on a normal result
        bonus_pack: Rarer pack granted when the bonus roll hits
        bonus_chance: Percent chance of the bonus pack
    """

    name: str
    duration_ms: int
    duration_text: str
    base_pack: str
    bonus_pack: str
    bonus_chance: float


@dataclass(slots=True)
class ExpeditionSlot:
    """Runtime state of one expedition slot."""

    status: SlotStatus = SlotStatus.EMPTY
    end_ts: int | None = None
    reward: PackGrant | None = None
