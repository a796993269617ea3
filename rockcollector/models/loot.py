from dataclasses import dataclass
from enum import Enum


class LootKind(str, Enum):
    """What a minigame loot table entry grants."""

    PACK = "pack"
    CARD = "card"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class LootEntry:
    """
    One row of a minigame loot table.

    PACK entries carry `pack_type`, CARD entries carry the target `region`,
    NONE entries carry a flavor `message`.
    """

    kind: LootKind
    chance: float
    pack_type: str | None = None
    region: str | None = None
    message: str | None = None
