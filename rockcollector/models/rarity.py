"""
Rarity tiers.

INVARIANT: RARITY_ORDER runs rarest -> most common. Every cumulative
probability roll walks sparse rarity tables in this order.
"""

from enum import Enum


class Rarity(str, Enum):
    """The six rarity tiers a card can carry."""

    SPECIAL = "special"
    LEGENDARY = "legendary"
    MYTHIC = "mythic"
    RARE = "rare"
    UNCOMMON = "uncommon"
    COMMON = "common"


RARITY_ORDER: tuple[Rarity, ...] = (
    Rarity.SPECIAL,
    Rarity.LEGENDARY,
    Rarity.MYTHIC,
    Rarity.RARE,
    Rarity.UNCOMMON,
    Rarity.COMMON,
)


def rarity_rank(rarity: Rarity) -> int:
    """Position in RARITY_ORDER (0 = rarest)."""
    return RARITY_ORDER.index(rarity)
