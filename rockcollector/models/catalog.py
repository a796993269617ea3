"""
Static catalog definitions.

Cards, packs and regions are loaded once at startup and are read-only
afterwards. Dict insertion order is the catalog file order; region order
matters for the "first unlocked region" substitution.
"""

from dataclasses import dataclass, field
from enum import Enum

from rockcollector.models.rarity import RARITY_ORDER, Rarity


class UnlockType(str, Enum):
    """Progression counter a region unlock rule is measured against."""

    PACKS = "packs"
    UNIQUE = "unique"


@dataclass(frozen=True, slots=True)
class UnlockRule:
    """Region unlock rule: counter `type` must reach `value`."""

    type: UnlockType
    value: int


@dataclass(frozen=True, slots=True)
class CardDefinition:
    """
    A collectible card ("rock").

    Attributes:
        card_id: Catalog key (e.g., "rock-001")
        name: Display name
        rarity: Rarity tier
        region: Region id the card belongs to
    """

    card_id: str
    name: str
    rarity: Rarity
    region: str


@dataclass(frozen=True, slots=True)
class RegionDefinition:
    """A content region gating which cards are eligible for draws."""

    region_id: str
    unlock: UnlockRule


@dataclass(frozen=True)
class PackDefinition:
    """
    A pack type and its rarity table.

    Chances are percentages out of 100. Tiers missing from the table have
    zero chance. The table is NOT required to sum to 100.
    """

    pack_type: str
    chances: dict[Rarity, float] = field(default_factory=dict)

    def ordered_chances(self) -> list[tuple[Rarity, float]]:
        """Non-zero chances in canonical rarest-first order."""
        return [(r, self.chances[r]) for r in RARITY_ORDER if self.chances.get(r)]


@dataclass(frozen=True)
class GameCatalog:
    """All three static catalogs, keyed by id."""

    cards: dict[str, CardDefinition] = field(default_factory=dict)
    packs: dict[str, PackDefinition] = field(default_factory=dict)
    regions: dict[str, RegionDefinition] = field(default_factory=dict)

    def get_card(self, card_id: str) -> CardDefinition | None:
        """Look up a card definition, None if unknown."""
        return self.cards.get(card_id)

    def cards_where(
        self,
        rarity: Rarity | None = None,
        regions: set[str] | None = None,
    ) -> list[str]:
        """Card ids matching an optional rarity and region filter, in catalog order."""
        return [
            card_id
            for card_id, card in self.cards.items()
            if (rarity is None or card.rarity == rarity)
            and (regions is None or card.region in regions)
        ]
