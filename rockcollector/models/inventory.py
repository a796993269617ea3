"""
Card inventory.

INVARIANT: At most one entry per (card_id, art, foil). Acquiring a copy of
an existing key increments its count instead of adding an entry.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class Foil(str, Enum):
    """Foil finish of an owned card."""

    NORMAL = "normal"
    FOIL = "foil"


# Art variant index 0 is the base art; 1 and 2 are alternate art
BASE_ART = 0

VariantKey = tuple[str, int, Foil]


@dataclass(slots=True)
class InventoryCardEntry:
    """A stack of identical owned cards."""

    card_id: str
    art: int = BASE_ART
    foil: Foil = Foil.NORMAL
    count: int = 1

    @property
    def key(self) -> VariantKey:
        return (self.card_id, self.art, self.foil)

    @property
    def spare_copies(self) -> int:
        """Copies that may be given away while keeping one."""
        return max(self.count - 1, 0)


@dataclass
class Inventory:
    """All owned card stacks, in acquisition order."""

    cards: list[InventoryCardEntry] = field(default_factory=list)

    def __iter__(self) -> Iterator[InventoryCardEntry]:
        return iter(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def find(
        self, card_id: str, art: int = BASE_ART, foil: Foil = Foil.NORMAL
    ) -> InventoryCardEntry | None:
        """Find the stack for an exact (card_id, art, foil) key."""
        for entry in self.cards:
            if entry.card_id == card_id and entry.art == art and entry.foil == foil:
                return entry
        return None

    def owns_card(self, card_id: str) -> bool:
        """True if any variant of the card is owned."""
        return any(entry.card_id == card_id for entry in self.cards)

    def add(
        self, card_id: str, art: int = BASE_ART, foil: Foil = Foil.NORMAL
    ) -> InventoryCardEntry:
        """Add one copy, stacking onto an existing entry when the key matches."""
        existing = self.find(card_id, art, foil)
        if existing is not None:
            existing.count += 1
            return existing

        entry = InventoryCardEntry(card_id=card_id, art=art, foil=foil, count=1)
        self.cards.append(entry)
        return entry

    def unique_card_count(self) -> int:
        """Distinct card ids owned, ignoring variants."""
        return len({entry.card_id for entry in self.cards})

    def duplicates(self) -> list[InventoryCardEntry]:
        """Stacks holding more than one copy."""
        return [entry for entry in self.cards if entry.count > 1]
