"""
Duplicate Converter.

Spare duplicate copies are scored into points by rarity; the points buy
the single best pack whose threshold they meet.

INVARIANT: Conversion never takes the last copy of a stack. Only stacks
with count > 1 are selectable and a selection per stack is capped at
count - 1. confirm() re-checks the cap against the live inventory.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field

from rockcollector.config import CONVERSION_POINTS, PACK_THRESHOLDS
from rockcollector.models.catalog import GameCatalog
from rockcollector.models.failure import FailureKind, PreconditionRejected
from rockcollector.models.game_state import GameState
from rockcollector.models.inventory import Foil, InventoryCardEntry, VariantKey
from rockcollector.models.rarity import Rarity

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SelectedCard:
    """Copies of one inventory stack marked for conversion."""

    card_id: str
    art: int
    foil: Foil
    count: int

    @property
    def key(self) -> VariantKey:
        return (self.card_id, self.art, self.foil)


@dataclass(frozen=True)
class ConversionPreview:
    """Current points and the pack they would buy."""

    points: int
    reward: str | None
    selected: list[SelectedCard] = field(default_factory=list)


def card_points(
    card_id: str,
    catalog: GameCatalog,
    points_table: Mapping[Rarity, int] = CONVERSION_POINTS,
) -> int:
    """Point value of one copy of a card; unknown cards are worth nothing."""
    card = catalog.get_card(card_id)
    if card is None:
        logger.warning("Card %s is not in the catalog; scoring 0 points", card_id)
        return 0
    return points_table.get(card.rarity, 0)


def score(
    selection: Iterable[SelectedCard],
    catalog: GameCatalog,
    points_table: Mapping[Rarity, int] = CONVERSION_POINTS,
) -> int:
    """Sum of per-copy point values times selected counts."""
    return sum(
        card_points(selected.card_id, catalog, points_table) * selected.count
        for selected in selection
    )


def best_reward(
    points: int,
    thresholds: Sequence[tuple[str, int]] = PACK_THRESHOLDS,
) -> str | None:
    """First (highest) pack whose threshold `points` meets, else None."""
    for pack_type, threshold in thresholds:
        if points >= threshold:
            return pack_type
    return None


class ConversionSelection:
    """
    Ephemeral multiset of duplicates chosen for conversion.

    Never persisted; cleared when the player leaves the packs view or
    after a confirm.
    """

    def __init__(self) -> None:
        self._entries: list[SelectedCard] = []

    def __iter__(self) -> Iterator[SelectedCard]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[SelectedCard]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def find(self, key: VariantKey) -> SelectedCard | None:
        for entry in self._entries:
            if entry.key == key:
                return entry
        return None

    def toggle(self, stack: InventoryCardEntry) -> int:
        """
        Cycle the selected count for an inventory stack.

        Adds one copy per call up to count - 1; a call at the cap removes
        the stack from the selection.

        Returns:
            The stack's selected count after the call (0 if removed).

        Raises:
            PreconditionRejected: If the stack has no spare copies
        """
        cap = stack.spare_copies
        if cap < 1:
            raise PreconditionRejected(
                FailureKind.INVALID_SELECTION, f"{stack.card_id} has no duplicate copies"
            )

        entry = self.find(stack.key)
        if entry is None:
            self._entries.append(
                SelectedCard(card_id=stack.card_id, art=stack.art, foil=stack.foil, count=1)
            )
            return 1
        if entry.count < cap:
            entry.count += 1
            return entry.count

        self._entries.remove(entry)
        return 0

    def preview(self, catalog: GameCatalog) -> ConversionPreview:
        points = score(self._entries, catalog)
        return ConversionPreview(points=points, reward=best_reward(points), selected=self.entries)


def confirm(
    state: GameState,
    selection: ConversionSelection,
    catalog: GameCatalog,
) -> ConversionPreview:
    """
    Trade the selected duplicates for one pack.

    Raises:
        PreconditionRejected: If the points meet no threshold, or a
            selection would take a stack below one copy. Nothing changes.
    """
    result = selection.preview(catalog)
    if result.reward is None:
        raise PreconditionRejected(
            FailureKind.NO_QUALIFYING_REWARD,
            f"{result.points} points do not reach any pack threshold",
        )

    stacks: list[tuple[InventoryCardEntry, int]] = []
    for selected in selection:
        stack = state.inventory.find(selected.card_id, selected.art, selected.foil)
        if stack is None or selected.count > stack.spare_copies:
            raise PreconditionRejected(
                FailureKind.INVALID_SELECTION,
                f"Selection of {selected.count} {selected.card_id} exceeds spare copies",
            )
        stacks.append((stack, selected.count))

    for stack, count in stacks:
        stack.count -= count
    state.player.add_packs(result.reward, 1)
    selection.clear()

    logger.info("Converted %d points into a %s pack", result.points, result.reward)
    return result
