"""
Weighted random selection.

Every loot table in the game is resolved here. Weights are percentages out
of 100. One uniform draw r in [0, 100) is compared against a running
cumulative sum in the table's order; the first entry whose cumulative
weight exceeds r wins. If no entry does (table sums below 100), the LAST
entry is returned.

Sparse rarity tables are first laid out in RARITY_ORDER (rarest first) so
a dict's key order can never change the outcome.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from rockcollector.models.rarity import RARITY_ORDER, Rarity

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1). random.Random fits."""

    def random(self) -> float: ...


@dataclass(frozen=True, slots=True)
class WeightedEntry(Generic[T]):
    """A table row: `value` is chosen with `weight` percent chance."""

    value: T
    weight: float


@dataclass(frozen=True, slots=True)
class WeightedDraw(Generic[T]):
    """
    Outcome of a weighted draw.

    Attributes:
        value: The selected value
        roll: The draw in [0, 100) that selected it
        fell_through: True if no cumulative weight exceeded the roll and the
            last entry was returned as the catch-all
    """

    value: T
    roll: float
    fell_through: bool = False


def roll_percent(rng: RandomSource) -> float:
    """One uniform draw in [0, 100)."""
    return rng.random() * 100


def percent_chance(percent: float, rng: RandomSource) -> bool:
    """True with `percent` percent probability."""
    return roll_percent(rng) < percent


def pick_uniform(items: Sequence[T], rng: RandomSource) -> T:
    """Uniform pick from a non-empty sequence."""
    if not items:
        raise ValueError("Cannot pick from an empty sequence")
    index = min(int(rng.random() * len(items)), len(items) - 1)
    return items[index]


def rarity_entries(table: Mapping[Rarity, float]) -> list[WeightedEntry[Rarity]]:
    """Lay a sparse rarity table out in canonical rarest-first order."""
    return [
        WeightedEntry(value=rarity, weight=table[rarity])
        for rarity in RARITY_ORDER
        if table.get(rarity)
    ]


def weighted_draw(entries: Sequence[WeightedEntry[T]], rng: RandomSource) -> WeightedDraw[T]:
    """
    Draw one entry from an ordered weighted table.

    Args:
        entries: Ordered (value, weight) rows; weights are percentages
        rng: Random source

    Returns:
        WeightedDraw carrying the selected value and whether the catch-all
        path was taken.

    Raises:
        ValueError: If the table is empty
    """
    if not entries:
        raise ValueError("Cannot draw from an empty weighted table")

    roll = roll_percent(rng)
    cumulative = 0.0
    for entry in entries:
        cumulative += entry.weight
        if roll < cumulative:
            return WeightedDraw(value=entry.value, roll=roll)

    logger.warning(
        "Weighted roll %.4f exceeded table total %.4f; using last entry %r",
        roll,
        cumulative,
        entries[-1].value,
    )
    return WeightedDraw(value=entries[-1].value, roll=roll, fell_through=True)


def weighted_choice(entries: Sequence[WeightedEntry[T]], rng: RandomSource) -> T:
    """Shorthand for weighted_draw(...).value."""
    return weighted_draw(entries, rng).value


def roll_rarity(table: Mapping[Rarity, float], rng: RandomSource) -> WeightedDraw[Rarity]:
    """Draw a rarity from a sparse rarity table."""
    return weighted_draw(rarity_entries(table), rng)
