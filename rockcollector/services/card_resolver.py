"""
Card Resolver: picks a concrete card id for a draw.

Two entry points:

- resolve_by_rarity: pack draws. Candidates are cards of the rolled rarity
  in an unlocked region. An empty pool falls back to unlocked commons.
- resolve_by_region_wild: minigame draws. A locked region is substituted
  with the first unlocked one, a rarity is rolled from the wild table, and
  an empty rarity bucket falls back to any card in the region.

Every fallback that fires is recorded on the Resolution so callers and
tests can tell which path produced the card.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from rockcollector.config import STARTER_REGION, WILD_RARITY_CHANCES
from rockcollector.models.catalog import GameCatalog
from rockcollector.models.failure import InvariantViolation, NoCandidatesError
from rockcollector.models.rarity import Rarity
from rockcollector.services.weighted import (
    RandomSource,
    WeightedEntry,
    pick_uniform,
    weighted_choice,
)

logger = logging.getLogger(__name__)


class FallbackPath(str, Enum):
    """Substitution policies a resolution may have gone through."""

    COMMON_TIER = "common_tier"
    REGION_SUBSTITUTED = "region_substituted"
    ANY_RARITY_IN_REGION = "any_rarity_in_region"


@dataclass(frozen=True)
class Resolution:
    """
    Result of a card draw.

    Attributes:
        card_id: The chosen card, or None when a wild draw found nothing
        rarity: The rarity that was requested or rolled
        region: Region the draw was scoped to (wild draws only)
        fallbacks: Fallback paths taken, in the order they fired
    """

    card_id: str | None
    rarity: Rarity
    region: str | None = None
    fallbacks: tuple[FallbackPath, ...] = field(default_factory=tuple)

    @property
    def via_fallback(self) -> bool:
        return bool(self.fallbacks)


WILD_RARITY_TABLE: tuple[WeightedEntry[Rarity], ...] = tuple(
    WeightedEntry(value=rarity, weight=chance) for rarity, chance in WILD_RARITY_CHANCES
)


class CardResolver:
    """Region-aware card picker over a fixed catalog."""

    def __init__(self, catalog: GameCatalog, rng: RandomSource) -> None:
        self.catalog = catalog
        self.rng = rng

    def resolve_by_rarity(self, rarity: Rarity, unlocked: Sequence[str]) -> Resolution:
        """
        Pick a card of `rarity` from the unlocked regions.

        Args:
            rarity: Rarity tier rolled from a pack table
            unlocked: Currently unlocked region ids

        Returns:
            Resolution for the chosen card. If no card of that rarity is
            unlocked, an unlocked common is chosen instead.

        Raises:
            NoCandidatesError: If not even an unlocked common exists
        """
        regions = set(unlocked)
        candidates = self.catalog.cards_where(rarity=rarity, regions=regions)
        if candidates:
            return Resolution(card_id=pick_uniform(candidates, self.rng), rarity=rarity)

        logger.warning("No %s found in unlocked regions. Falling back to common.", rarity.value)
        fallback = self.catalog.cards_where(rarity=Rarity.COMMON, regions=regions)
        if not fallback:
            raise NoCandidatesError(
                f"No {rarity.value} or common cards available in unlocked regions "
                f"{sorted(regions)}"
            )

        return Resolution(
            card_id=pick_uniform(fallback, self.rng),
            rarity=rarity,
            fallbacks=(FallbackPath.COMMON_TIER,),
        )

    def resolve_by_region_wild(self, region: str, unlocked: Sequence[str]) -> Resolution:
        """
        Pick a card from `region` using the wild rarity table.

        Args:
            region: Target region of the minigame
            unlocked: Currently unlocked region ids, in catalog order

        Returns:
            Resolution whose card_id is None when the region holds no cards
            at all (the caller treats that as "no reward").

        Raises:
            InvariantViolation: If the target is locked and no region at
                all is unlocked (the starter region must always be)
        """
        fallbacks: list[FallbackPath] = []

        if region not in unlocked:
            if not unlocked:
                logger.error(
                    "No regions unlocked; substituting starter region %s", STARTER_REGION
                )
                if STARTER_REGION not in self.catalog.regions:
                    raise InvariantViolation(
                        f"No region is unlocked and starter region '{STARTER_REGION}' "
                        "is not in the catalog"
                    )
                substitute = STARTER_REGION
            else:
                substitute = unlocked[0]
            logger.warning("Region %s is locked; using %s", region, substitute)
            region = substitute
            fallbacks.append(FallbackPath.REGION_SUBSTITUTED)

        rarity = weighted_choice(WILD_RARITY_TABLE, self.rng)

        matches = self.catalog.cards_where(rarity=rarity, regions={region})
        if matches:
            return Resolution(
                card_id=pick_uniform(matches, self.rng),
                rarity=rarity,
                region=region,
                fallbacks=tuple(fallbacks),
            )

        fallbacks.append(FallbackPath.ANY_RARITY_IN_REGION)
        any_in_region = self.catalog.cards_where(regions={region})
        if not any_in_region:
            logger.warning("Region %s has no cards; wild draw yields nothing", region)
            return Resolution(
                card_id=None, rarity=rarity, region=region, fallbacks=tuple(fallbacks)
            )

        logger.debug("No %s cards in %s; picking any card in region", rarity.value, region)
        return Resolution(
            card_id=pick_uniform(any_in_region, self.rng),
            rarity=rarity,
            region=region,
            fallbacks=tuple(fallbacks),
        )
