"""
Pack Opener.

Opening a pack consumes it and yields CARDS_PER_PACK cards. For each card:
rarity from the pack's table, card id from the region-gated resolver, an
"is new" flag, an independent foil roll and an independent art roll.

INVARIANTS:
- All cards are resolved BEFORE any state changes; a configuration error
  aborts with no mutation.
- "Is new" is checked against the inventory as it was before the batch
  is merged. Two copies of an unseen card in one pack are both new.
"""

import logging
from dataclasses import dataclass

from rockcollector.config import (
    ALT_ART_1_UNLOCK_UNIQUE,
    ALT_ART_2_UNLOCK_UNIQUE,
    ART_CHANCES_ALT_1,
    ART_CHANCES_ALT_2,
    ART_CHANCES_LOCKED,
    CARDS_PER_PACK,
    FOIL_CHANCE,
    FOIL_UNLOCK_PACKS,
)
from rockcollector.models.catalog import GameCatalog
from rockcollector.models.failure import (
    ConfigurationError,
    FailureKind,
    InvariantViolation,
    PreconditionRejected,
)
from rockcollector.models.game_state import GameState
from rockcollector.models.inventory import BASE_ART, Foil
from rockcollector.models.progress import PlayerProgress
from rockcollector.models.rarity import Rarity
from rockcollector.services.card_resolver import CardResolver, FallbackPath
from rockcollector.services.region_gate import unlocked_regions
from rockcollector.services.weighted import RandomSource, percent_chance, roll_percent, roll_rarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VariantUnlocks:
    """Which cosmetic variants can currently drop."""

    foil: bool = False
    alt_art_1: bool = False
    alt_art_2: bool = False

    @classmethod
    def from_progress(cls, progress: PlayerProgress) -> "VariantUnlocks":
        return cls(
            foil=progress.packs_opened >= FOIL_UNLOCK_PACKS,
            alt_art_1=progress.uniques_owned >= ALT_ART_1_UNLOCK_UNIQUE,
            alt_art_2=progress.uniques_owned >= ALT_ART_2_UNLOCK_UNIQUE,
        )

    def art_chances(self) -> tuple[int, int, int]:
        """Active [base, alt 1, alt 2] percentages."""
        if self.alt_art_2:
            return ART_CHANCES_ALT_2
        if self.alt_art_1:
            return ART_CHANCES_ALT_1
        return ART_CHANCES_LOCKED


@dataclass(frozen=True, slots=True)
class RevealedCard:
    """One card of a pack reveal, as handed to the presentation layer."""

    card_id: str
    name: str
    rarity: Rarity
    art: int
    foil: Foil
    is_new: bool
    fallbacks: tuple[FallbackPath, ...] = ()


@dataclass(frozen=True)
class PackReveal:
    """Everything a pack opening produced."""

    pack_type: str
    cards: list[RevealedCard]
    packs_remaining: int
    packs_opened: int


def roll_foil(unlocks: VariantUnlocks, rng: RandomSource) -> Foil:
    """Flat FOIL_CHANCE percent, only once foil is unlocked."""
    if unlocks.foil and percent_chance(FOIL_CHANCE, rng):
        return Foil.FOIL
    return Foil.NORMAL


def roll_art(unlocks: VariantUnlocks, rng: RandomSource) -> int:
    """Roll an art index; alt 2 is checked first, then alt 1, else base."""
    _, alt_1, alt_2 = unlocks.art_chances()
    roll = roll_percent(rng)
    if roll < alt_2:
        return 2
    if roll < alt_1 + alt_2:
        return 1
    return BASE_ART


def open_pack(
    catalog: GameCatalog,
    state: GameState,
    pack_type: str,
    rng: RandomSource,
) -> PackReveal:
    """
    Open one pack of `pack_type`.

    Args:
        catalog: Static catalogs
        state: Game state, mutated on success
        pack_type: Pack key to open
        rng: Random source

    Returns:
        PackReveal with exactly CARDS_PER_PACK cards.

    Raises:
        ConfigurationError: Unknown pack type, empty rarity table, or no
            card can be resolved. State is untouched.
        PreconditionRejected: No pack of that type is owned. State is untouched.
        InvariantViolation: A rarity draw came back without a card.
    """
    pack = catalog.packs.get(pack_type)
    if pack is None:
        raise ConfigurationError(FailureKind.UNKNOWN_PACK, f"Unknown pack type '{pack_type}'")
    if not pack.ordered_chances():
        raise ConfigurationError(
            FailureKind.MISSING_RARITY_TABLE, f"Pack '{pack_type}' has no rarity table"
        )

    player = state.player
    if player.pack_count(pack_type) <= 0:
        raise PreconditionRejected(FailureKind.NO_PACKS_LEFT, f"No {pack_type} packs to open")

    unlocks = VariantUnlocks.from_progress(player)
    unlocked = unlocked_regions(catalog, player.packs_opened, state.inventory)
    resolver = CardResolver(catalog, rng)

    cards: list[RevealedCard] = []
    for _ in range(CARDS_PER_PACK):
        rarity = roll_rarity(pack.chances, rng).value
        resolution = resolver.resolve_by_rarity(rarity, unlocked)
        card_id = resolution.card_id
        if card_id is None:
            raise InvariantViolation(f"Pack draw for {rarity.value} resolved to no card")
        definition = catalog.cards[card_id]

        cards.append(
            RevealedCard(
                card_id=card_id,
                name=definition.name,
                rarity=definition.rarity,
                foil=roll_foil(unlocks, rng),
                art=roll_art(unlocks, rng),
                is_new=not state.inventory.owns_card(card_id),
                fallbacks=resolution.fallbacks,
            )
        )

    # Commit: nothing above touched state
    player.pack_inventory[pack_type] -= 1
    for card in cards:
        state.inventory.add(card.card_id, card.art, card.foil)
    player.packs_opened += 1
    state.refresh_unique_count()

    logger.info(
        "Opened %s pack: %s", pack_type, ", ".join(card.card_id for card in cards)
    )
    return PackReveal(
        pack_type=pack_type,
        cards=cards,
        packs_remaining=player.pack_count(pack_type),
        packs_opened=player.packs_opened,
    )
