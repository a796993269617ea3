"""
Rock Collector services.

The progression and loot-resolution engine: weighted draws, region gating,
card resolution, packs, expeditions, minigames and duplicate conversion.
"""

from rockcollector.services.archive import ArchiveSort, sort_archive
from rockcollector.services.card_resolver import CardResolver, FallbackPath, Resolution
from rockcollector.services.catalog_loader import get_catalog, load_catalog
from rockcollector.services.converter import (
    ConversionPreview,
    ConversionSelection,
    SelectedCard,
    best_reward,
    score,
)
from rockcollector.services.engine import GameEngine, TickResult
from rockcollector.services.expeditions import ExpeditionManager, SlotView, format_duration
from rockcollector.services.minigames import (
    FishingEvent,
    FishingGame,
    FishingState,
    MinigameReward,
    SiftingEvent,
    SiftingRound,
    resolve_minigame_reward,
)
from rockcollector.services.pack_opener import PackReveal, RevealedCard, VariantUnlocks, open_pack
from rockcollector.services.region_gate import unique_card_count, unlocked_regions
from rockcollector.services.sessions import PlayerSession, get_player_session
from rockcollector.services.weighted import (
    RandomSource,
    WeightedDraw,
    WeightedEntry,
    weighted_choice,
    weighted_draw,
)

__all__ = [
    # Weighted selection
    "RandomSource",
    "WeightedDraw",
    "WeightedEntry",
    "weighted_choice",
    "weighted_draw",
    # Catalog & gating
    "get_catalog",
    "load_catalog",
    "unique_card_count",
    "unlocked_regions",
    # Card resolution
    "CardResolver",
    "FallbackPath",
    "Resolution",
    # Packs
    "PackReveal",
    "RevealedCard",
    "VariantUnlocks",
    "open_pack",
    # Expeditions
    "ExpeditionManager",
    "SlotView",
    "format_duration",
    # Minigames
    "FishingEvent",
    "FishingGame",
    "FishingState",
    "MinigameReward",
    "SiftingEvent",
    "SiftingRound",
    "resolve_minigame_reward",
    # Conversion
    "ConversionPreview",
    "ConversionSelection",
    "SelectedCard",
    "best_reward",
    "score",
    # Archive
    "ArchiveSort",
    "sort_archive",
    # Engine
    "GameEngine",
    "PlayerSession",
    "TickResult",
    "get_player_session",
]
