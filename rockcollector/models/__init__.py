from rockcollector.models.catalog import (
    CardDefinition,
    GameCatalog,
    PackDefinition,
    RegionDefinition,
    UnlockRule,
    UnlockType,
)
from rockcollector.models.expedition import (
    ExpeditionDefinition,
    ExpeditionSlot,
    PackGrant,
    SlotStatus,
)
from rockcollector.models.failure import (
    CatalogLoadError,
    ConfigurationError,
    FailureDetail,
    FailureKind,
    GameError,
    InvariantViolation,
    NoCandidatesError,
    PreconditionRejected,
)
from rockcollector.models.game_state import (
    DEFAULT_PACK_INVENTORY,
    DisplayedCard,
    GameState,
    MuseumState,
)
from rockcollector.models.inventory import Foil, Inventory, InventoryCardEntry
from rockcollector.models.loot import LootEntry, LootKind
from rockcollector.models.progress import PlayerProgress
from rockcollector.models.rarity import RARITY_ORDER, Rarity, rarity_rank

__all__ = [
    "CardDefinition",
    "CatalogLoadError",
    "ConfigurationError",
    "DEFAULT_PACK_INVENTORY",
    "DisplayedCard",
    "ExpeditionDefinition",
    "ExpeditionSlot",
    "FailureDetail",
    "FailureKind",
    "Foil",
    "GameCatalog",
    "GameError",
    "GameState",
    "Inventory",
    "InventoryCardEntry",
    "InvariantViolation",
    "LootEntry",
    "LootKind",
    "MuseumState",
    "NoCandidatesError",
    "PackDefinition",
    "PackGrant",
    "PlayerProgress",
    "PreconditionRejected",
    "RARITY_ORDER",
    "Rarity",
    "RegionDefinition",
    "SlotStatus",
    "UnlockRule",
    "UnlockType",
    "rarity_rank",
]
