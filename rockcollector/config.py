from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from rockcollector.models.expedition import ExpeditionDefinition
from rockcollector.models.loot import LootEntry, LootKind
from rockcollector.models.rarity import Rarity

DATA_DIR = Path(__file__).parent.parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "Rock Collector"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./rockcollector.db"

    # Directory holding cards.json, packs.json and regions.json
    data_dir: Path = DATA_DIR

    # Storage key the save blob lives under
    save_key: str = "rockGameState"


settings = Settings()


# =============================================================================
# PACKS & VARIANTS
# =============================================================================

CARDS_PER_PACK = 3

# Foil unlocks on packs opened, alternate art on unique cards owned
FOIL_UNLOCK_PACKS = 50
ALT_ART_1_UNLOCK_UNIQUE = 100
ALT_ART_2_UNLOCK_UNIQUE = 200

FOIL_CHANCE = 1

# Percentages for [base art, alt art 1, alt art 2]
ART_CHANCES_LOCKED = (100, 0, 0)
ART_CHANCES_ALT_1 = (99, 1, 0)
ART_CHANCES_ALT_2 = (98, 1, 1)


# =============================================================================
# WILD DRAWS (minigame card grants)
# =============================================================================

# Always unlocked; substitute when no region is unlocked at all
STARTER_REGION = "riverbed"

WILD_RARITY_CHANCES: tuple[tuple[Rarity, float], ...] = (
    (Rarity.LEGENDARY, 0.2),
    (Rarity.MYTHIC, 0.5),
    (Rarity.RARE, 9.3),
    (Rarity.UNCOMMON, 20),
    (Rarity.COMMON, 70),
)


# =============================================================================
# DUPLICATE CONVERSION
# =============================================================================

CONVERSION_POINTS: dict[Rarity, int] = {
    Rarity.COMMON: 1,
    Rarity.UNCOMMON: 3,
    Rarity.RARE: 10,
    Rarity.MYTHIC: 30,
    Rarity.LEGENDARY: 100,
    Rarity.SPECIAL: 0,
}

# Highest threshold first
PACK_THRESHOLDS: tuple[tuple[str, int], ...] = (
    ("collector", 1000),
    ("deluxe", 250),
    ("advanced", 100),
    ("explorer", 30),
    ("basic", 10),
)


# =============================================================================
# EXPEDITIONS
# =============================================================================

EXPEDITIONS: tuple[ExpeditionDefinition, ...] = (
    ExpeditionDefinition(
        name="Short Expedition",
        duration_ms=5 * 60 * 1000,
        duration_text="5m",
        base_pack="basic",
        bonus_pack="explorer",
        bonus_chance=5,
    ),
    ExpeditionDefinition(
        name="Medium Expedition",
        duration_ms=60 * 60 * 1000,
        duration_text="1h",
        base_pack="explorer",
        bonus_pack="advanced",
        bonus_chance=5,
    ),
    ExpeditionDefinition(
        name="Long Expedition",
        duration_ms=8 * 60 * 60 * 1000,
        duration_text="8h",
        base_pack="advanced",
        bonus_pack="deluxe",
        bonus_chance=5,
    ),
)


# =============================================================================
# MINIGAMES
# =============================================================================

FISHING_REWARDS: tuple[LootEntry, ...] = (
    LootEntry(LootKind.PACK, 1, pack_type="advanced"),
    LootEntry(LootKind.PACK, 4, pack_type="explorer"),
    LootEntry(LootKind.PACK, 35, pack_type="basic"),
    LootEntry(LootKind.CARD, 30, region="riverbed"),
    LootEntry(LootKind.NONE, 30, message="An old boot..."),
)

SIFTING_REWARDS: tuple[LootEntry, ...] = (
    LootEntry(LootKind.PACK, 1, pack_type="advanced"),
    LootEntry(LootKind.PACK, 4, pack_type="explorer"),
    LootEntry(LootKind.PACK, 35, pack_type="basic"),
    LootEntry(LootKind.CARD, 30, region="desert"),
    LootEntry(LootKind.NONE, 30, message="Just sand..."),
)

# Rocks that can show up in the sifting sieve
MINIGAME_ROCK_LIST: tuple[str, ...] = (
    "rock-001",
    "rock-002",
    "rock-021",
    "rock-022",
    "rock-009",
    "rock-010",
    "rock-041",
    "rock-026",
    "rock-020",
    "rock-161",
    "rock-179",
    "rock-025",
)

# Fishing: bite arrives 3-8s after casting and must be reeled within 2s
FISHING_WAIT_MIN_MS = 3000
FISHING_WAIT_SPREAD_MS = 5000
FISHING_BITE_WINDOW_MS = 2000
FISHING_CATCH_COOLDOWN_MS = 2500

SIFTING_TARGET_COUNT = 3
SIFTING_DECOY_COUNT = 7
SIFTING_ROUND_MS = 20 * 1000
