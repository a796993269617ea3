"""
Static catalog loader.

Loads cards.json, packs.json and regions.json once at startup. Any file
that is missing or malformed raises CatalogLoadError: the game must not
initialize on partial content.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from rockcollector.config import settings
from rockcollector.models.catalog import (
    CardDefinition,
    GameCatalog,
    PackDefinition,
    RegionDefinition,
    UnlockRule,
    UnlockType,
)
from rockcollector.models.failure import CatalogLoadError
from rockcollector.models.rarity import Rarity

logger = logging.getLogger(__name__)

CARDS_FILE = "cards.json"
PACKS_FILE = "packs.json"
REGIONS_FILE = "regions.json"


class CardRecord(BaseModel):
    """Raw card entry as stored in cards.json."""

    name: str
    rarity: Rarity
    region: str


class UnlockRecord(BaseModel):
    type: UnlockType
    value: int


class RegionRecord(BaseModel):
    """Raw region entry as stored in regions.json."""

    unlock: UnlockRecord


_cards_adapter = TypeAdapter(dict[str, CardRecord])
_regions_adapter = TypeAdapter(dict[str, RegionRecord])
_packs_adapter = TypeAdapter(dict[str, dict[str, Any]])
_chance_adapter = TypeAdapter(float)


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise CatalogLoadError(f"Catalog file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogLoadError(f"Catalog file {path.name} is unreadable: {e}") from e


def parse_cards(raw: Any) -> dict[str, CardDefinition]:
    """Validate raw cards.json content into card definitions."""
    try:
        records = _cards_adapter.validate_python(raw)
    except ValidationError as e:
        raise CatalogLoadError(f"Malformed card catalog: {e}") from e

    return {
        card_id: CardDefinition(
            card_id=card_id, name=record.name, rarity=record.rarity, region=record.region
        )
        for card_id, record in records.items()
    }


def parse_regions(raw: Any) -> dict[str, RegionDefinition]:
    """Validate raw regions.json content into region definitions."""
    try:
        records = _regions_adapter.validate_python(raw)
    except ValidationError as e:
        raise CatalogLoadError(f"Malformed region catalog: {e}") from e

    return {
        region_id: RegionDefinition(
            region_id=region_id,
            unlock=UnlockRule(type=record.unlock.type, value=record.unlock.value),
        )
        for region_id, record in records.items()
    }


def parse_packs(raw: Any) -> dict[str, PackDefinition]:
    """
    Validate raw packs.json content into pack definitions.

    Only rarity keys are read from each pack entry; other keys (display
    names, artwork) are ignored.
    """
    try:
        records = _packs_adapter.validate_python(raw)
    except ValidationError as e:
        raise CatalogLoadError(f"Malformed pack catalog: {e}") from e

    rarity_values = {r.value for r in Rarity}
    packs: dict[str, PackDefinition] = {}

    for pack_type, record in records.items():
        chances: dict[Rarity, float] = {}
        for key, value in record.items():
            if key not in rarity_values:
                continue
            try:
                chance = _chance_adapter.validate_python(value)
            except ValidationError as e:
                raise CatalogLoadError(f"Pack '{pack_type}' has a non-numeric {key} chance") from e
            if chance < 0:
                raise CatalogLoadError(f"Pack '{pack_type}' has a negative {key} chance")
            chances[Rarity(key)] = chance

        total = sum(chances.values())
        if total != 100:
            logger.warning("Pack '%s' chances sum to %s, not 100", pack_type, total)

        packs[pack_type] = PackDefinition(pack_type=pack_type, chances=chances)

    return packs


def load_catalog(data_dir: Path | None = None) -> GameCatalog:
    """
    Load all three static catalogs.

    Args:
        data_dir: Directory holding the catalog files. Defaults to settings.data_dir

    Returns:
        The loaded GameCatalog.

    Raises:
        CatalogLoadError: If any catalog is missing or malformed
    """
    if data_dir is None:
        data_dir = settings.data_dir

    cards = parse_cards(_read_json(data_dir / CARDS_FILE))
    packs = parse_packs(_read_json(data_dir / PACKS_FILE))
    regions = parse_regions(_read_json(data_dir / REGIONS_FILE))

    for card in cards.values():
        if card.region not in regions:
            raise CatalogLoadError(
                f"Card '{card.card_id}' references unknown region '{card.region}'"
            )

    logger.info(
        "Loaded catalog: %d cards, %d packs, %d regions", len(cards), len(packs), len(regions)
    )
    return GameCatalog(cards=cards, packs=packs, regions=regions)


@lru_cache(maxsize=1)
def get_catalog() -> GameCatalog:
    """
    Get the cached game catalog.

    Loaded from settings.data_dir on first call, read-only afterwards.

    Raises:
        CatalogLoadError: If any catalog is missing or malformed
    """
    return load_catalog()
