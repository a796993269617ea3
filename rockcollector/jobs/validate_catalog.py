"""
Validate the static catalog files.

Run this job after editing cards.json, packs.json or regions.json to catch
malformed entries before the server refuses to start.
"""

import logging
import sys

from rockcollector.models.failure import CatalogLoadError
from rockcollector.models.rarity import RARITY_ORDER
from rockcollector.services.catalog_loader import load_catalog

logger = logging.getLogger(__name__)


def run_validation() -> int:
    """Load the catalog and report per-rarity and per-region card counts."""
    try:
        catalog = load_catalog()
    except CatalogLoadError as e:
        logger.error("Catalog is invalid: %s", e.message)
        return 1

    for rarity in RARITY_ORDER:
        logger.info("%s: %d cards", rarity.value, len(catalog.cards_where(rarity=rarity)))
    for region_id in catalog.regions:
        count = len(catalog.cards_where(regions={region_id}))
        if count == 0:
            logger.warning("Region %s has no cards", region_id)
        else:
            logger.info("Region %s: %d cards", region_id, count)
    for pack in catalog.packs.values():
        for rarity, chance in pack.chances.items():
            if chance > 0 and not catalog.cards_where(rarity=rarity):
                logger.warning(
                    "Pack %s can roll %s but no such cards exist", pack.pack_type, rarity.value
                )
    return 0


def main() -> None:
    """CLI entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(run_validation())


if __name__ == "__main__":
    main()
