"""
Region unlock gate.

A region is unlocked iff its rule's counter has reached the rule's value:
packs opened for "packs" rules, distinct card ids owned for "unique" rules.
Recomputed on every call so it always reflects the latest inventory.
"""

from rockcollector.models.catalog import GameCatalog, UnlockRule, UnlockType
from rockcollector.models.inventory import Inventory


def unique_card_count(inventory: Inventory) -> int:
    """Distinct card ids in the inventory, variant-independent."""
    return inventory.unique_card_count()


def is_rule_met(rule: UnlockRule, packs_opened: int, unique_cards: int) -> bool:
    """Check a single unlock rule against the progression counters."""
    if rule.type == UnlockType.PACKS:
        return packs_opened >= rule.value
    if rule.type == UnlockType.UNIQUE:
        return unique_cards >= rule.value
    return False


def unlocked_regions(catalog: GameCatalog, packs_opened: int, inventory: Inventory) -> list[str]:
    """
    Regions currently unlocked, in catalog order.

    Args:
        catalog: Game catalog holding region rules
        packs_opened: Lifetime packs opened
        inventory: Current card inventory

    Returns:
        Unlocked region ids. Catalog order is kept so the first entry is a
        stable substitute for locked-region draws.
    """
    uniques = unique_card_count(inventory)
    return [
        region_id
        for region_id, region in catalog.regions.items()
        if is_rule_met(region.unlock, packs_opened, uniques)
    ]
