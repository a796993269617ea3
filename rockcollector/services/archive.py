"""Archive view: the player's inventory sorted for display."""

from enum import Enum

from rockcollector.models.catalog import GameCatalog
from rockcollector.models.inventory import Foil, Inventory, InventoryCardEntry
from rockcollector.models.rarity import rarity_rank


class ArchiveSort(str, Enum):
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    RARITY_ASC = "rarity-asc"
    RARITY_DESC = "rarity-desc"
    FOIL_FIRST = "foil-first"
    ART_FIRST = "art-first"


def sort_archive(
    inventory: Inventory,
    catalog: GameCatalog,
    mode: ArchiveSort = ArchiveSort.NAME_ASC,
) -> list[InventoryCardEntry]:
    """
    Return owned stacks in display order.

    Stacks whose card is missing from the catalog are left out.
    rarity-asc lists the rarest cards first.
    """
    known = [entry for entry in inventory if entry.card_id in catalog.cards]

    def name(entry: InventoryCardEntry) -> str:
        return catalog.cards[entry.card_id].name.casefold()

    def rank(entry: InventoryCardEntry) -> int:
        return rarity_rank(catalog.cards[entry.card_id].rarity)

    if mode == ArchiveSort.NAME_ASC:
        return sorted(known, key=name)
    if mode == ArchiveSort.NAME_DESC:
        return sorted(known, key=name, reverse=True)
    if mode == ArchiveSort.RARITY_ASC:
        return sorted(known, key=rank)
    if mode == ArchiveSort.RARITY_DESC:
        return sorted(known, key=rank, reverse=True)
    if mode == ArchiveSort.FOIL_FIRST:
        return sorted(known, key=lambda e: (e.foil != Foil.FOIL, name(e)))
    if mode == ArchiveSort.ART_FIRST:
        return sorted(known, key=lambda e: (-e.art, name(e)))
    return known
