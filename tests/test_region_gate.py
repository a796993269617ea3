"""Tests for region unlock rules."""

from rockcollector.models.catalog import GameCatalog, UnlockRule, UnlockType
from rockcollector.models.inventory import Inventory
from rockcollector.services.region_gate import is_rule_met, unique_card_count, unlocked_regions


def _inventory(*card_ids: str) -> Inventory:
    inventory = Inventory()
    for card_id in card_ids:
        inventory.add(card_id)
    return inventory


class TestIsRuleMet:
    def test_packs_rule(self) -> None:
        rule = UnlockRule(type=UnlockType.PACKS, value=10)

        assert is_rule_met(rule, packs_opened=9, unique_cards=100) is False
        assert is_rule_met(rule, packs_opened=10, unique_cards=0) is True

    def test_unique_rule(self) -> None:
        rule = UnlockRule(type=UnlockType.UNIQUE, value=15)

        assert is_rule_met(rule, packs_opened=1000, unique_cards=14) is False
        assert is_rule_met(rule, packs_opened=0, unique_cards=15) is True


class TestUnlockedRegions:
    def test_fresh_game_has_starter_regions(self, catalog: GameCatalog) -> None:
        """A packs-0 region is unlocked before anything happens."""
        assert unlocked_regions(catalog, 0, Inventory()) == ["riverbed", "void"]

    def test_packs_opened_unlocks_region(self, catalog: GameCatalog) -> None:
        assert "grassland" not in unlocked_regions(catalog, 9, Inventory())
        assert "grassland" in unlocked_regions(catalog, 10, Inventory())

    def test_unique_cards_unlock_region(self, catalog: GameCatalog) -> None:
        """Unique counts are variant-independent."""
        inventory = _inventory("r-common-1", "r-common-2")
        inventory.add("r-common-1", art=1)
        assert "desert" not in unlocked_regions(catalog, 0, inventory)

        inventory.add("r-rare")
        assert "desert" in unlocked_regions(catalog, 0, inventory)

    def test_catalog_order_is_kept(self, catalog: GameCatalog) -> None:
        inventory = _inventory("r-common-1", "r-common-2", "r-rare")

        assert unlocked_regions(catalog, 10, inventory) == [
            "riverbed",
            "grassland",
            "desert",
            "void",
        ]

    def test_unique_card_count_ignores_copies(self) -> None:
        inventory = _inventory("a", "a", "b")

        assert unique_card_count(inventory) == 2
