"""Unit tests for the kitchen inventory manager."""

import pytest

from recipefinder.normalize.categories import GroceryCategory
from recipefinder.plan.kitchen import KITCHEN_ITEMS_KEY, KitchenInventoryManager
from recipefinder.storage import StorageError


class TestKitchenInventory:
    """Tests for KitchenInventoryManager."""

    def test_add_single_ingredient(self, kitchen):
        kitchen.add_item("Tomatoes")
        assert kitchen.has_item("Tomatoes")
        assert len(kitchen.items) == 1
        assert kitchen.items[0].category == GroceryCategory.PRODUCE

    def test_add_multiple_ingredients(self, kitchen):
        for name in ("Tomatoes", "Onions", "Garlic"):
            kitchen.add_item(name)
        assert len(kitchen.items) == 3

    def test_trims_names(self, kitchen):
        item = kitchen.add_item("  Basil  ")
        assert item.name == "Basil"

    def test_blank_names_are_ignored(self, kitchen):
        assert kitchen.add_item("   ") is None
        assert kitchen.items == []

    def test_duplicates_are_ignored_case_insensitively(self, kitchen):
        kitchen.add_item("Milk")
        assert kitchen.add_item("MILK") is None
        assert len(kitchen.items) == 1

    def test_explicit_category(self, kitchen):
        item = kitchen.add_item("Sriracha", category=GroceryCategory.PANTRY)
        assert item.category == GroceryCategory.PANTRY

    def test_remove_ingredient(self, kitchen):
        kitchen.add_item("Onions")
        kitchen.remove_item("onions")
        assert not kitchen.has_item("Onions")

    def test_remove_missing_ingredient(self, kitchen):
        kitchen.add_item("Tomatoes")
        kitchen.remove_item("Onions")
        kitchen.remove_at(3)
        assert len(kitchen.items) == 1
        assert kitchen.has_item("Tomatoes")

    def test_toggle_adds_then_removes(self, kitchen):
        kitchen.toggle_item("Garlic")
        assert kitchen.has_item("garlic")
        kitchen.toggle_item("GARLIC")
        assert not kitchen.has_item("garlic")

    def test_clear_all(self, kitchen, store):
        kitchen.add_item("Rice")
        kitchen.clear_all()
        assert kitchen.items == []
        assert store.load(KITCHEN_ITEMS_KEY) == []

    def test_grouped_items_sorted_by_category_name(self, kitchen):
        for name in ("Salmon", "Apples", "Flour", "Butter", "Pears"):
            kitchen.add_item(name)

        groups = kitchen.grouped_items
        assert [category.value for category, _ in groups] == [
            "Dairy & Eggs",
            "Meat & Seafood",
            "Pantry",
            "Produce",
        ]
        produce = dict(groups)[GroceryCategory.PRODUCE]
        assert [item.name for item in produce] == ["Apples", "Pears"]

    def test_reload_from_store(self, store):
        KitchenInventoryManager(store).add_item("Cumin")
        reloaded = KitchenInventoryManager(store)
        assert reloaded.has_item("cumin")
        assert reloaded.items[0].category == GroceryCategory.SPICES


class TestKitchenFailedSaves:
    """Tests that a failed write leaves the inventory untouched."""

    def test_add_item(self, flaky_store):
        kitchen = KitchenInventoryManager(flaky_store)
        flaky_store.fail = True
        with pytest.raises(StorageError):
            kitchen.add_item("Garlic")
        assert not kitchen.has_item("garlic")

    def test_remove_and_clear(self, flaky_store):
        kitchen = KitchenInventoryManager(flaky_store)
        kitchen.add_item("Garlic")
        kitchen.add_item("Rice")
        flaky_store.fail = True

        with pytest.raises(StorageError):
            kitchen.remove_item("garlic")
        with pytest.raises(StorageError):
            kitchen.clear_all()
        assert [item.name for item in kitchen.items] == ["Garlic", "Rice"]
        assert [item.name for item in KitchenInventoryManager(flaky_store).items] == ["Garlic", "Rice"]
