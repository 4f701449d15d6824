"""Shopping list management with automatic aisle categorization."""

import math
from uuid import UUID

from recipefinder.logging_config import LoggingContext, get_logger
from recipefinder.models import ShoppingListItemRow
from recipefinder.normalize.categories import (
    CATEGORY_ORDER,
    GroceryCategory,
    classify,
    parse_category,
)
from recipefinder.normalize.units import MeasurementSystem, normalize_ingredient_name
from recipefinder.plan.recipe_scaling import scale_recipe
from recipefinder.schemas import Recipe, ShoppingListItem
from recipefinder.storage import InMemoryStore, ItemStore

logger = get_logger(__name__)

SHOPPING_LIST_KEY = ShoppingListItemRow.__tablename__


class ShoppingListManager:
    """
    Holds the shopping list in memory and writes it back after every change.

    Items are addressed either by list position (as the list is displayed)
    or by id. Out-of-range positions and unknown ids are ignored.
    """

    def __init__(self, store: ItemStore | None = None):
        self.store = store if store is not None else InMemoryStore()
        self.items: list[ShoppingListItem] = []
        self.load_items()

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load_items(self) -> None:
        rows = self.store.load(SHOPPING_LIST_KEY)
        self.items = [ShoppingListItem.model_validate(row) for row in rows]
        logger.debug(f"Loaded {len(self.items)} shopping list items")

    def save_items(self) -> None:
        self._commit(list(self.items))

    def _commit(self, items: list[ShoppingListItem]) -> None:
        """Write ``items`` to the store, then adopt them. A failed write changes nothing."""
        with LoggingContext(collection=SHOPPING_LIST_KEY):
            self.store.save(SHOPPING_LIST_KEY, [item.model_dump() for item in items])
        self.items = items

    def _replace(self, index: int, **changes: object) -> None:
        if not 0 <= index < len(self.items):
            return
        items = list(self.items)
        items[index] = items[index].model_copy(update=changes)
        self._commit(items)

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_item(
        self,
        name: str,
        quantity: int = 1,
        category: GroceryCategory | str | None = None,
        unit: str = "",
    ) -> ShoppingListItem:
        """Append an item, classifying it from its name when no category is given."""
        detected = parse_category(category) if category is not None else classify(name)
        item = ShoppingListItem(name=name, quantity=quantity, unit=unit, category=detected)
        self._commit([*self.items, item])
        logger.info(f"Added {name!r} to shopping list under {detected.value}")
        return item

    def add_recipe(
        self,
        recipe: Recipe,
        system: MeasurementSystem | str | None = None,
    ) -> list[ShoppingListItem]:
        """
        Add every ingredient of a recipe at its current serving count.

        Ingredients already on the list (same normalized name and unit,
        not yet checked off) have their quantity increased instead of
        being added twice. Quantities are rounded up to whole numbers.
        """
        items = list(self.items)
        touched: dict[UUID, None] = {}

        for scaled in scale_recipe(recipe, system=system):
            quantity = _whole_quantity(scaled.quantity)
            index = _find_open_item(items, scaled.name, scaled.unit)
            if index is not None:
                existing = items[index]
                items[index] = existing.model_copy(update={"quantity": existing.quantity + quantity})
                touched[existing.id] = None
                continue

            item = ShoppingListItem(
                name=scaled.name,
                quantity=quantity,
                unit=scaled.unit,
                category=scaled.category,
            )
            items.append(item)
            touched[item.id] = None

        self._commit(items)
        logger.info(f"Added {len(touched)} ingredients from {recipe.name!r} to shopping list")
        by_id = {item.id: item for item in items}
        return [by_id[item_id] for item_id in touched]

    def _index_of(self, item_id: UUID) -> int | None:
        for index, item in enumerate(self.items):
            if item.id == item_id:
                return index
        return None

    def update_category(self, index: int, category: GroceryCategory | str) -> None:
        self._replace(index, category=parse_category(category))

    def toggle_item(self, index: int) -> None:
        if 0 <= index < len(self.items):
            self._replace(index, is_checked=not self.items[index].is_checked)

    def toggle_checked(self, item_id: UUID) -> None:
        index = self._index_of(item_id)
        if index is not None:
            self.toggle_item(index)

    def update_quantity(self, index: int, quantity: int) -> None:
        self._replace(index, quantity=quantity)

    def delete_item(self, index: int) -> None:
        if not 0 <= index < len(self.items):
            return
        removed = self.items[index]
        self._commit(self.items[:index] + self.items[index + 1 :])
        logger.info(f"Removed {removed.name!r} from shopping list")

    def delete(self, item_id: UUID) -> None:
        index = self._index_of(item_id)
        if index is not None:
            self.delete_item(index)

    def clear_checked_items(self) -> None:
        remaining = [item for item in self.items if not item.is_checked]
        cleared = len(self.items) - len(remaining)
        self._commit(remaining)
        logger.info(f"Cleared {cleared} checked shopping list items")

    def clear_all_items(self) -> None:
        self._commit([])
        logger.info("Cleared shopping list")

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def get(self, item_id: UUID) -> ShoppingListItem | None:
        index = self._index_of(item_id)
        return self.items[index] if index is not None else None

    @property
    def grouped_items(self) -> list[tuple[GroceryCategory, list[ShoppingListItem]]]:
        """Non-empty category groups in aisle order."""
        groups = []
        for category in CATEGORY_ORDER:
            category_items = [item for item in self.items if item.category == category]
            if category_items:
                groups.append((category, category_items))
        return groups

    @property
    def unchecked_count(self) -> int:
        return sum(1 for item in self.items if not item.is_checked)

    @property
    def checked_count(self) -> int:
        return sum(1 for item in self.items if item.is_checked)


def _whole_quantity(quantity: float) -> int:
    """Round a scaled amount up to something you can buy; at least one."""
    if not math.isfinite(quantity) or quantity <= 0:
        return 1
    return math.ceil(quantity)


def _find_open_item(items: list[ShoppingListItem], name: str, unit: str) -> int | None:
    key = normalize_ingredient_name(name)
    for index, item in enumerate(items):
        if item.is_checked or item.unit != unit:
            continue
        if normalize_ingredient_name(item.name) == key:
            return index
    return None
