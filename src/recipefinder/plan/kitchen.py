"""Kitchen inventory: what the user already has on hand."""

from recipefinder.logging_config import LoggingContext, get_logger
from recipefinder.models import KitchenItemRow
from recipefinder.normalize.categories import GroceryCategory, classify, parse_category
from recipefinder.schemas import KitchenItem
from recipefinder.storage import InMemoryStore, ItemStore

logger = get_logger(__name__)

KITCHEN_ITEMS_KEY = KitchenItemRow.__tablename__


class KitchenInventoryManager:
    """Case-insensitive set of kitchen items, persisted after every change."""

    def __init__(self, store: ItemStore | None = None):
        self.store = store if store is not None else InMemoryStore()
        self.items: list[KitchenItem] = [
            KitchenItem.model_validate(row) for row in self.store.load(KITCHEN_ITEMS_KEY)
        ]

    def _commit(self, items: list[KitchenItem]) -> None:
        with LoggingContext(collection=KITCHEN_ITEMS_KEY):
            self.store.save(KITCHEN_ITEMS_KEY, [item.model_dump() for item in items])
        self.items = items

    def _find(self, name: str) -> int | None:
        key = name.strip().lower()
        for index, item in enumerate(self.items):
            if item.name.lower() == key:
                return index
        return None

    def add_item(self, name: str, category: GroceryCategory | str | None = None) -> KitchenItem | None:
        """
        Add an item unless the name is blank or already present.

        Returns the new item, or None when nothing was added.
        """
        trimmed = name.strip()
        if not trimmed:
            return None
        if self._find(trimmed) is not None:
            logger.debug(f"{trimmed!r} already in kitchen, skipping")
            return None

        detected = parse_category(category) if category is not None else classify(trimmed)
        item = KitchenItem(name=trimmed, category=detected)
        self._commit([*self.items, item])
        logger.info(f"Added {trimmed!r} to kitchen under {detected.value}")
        return item

    def remove_at(self, index: int) -> None:
        if not 0 <= index < len(self.items):
            return
        removed = self.items[index]
        self._commit(self.items[:index] + self.items[index + 1 :])
        logger.info(f"Removed {removed.name!r} from kitchen")

    def remove_item(self, name: str) -> None:
        index = self._find(name)
        if index is not None:
            self.remove_at(index)

    def toggle_item(self, name: str, category: GroceryCategory | str | None = None) -> None:
        """Remove the item if present, otherwise add it."""
        index = self._find(name)
        if index is not None:
            self.remove_at(index)
        else:
            self.add_item(name, category)

    def has_item(self, name: str) -> bool:
        return self._find(name) is not None

    def clear_all(self) -> None:
        self._commit([])
        logger.info("Cleared kitchen inventory")

    @property
    def grouped_items(self) -> list[tuple[GroceryCategory, list[KitchenItem]]]:
        """Groups keyed by category, sorted alphabetically by category name."""
        categories = sorted({item.category for item in self.items}, key=lambda c: c.value)
        return [
            (category, [item for item in self.items if item.category == category])
            for category in categories
        ]
