"""SQLAlchemy database models."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from recipefinder.database import Base
from recipefinder.normalize.categories import GroceryCategory


def _category_column() -> Enum:
    return Enum(
        GroceryCategory,
        name="grocery_category",
        native_enum=False,
        length=50,
        values_callable=lambda members: [member.value for member in members],
    )


class ShoppingListItemRow(Base):
    """One shopping list entry; ``position`` keeps display order."""

    __tablename__ = "shopping_list_items"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    unit: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    is_checked: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    category: Mapped[GroceryCategory] = mapped_column(
        _category_column(), default=GroceryCategory.OTHER, nullable=False
    )
    date_added: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("idx_shopping_list_items_position", "position"),)


class KitchenItemRow(Base):
    """One ingredient on hand."""

    __tablename__ = "kitchen_items"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[GroceryCategory] = mapped_column(
        _category_column(), default=GroceryCategory.OTHER, nullable=False
    )
    date_added: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("idx_kitchen_items_position", "position"),)


# Collection key -> table, as used by SqlItemStore
ROW_MODELS: dict[str, type[Base]] = {
    ShoppingListItemRow.__tablename__: ShoppingListItemRow,
    KitchenItemRow.__tablename__: KitchenItemRow,
}
