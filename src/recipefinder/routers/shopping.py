"""API routes for the shopping list."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from recipefinder.logging_config import get_logger
from recipefinder.normalize.categories import GroceryCategory
from recipefinder.normalize.units import MeasurementSystem
from recipefinder.plan.shopping_list import ShoppingListManager
from recipefinder.routers.deps import get_shopping_list_manager, storage_unavailable
from recipefinder.schemas import Recipe, ShoppingListItem
from recipefinder.storage import StorageError

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/shopping-list", tags=["shopping-list"])


class AddItemRequest(BaseModel):
    """New shopping list entry; category is detected when omitted."""

    name: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
    unit: str = ""
    category: GroceryCategory | None = None


class UpdateItemRequest(BaseModel):
    """Partial update of a shopping list entry."""

    quantity: int | None = Field(default=None, ge=1)
    category: GroceryCategory | None = None


class AddRecipeRequest(BaseModel):
    """Add all ingredients of a recipe."""

    recipe: Recipe
    system: MeasurementSystem | None = None


class CategoryGroup(BaseModel):
    """Items in one aisle category."""

    category: GroceryCategory
    items: list[ShoppingListItem]


class ShoppingListResponse(BaseModel):
    """The full shopping list, grouped by category."""

    groups: list[CategoryGroup]
    total: int
    checked: int
    unchecked: int


def _response(manager: ShoppingListManager) -> ShoppingListResponse:
    return ShoppingListResponse(
        groups=[CategoryGroup(category=c, items=items) for c, items in manager.grouped_items],
        total=len(manager.items),
        checked=manager.checked_count,
        unchecked=manager.unchecked_count,
    )


def _index_or_404(manager: ShoppingListManager, item_id: UUID) -> int:
    for index, item in enumerate(manager.items):
        if item.id == item_id:
            return index
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Shopping list item {item_id} not found",
    )


@router.get("", response_model=ShoppingListResponse)
def get_shopping_list(
    manager: ShoppingListManager = Depends(get_shopping_list_manager),
) -> ShoppingListResponse:
    """Get the shopping list grouped in aisle order."""
    return _response(manager)


@router.post("/items", response_model=ShoppingListItem, status_code=status.HTTP_201_CREATED)
def add_item(
    request: AddItemRequest,
    manager: ShoppingListManager = Depends(get_shopping_list_manager),
) -> ShoppingListItem:
    """Add an item to the shopping list."""
    try:
        return manager.add_item(
            request.name,
            quantity=request.quantity,
            category=request.category,
            unit=request.unit,
        )
    except StorageError as e:
        raise storage_unavailable(e)


@router.post(
    "/recipes",
    response_model=list[ShoppingListItem],
    status_code=status.HTTP_201_CREATED,
)
def add_recipe(
    request: AddRecipeRequest,
    manager: ShoppingListManager = Depends(get_shopping_list_manager),
) -> list[ShoppingListItem]:
    """Add a recipe's ingredients at its current serving count."""
    logger.info(f"Adding recipe {request.recipe.name!r} to shopping list")
    try:
        return manager.add_recipe(request.recipe, system=request.system)
    except StorageError as e:
        raise storage_unavailable(e)


@router.patch("/items/{item_id}", response_model=ShoppingListItem)
def update_item(
    item_id: UUID,
    request: UpdateItemRequest,
    manager: ShoppingListManager = Depends(get_shopping_list_manager),
) -> ShoppingListItem:
    """Change an item's quantity or category."""
    index = _index_or_404(manager, item_id)
    try:
        if request.quantity is not None:
            manager.update_quantity(index, request.quantity)
        if request.category is not None:
            manager.update_category(index, request.category)
    except StorageError as e:
        raise storage_unavailable(e)
    return manager.items[index]


@router.post("/items/{item_id}/toggle", response_model=ShoppingListItem)
def toggle_item(
    item_id: UUID,
    manager: ShoppingListManager = Depends(get_shopping_list_manager),
) -> ShoppingListItem:
    """Check or uncheck an item."""
    index = _index_or_404(manager, item_id)
    try:
        manager.toggle_item(index)
    except StorageError as e:
        raise storage_unavailable(e)
    return manager.items[index]


@router.delete("/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_item(
    item_id: UUID,
    manager: ShoppingListManager = Depends(get_shopping_list_manager),
) -> None:
    """Remove an item."""
    index = _index_or_404(manager, item_id)
    try:
        manager.delete_item(index)
    except StorageError as e:
        raise storage_unavailable(e)


@router.delete("/checked", response_model=ShoppingListResponse)
def clear_checked(
    manager: ShoppingListManager = Depends(get_shopping_list_manager),
) -> ShoppingListResponse:
    """Remove every checked item."""
    try:
        manager.clear_checked_items()
    except StorageError as e:
        raise storage_unavailable(e)
    return _response(manager)


@router.delete("", response_model=ShoppingListResponse)
def clear_all(
    manager: ShoppingListManager = Depends(get_shopping_list_manager),
) -> ShoppingListResponse:
    """Empty the shopping list."""
    try:
        manager.clear_all_items()
    except StorageError as e:
        raise storage_unavailable(e)
    return _response(manager)
