"""API routes for the kitchen inventory."""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from recipefinder.normalize.categories import GroceryCategory
from recipefinder.plan.kitchen import KitchenInventoryManager
from recipefinder.routers.deps import get_kitchen_manager, storage_unavailable
from recipefinder.schemas import KitchenItem
from recipefinder.storage import StorageError

router = APIRouter(prefix="/api/v1/kitchen", tags=["kitchen"])


class AddKitchenItemRequest(BaseModel):
    """Ingredient to mark as on hand."""

    name: str = Field(min_length=1)
    category: GroceryCategory | None = None


class KitchenGroup(BaseModel):
    category: GroceryCategory
    items: list[KitchenItem]


class KitchenResponse(BaseModel):
    """Kitchen inventory grouped by category."""

    groups: list[KitchenGroup]
    total: int


def _response(manager: KitchenInventoryManager) -> KitchenResponse:
    return KitchenResponse(
        groups=[KitchenGroup(category=c, items=items) for c, items in manager.grouped_items],
        total=len(manager.items),
    )


@router.get("", response_model=KitchenResponse)
def get_kitchen(
    manager: KitchenInventoryManager = Depends(get_kitchen_manager),
) -> KitchenResponse:
    """List what is on hand."""
    return _response(manager)


@router.post("/items", response_model=KitchenItem, status_code=status.HTTP_201_CREATED)
def add_item(
    request: AddKitchenItemRequest,
    manager: KitchenInventoryManager = Depends(get_kitchen_manager),
) -> KitchenItem:
    """Add an ingredient; duplicates (case-insensitive) are rejected with 409."""
    try:
        item = manager.add_item(request.name, request.category)
    except StorageError as e:
        raise storage_unavailable(e)

    if item is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"{request.name.strip()!r} is already in the kitchen",
        )
    return item


@router.get("/items/{name}")
def has_item(
    name: str,
    manager: KitchenInventoryManager = Depends(get_kitchen_manager),
) -> dict:
    """Check whether an ingredient is on hand."""
    return {"name": name, "present": manager.has_item(name)}


@router.delete("/items/{name}", status_code=status.HTTP_204_NO_CONTENT)
def remove_item(
    name: str,
    manager: KitchenInventoryManager = Depends(get_kitchen_manager),
) -> None:
    """Remove an ingredient by name."""
    if not manager.has_item(name):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{name!r} is not in the kitchen",
        )
    try:
        manager.remove_item(name)
    except StorageError as e:
        raise storage_unavailable(e)


@router.delete("", response_model=KitchenResponse)
def clear_kitchen(
    manager: KitchenInventoryManager = Depends(get_kitchen_manager),
) -> KitchenResponse:
    """Remove everything."""
    try:
        manager.clear_all()
    except StorageError as e:
        raise storage_unavailable(e)
    return _response(manager)
