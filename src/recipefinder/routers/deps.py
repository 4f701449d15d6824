"""Shared FastAPI dependencies."""

from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from recipefinder.database import get_db
from recipefinder.logging_config import get_logger
from recipefinder.plan.kitchen import KitchenInventoryManager
from recipefinder.plan.shopping_list import ShoppingListManager
from recipefinder.storage import ItemStore, SqlItemStore, StorageError

logger = get_logger(__name__)


def storage_unavailable(error: StorageError) -> HTTPException:
    """503 for a collection that could not be read or written."""
    logger.error(f"Storage failure for {error.key or 'collection'}: {error}")
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Could not access {error.key or 'storage'}, try again later",
    )


def get_store(db: Session = Depends(get_db)) -> ItemStore:
    """Request-scoped store on the request's database session."""
    return SqlItemStore(db)


def get_shopping_list_manager(store: ItemStore = Depends(get_store)) -> ShoppingListManager:
    try:
        return ShoppingListManager(store)
    except StorageError as e:
        raise storage_unavailable(e)


def get_kitchen_manager(store: ItemStore = Depends(get_store)) -> KitchenInventoryManager:
    try:
        return KitchenInventoryManager(store)
    except StorageError as e:
        raise storage_unavailable(e)
