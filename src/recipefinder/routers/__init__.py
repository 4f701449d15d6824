"""API routers for the recipefinder application."""

from recipefinder.routers.categories import router as categories_router
from recipefinder.routers.kitchen import router as kitchen_router
from recipefinder.routers.recipes import router as recipes_router
from recipefinder.routers.shopping import router as shopping_router
from recipefinder.routers.units import router as units_router

__all__ = [
    "categories_router",
    "kitchen_router",
    "recipes_router",
    "shopping_router",
    "units_router",
]
