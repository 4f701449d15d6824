"""Recipe scaling and shopping/kitchen list management."""

from recipefinder.plan.kitchen import KitchenInventoryManager
from recipefinder.plan.recipe_scaling import (
    ScaledIngredient,
    render_ingredient_line,
    scale_ingredient,
    scale_recipe,
)
from recipefinder.plan.shopping_list import ShoppingListManager

__all__ = [
    "KitchenInventoryManager",
    "ScaledIngredient",
    "ShoppingListManager",
    "render_ingredient_line",
    "scale_ingredient",
    "scale_recipe",
]
