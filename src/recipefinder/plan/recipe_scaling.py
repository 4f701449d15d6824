"""Render recipe ingredients for a serving count and measurement system."""

from dataclasses import dataclass

from recipefinder.logging_config import get_logger
from recipefinder.normalize.categories import GroceryCategory, classify
from recipefinder.normalize.units import (
    MeasurementSystem,
    convert,
    format_quantity,
    scaled_quantity,
)
from recipefinder.schemas import Ingredient, Recipe

logger = get_logger(__name__)


@dataclass
class ScaledIngredient:
    """An ingredient line ready for display."""

    name: str
    quantity: float
    unit: str
    category: GroceryCategory
    original_quantity: float
    original_unit: str

    @property
    def formatted_quantity(self) -> str:
        return format_quantity(self.quantity)

    @property
    def line(self) -> str:
        return render_ingredient_line(self)


def scale_ingredient(
    ingredient: Ingredient,
    factor: float,
    system: MeasurementSystem | str | None = None,
) -> ScaledIngredient:
    """Scale one ingredient and optionally convert it to ``system``."""
    quantity = scaled_quantity(ingredient.base_quantity, factor)
    unit = ingredient.unit

    if system is not None:
        quantity, unit = convert(quantity, unit, system, ingredient.name)

    return ScaledIngredient(
        name=ingredient.display_name,
        quantity=quantity,
        unit=unit,
        category=classify(ingredient.name),
        original_quantity=ingredient.base_quantity,
        original_unit=ingredient.unit,
    )


def scale_recipe(
    recipe: Recipe,
    servings: int | None = None,
    system: MeasurementSystem | str | None = None,
) -> list[ScaledIngredient]:
    """
    Scale every ingredient of a recipe.

    Args:
        recipe: The recipe to render.
        servings: Serving count to scale to. Defaults to the recipe's current servings.
        system: Target measurement system, or None to keep the entered units.

    Returns:
        One ScaledIngredient per recipe ingredient, in recipe order.
    """
    if servings is not None:
        recipe = recipe.model_copy()
        recipe.update_servings(servings)

    factor = recipe.scale_factor
    logger.debug(f"Scaling {recipe.name!r} by {factor:.3f} ({recipe.current_servings} servings)")

    return [scale_ingredient(ingredient, factor, system) for ingredient in recipe.ingredients]


def render_ingredient_line(scaled: ScaledIngredient) -> str:
    """Format as "12 Tomatoes" or "473.18 ml Milk"."""
    parts = [scaled.formatted_quantity]
    if scaled.unit:
        parts.append(scaled.unit)
    parts.append(scaled.name)
    return " ".join(parts)
