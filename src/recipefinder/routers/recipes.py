"""API routes for rendering scaled recipes."""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from recipefinder.config import get_settings
from recipefinder.logging_config import get_logger
from recipefinder.normalize.categories import GroceryCategory
from recipefinder.normalize.units import MeasurementSystem
from recipefinder.plan.recipe_scaling import scale_recipe
from recipefinder.schemas import Recipe

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


class ScaleRecipeRequest(BaseModel):
    """Recipe plus the serving count and units to render it in."""

    recipe: Recipe
    servings: int | None = Field(default=None, ge=1)
    system: MeasurementSystem | None = None
    keep_units: bool = Field(
        default=False,
        description="Render ingredients in their entered units instead of a measurement system",
    )


class ScaledIngredientResponse(BaseModel):
    """One rendered ingredient line."""

    name: str
    quantity: float
    unit: str
    display_quantity: str
    category: GroceryCategory
    line: str


class ScaleRecipeResponse(BaseModel):
    """Recipe rendered for a serving count."""

    name: str
    base_servings: int
    servings: int
    scale_factor: float
    system: MeasurementSystem | None
    total_time_minutes: int
    ingredients: list[ScaledIngredientResponse]


@router.post("/scale", response_model=ScaleRecipeResponse)
async def scale(request: ScaleRecipeRequest) -> ScaleRecipeResponse:
    """
    Scale a recipe's ingredients to a serving count.

    Quantities are converted to ``system`` (or the configured default)
    unless ``keep_units`` is set.
    """
    recipe = request.recipe
    if request.servings is not None:
        recipe.update_servings(request.servings)

    system: MeasurementSystem | None = None
    if not request.keep_units:
        system = request.system or get_settings().default_measurement_system

    logger.info(f"Scaling recipe {recipe.name!r} to {recipe.current_servings} servings")

    try:
        scaled = scale_recipe(recipe, system=system)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ScaleRecipeResponse(
        name=recipe.name,
        base_servings=recipe.base_servings,
        servings=recipe.current_servings,
        scale_factor=recipe.scale_factor,
        system=system,
        total_time_minutes=recipe.total_time_minutes,
        ingredients=[
            ScaledIngredientResponse(
                name=item.name,
                quantity=item.quantity,
                unit=item.unit,
                display_quantity=item.formatted_quantity,
                category=item.category,
                line=item.line,
            )
            for item in scaled
        ],
    )
