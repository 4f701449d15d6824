"""API routes for grocery category lookup."""

from typing import Annotated

from fastapi import APIRouter, Query
from pydantic import BaseModel

from recipefinder.logging_config import get_logger
from recipefinder.normalize.categories import (
    CATEGORY_ORDER,
    GroceryCategory,
    category_color,
    category_icon,
    classify,
    suggest_category,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


class CategoryInfo(BaseModel):
    """Display metadata for one category."""

    name: GroceryCategory
    icon: str
    color: str


class CategoryListResponse(BaseModel):
    """All categories in aisle order."""

    categories: list[CategoryInfo]
    total: int


class ClassificationResponse(BaseModel):
    """Category assigned to an ingredient name."""

    name: str
    category: CategoryInfo


def _info(category: GroceryCategory) -> CategoryInfo:
    return CategoryInfo(name=category, icon=category_icon(category), color=category_color(category))


@router.get("", response_model=CategoryListResponse)
async def list_categories() -> CategoryListResponse:
    """List every category with its icon and color."""
    categories = [_info(category) for category in CATEGORY_ORDER]
    return CategoryListResponse(categories=categories, total=len(categories))


@router.get("/classify", response_model=ClassificationResponse)
async def classify_ingredient(
    name: Annotated[str, Query(description="Ingredient name to classify")],
) -> ClassificationResponse:
    """Assign a grocery category to an ingredient name."""
    category = classify(name)
    logger.debug(f"Classified {name!r} as {category.value}")
    return ClassificationResponse(name=name, category=_info(category))


@router.get("/suggest", response_model=ClassificationResponse)
async def suggest(
    q: Annotated[str, Query(description="Partial ingredient name")] = "",
) -> ClassificationResponse:
    """Category suggestion for autocomplete (needs at least three characters)."""
    return ClassificationResponse(name=q, category=_info(suggest_category(q)))
