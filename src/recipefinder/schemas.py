"""Recipe, shopping and kitchen data schemas."""

import re
from datetime import datetime, timezone
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from recipefinder.normalize.categories import GroceryCategory, classify, parse_category
from recipefinder.normalize.units import (
    format_quantity,
    parse_measure,
    scale_factor,
    scaled_quantity,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Ingredient(BaseModel):
    """
    A single recipe ingredient as entered or imported.

    Either ``base_quantity`` (with an optional ``unit``) or a free-text
    ``measure`` such as "1 1/2 cups" may be given; a measure is split into
    the two fields.
    """

    id: UUID = Field(default_factory=uuid4)
    base_quantity: float
    unit: str = ""
    name: str

    @model_validator(mode="before")
    @classmethod
    def _split_measure(cls, data: object) -> object:
        if not isinstance(data, dict) or "measure" not in data:
            return data
        fields = {key: value for key, value in data.items() if key != "measure"}
        if "base_quantity" not in fields:
            quantity = parse_measure(str(data["measure"] or ""))
            fields["base_quantity"] = quantity.value
            fields.setdefault("unit", quantity.unit)
        return fields

    @classmethod
    def from_measure(cls, name: str, measure: str) -> "Ingredient":
        """Build an ingredient from a name and a measure like "500g" or "2 cups"."""
        return cls.model_validate({"name": name, "measure": measure})

    @property
    def display_name(self) -> str:
        """Title-cased name for display."""
        return self.name.title()

    @property
    def formatted_quantity(self) -> str:
        return format_quantity(self.base_quantity)

    @property
    def category(self) -> GroceryCategory:
        return classify(self.name)

    def scaled(self, factor: float) -> "Ingredient":
        """Copy of this ingredient with its quantity multiplied by ``factor``."""
        return self.model_copy(update={"base_quantity": scaled_quantity(self.base_quantity, factor)})


class Recipe(BaseModel):
    """Recipe with ingredients, instructions and a serving count."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    category: str = ""
    difficulty: str = ""
    prep_time: str = ""
    cooking_time: str = ""
    base_servings: int = Field(ge=1)
    current_servings: int | None = Field(default=None, ge=1)
    ingredients: list[Ingredient] = Field(default_factory=list)
    pre_prep_instructions: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    notes: str = ""
    image_name: str | None = None

    @model_validator(mode="after")
    def _default_current_servings(self) -> "Recipe":
        if self.current_servings is None:
            self.current_servings = self.base_servings
        return self

    @property
    def scale_factor(self) -> float:
        return scale_factor(self.current_servings, self.base_servings)

    def scaled_ingredients(self) -> list[Ingredient]:
        """Ingredients adjusted for the current serving count."""
        factor = self.scale_factor
        return [ingredient.scaled(factor) for ingredient in self.ingredients]

    def update_servings(self, servings: int) -> None:
        if servings < 1:
            raise ValueError(f"Servings must be at least 1, got {servings}")
        self.current_servings = servings

    @property
    def total_time_minutes(self) -> int:
        """Prep plus cooking time, read from the leading number of each field."""
        return _leading_minutes(self.prep_time) + _leading_minutes(self.cooking_time)

    @property
    def image_slug(self) -> str:
        """File-name friendly form of the recipe name."""
        slug = self.name.lower().replace(" ", "_").replace("&", "and")
        return re.sub(r"[(),']", "", slug)


def _leading_minutes(time_text: str) -> int:
    match = re.match(r"\s*(\d+)", time_text or "")
    return int(match.group(1)) if match else 0


class ShoppingListItem(BaseModel):
    """An entry on the shopping list."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    quantity: int = 1
    unit: str = ""
    is_checked: bool = False
    category: GroceryCategory = GroceryCategory.OTHER
    date_added: datetime = Field(default_factory=_utcnow)

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: object) -> GroceryCategory:
        return parse_category(value if isinstance(value, (str, GroceryCategory)) else None)


class KitchenItem(BaseModel):
    """An ingredient the user has on hand."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    category: GroceryCategory = GroceryCategory.OTHER
    date_added: datetime = Field(default_factory=_utcnow)

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: object) -> GroceryCategory:
        return parse_category(value if isinstance(value, (str, GroceryCategory)) else None)
