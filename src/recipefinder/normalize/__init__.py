"""Pure classification, conversion and formatting helpers for ingredient data."""

from recipefinder.normalize.categories import (
    CATEGORY_ORDER,
    GroceryCategory,
    category_color,
    category_icon,
    classify,
    parse_category,
    suggest_category,
)
from recipefinder.normalize.units import (
    ConversionError,
    MeasurementSystem,
    Quantity,
    UnitKindMismatchError,
    convert,
    convert_volume,
    convert_weight,
    extract_quantity_and_unit,
    format_quantity,
    get_unit_type,
    normalize_ingredient_name,
    parse_measure,
    parse_quantity_string,
    scale_factor,
    scaled_quantity,
)

__all__ = [
    "CATEGORY_ORDER",
    "ConversionError",
    "GroceryCategory",
    "MeasurementSystem",
    "Quantity",
    "UnitKindMismatchError",
    "category_color",
    "category_icon",
    "classify",
    "convert",
    "convert_volume",
    "convert_weight",
    "extract_quantity_and_unit",
    "format_quantity",
    "get_unit_type",
    "normalize_ingredient_name",
    "parse_category",
    "parse_measure",
    "parse_quantity_string",
    "scale_factor",
    "scaled_quantity",
    "suggest_category",
]
