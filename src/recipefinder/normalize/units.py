"""Unit normalization, conversion, scaling and quantity formatting."""

import math
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Literal

from recipefinder.logging_config import get_logger

logger = get_logger(__name__)

UnitType = Literal["weight", "volume", "count", "unknown"]


class MeasurementSystem(str, Enum):
    """Measurement system preference for display."""

    METRIC = "metric"
    IMPERIAL = "imperial"


class ConversionError(ValueError):
    """Base exception for invalid conversion requests."""


class UnitKindMismatchError(ConversionError):
    """Raised when a unit of the wrong kind is passed to a converter."""

    def __init__(self, unit: str, expected: UnitType, actual: UnitType):
        super().__init__(f"Unit {unit!r} is a {actual} unit, expected {expected}")
        self.unit = unit
        self.expected = expected
        self.actual = actual


# =============================================================================
# Unit Conversion Tables
# =============================================================================

# Weight conversions (base unit: g)
WEIGHT_UNITS: MappingProxyType[str, float] = MappingProxyType(
    {
        # Metric
        "g": 1.0,
        "gram": 1.0,
        "grams": 1.0,
        "kg": 1000.0,
        "kilogram": 1000.0,
        "kilograms": 1000.0,
        "mg": 0.001,
        "milligram": 0.001,
        "milligrams": 0.001,
        # Imperial
        "oz": 28.3495,
        "ounce": 28.3495,
        "ounces": 28.3495,
        "lb": 453.592,
        "lbs": 453.592,
        "pound": 453.592,
        "pounds": 453.592,
    }
)

# Volume conversions (base unit: ml)
VOLUME_UNITS: MappingProxyType[str, float] = MappingProxyType(
    {
        # Metric
        "ml": 1.0,
        "milliliter": 1.0,
        "milliliters": 1.0,
        "millilitre": 1.0,
        "millilitres": 1.0,
        "l": 1000.0,
        "liter": 1000.0,
        "liters": 1000.0,
        "litre": 1000.0,
        "litres": 1000.0,
        "dl": 100.0,
        "deciliter": 100.0,
        "deciliters": 100.0,
        "cl": 10.0,
        "centiliter": 10.0,
        "centiliters": 10.0,
        # US customary
        "cup": 236.588,
        "cups": 236.588,
        "tbsp": 14.7868,
        "tbs": 14.7868,
        "tablespoon": 14.7868,
        "tablespoons": 14.7868,
        "tsp": 4.92892,
        "teaspoon": 4.92892,
        "teaspoons": 4.92892,
        "fl oz": 29.5735,
        "fluid ounce": 29.5735,
        "fluid ounces": 29.5735,
        "pint": 473.176,
        "pints": 473.176,
        "pt": 473.176,
        "quart": 946.353,
        "quarts": 946.353,
        "qt": 946.353,
        "gallon": 3785.41,
        "gallons": 3785.41,
        "gal": 3785.41,
    }
)

# Count-based units pass through every conversion untouched
COUNT_UNITS: frozenset[str] = frozenset(
    {
        "piece", "pieces", "pc", "pcs", "whole", "slice", "slices", "clove", "cloves",
        "head", "heads", "bunch", "bunches", "sprig", "sprigs", "can", "cans", "jar",
        "jars", "package", "packages", "pkg", "pack", "packs", "bottle", "bottles",
        "bag", "bags", "box", "boxes", "stick", "sticks", "fillet", "fillets",
    }
)

METRIC_UNITS: frozenset[str] = frozenset(
    {
        "g", "gram", "grams", "kg", "kilogram", "kilograms", "mg", "milligram", "milligrams",
        "ml", "milliliter", "milliliters", "millilitre", "millilitres", "l", "liter",
        "liters", "litre", "litres", "dl", "deciliter", "deciliters", "cl", "centiliter",
        "centiliters",
    }
)

# Display ladders per (unit type, system), smallest unit first.
DISPLAY_LADDERS: MappingProxyType[tuple[str, MeasurementSystem], tuple[str, ...]] = (
    MappingProxyType(
        {
            ("weight", MeasurementSystem.METRIC): ("g", "kg"),
            ("weight", MeasurementSystem.IMPERIAL): ("oz", "lb"),
            ("volume", MeasurementSystem.METRIC): ("ml", "l"),
            ("volume", MeasurementSystem.IMPERIAL): ("tsp", "tbsp", "cup"),
        }
    )
)

_UNIT_TABLES: MappingProxyType[str, MappingProxyType[str, float]] = MappingProxyType(
    {"weight": WEIGHT_UNITS, "volume": VOLUME_UNITS}
)


def normalize_unit(unit: str | None) -> str:
    """Lower-case and trim a unit symbol, collapsing inner whitespace."""
    return " ".join((unit or "").lower().split())


def get_unit_type(unit: str | None) -> UnitType:
    """
    Identify which kind of unit a symbol is.

    Returns "unknown" for anything not in the tables (e.g. "pinch"), which
    callers treat as "display unconverted".
    """
    normalized = normalize_unit(unit)

    if normalized in WEIGHT_UNITS:
        return "weight"
    if normalized in VOLUME_UNITS:
        return "volume"
    if normalized in COUNT_UNITS:
        return "count"
    return "unknown"


def unit_system(unit: str | None) -> MeasurementSystem | None:
    """Return the measurement system a convertible unit belongs to."""
    normalized = normalize_unit(unit)
    if get_unit_type(normalized) not in ("weight", "volume"):
        return None
    if normalized in METRIC_UNITS:
        return MeasurementSystem.METRIC
    return MeasurementSystem.IMPERIAL


# =============================================================================
# Conversion
# =============================================================================


def _convert_within(value: float, from_unit: str, to_unit: str, kind: UnitType) -> float | None:
    """Convert through the kind's base unit, or None for unrecognized units."""
    table = _UNIT_TABLES[kind]

    # Wrong-kind units are rejected regardless of position or of the other unit
    for raw in (from_unit, to_unit):
        actual = get_unit_type(raw)
        if actual in ("weight", "volume") and actual != kind:
            raise UnitKindMismatchError(raw, kind, actual)

    source, target = normalize_unit(from_unit), normalize_unit(to_unit)
    if source not in table or target not in table:
        unknown = from_unit if source not in table else to_unit
        logger.debug(f"Unrecognized {kind} unit {unknown!r}, not converting")
        return None

    return value * table[source] / table[target]


def convert_weight(value: float, from_unit: str, to_unit: str) -> float | None:
    """
    Convert a weight between units via grams.

    Returns None when either unit is unrecognized. Raises
    UnitKindMismatchError when either unit is a volume unit.
    """
    return _convert_within(value, from_unit, to_unit, "weight")


def convert_volume(value: float, from_unit: str, to_unit: str) -> float | None:
    """
    Convert a volume between units via milliliters.

    Returns None when either unit is unrecognized. Raises
    UnitKindMismatchError when either unit is a weight unit.
    """
    return _convert_within(value, from_unit, to_unit, "volume")


def _pick_display_unit(base_value: float, kind: UnitType, system: MeasurementSystem) -> str:
    """Largest ladder unit in which the quantity is at least 1, else the smallest."""
    ladder = DISPLAY_LADDERS[(kind, system)]
    table = _UNIT_TABLES[kind]
    for unit in reversed(ladder):
        if abs(base_value) / table[unit] >= 1:
            return unit
    return ladder[0]


def convert(
    value: float,
    unit: str,
    system: MeasurementSystem | str,
    ingredient_name: str | None = None,
) -> tuple[float, str]:
    """
    Convert a quantity for display in the given measurement system.

    Units that are not weight or volume, and units already in the target
    system, come back unchanged. Otherwise the value is expressed in the
    largest unit of the target system's ladder that keeps it at or above 1
    (e.g. 2 cups -> 473.176 ml, 1.2 kg -> 2.65 lb, 10 ml -> 2.03 tsp).

    ``ingredient_name`` only annotates log output; it does not affect the result.
    """
    system = MeasurementSystem(system)
    kind = get_unit_type(unit)

    if kind not in ("weight", "volume"):
        return value, unit

    if unit_system(unit) is system:
        return value, unit

    base_unit = DISPLAY_LADDERS[(kind, MeasurementSystem.METRIC)][0]
    base_value = value * _UNIT_TABLES[kind][normalize_unit(unit)]
    target_unit = _pick_display_unit(base_value, kind, system)
    converted = base_value / _UNIT_TABLES[kind][target_unit]

    logger.debug(
        f"Converted {value} {unit} ({base_value:.3f} {base_unit}) to "
        f"{converted:.3f} {target_unit} for {ingredient_name or 'ingredient'}"
    )
    return converted, target_unit


# =============================================================================
# Scaling and Formatting
# =============================================================================


def scale_factor(current_servings: float, base_servings: float) -> float:
    """Ratio of desired servings to the recipe's base servings."""
    if base_servings <= 0:
        raise ConversionError(f"Base servings must be positive, got {base_servings}")
    return current_servings / base_servings


def scaled_quantity(base_quantity: float, factor: float) -> float:
    """Scale a base quantity by a servings factor."""
    return base_quantity * factor


def format_quantity(value: float) -> str:
    """
    Render a quantity for display.

    Whole numbers have no decimals; everything else keeps at most two
    decimals with trailing zeros trimmed (1.5 -> "1.5", 2.0 -> "2",
    1.333 -> "1.33"). Always uses "." as the separator.
    """
    if math.isnan(value) or math.isinf(value):
        return str(value)

    if float(value).is_integer():
        text = f"{value:.0f}"
    else:
        text = f"{value:.2f}".rstrip("0").rstrip(".")

    return "0" if text == "-0" else text


@dataclass(frozen=True)
class Quantity:
    """A numeric amount paired with a unit symbol."""

    value: float
    unit: str = ""

    @property
    def kind(self) -> UnitType:
        return get_unit_type(self.unit)

    def scaled(self, factor: float) -> "Quantity":
        return Quantity(scaled_quantity(self.value, factor), self.unit)

    def to_system(self, system: MeasurementSystem | str, ingredient_name: str | None = None) -> "Quantity":
        value, unit = convert(self.value, self.unit, system, ingredient_name)
        return Quantity(value, unit)

    def display(self) -> str:
        """Format as "<amount> <unit>" or just the amount for unitless quantities."""
        amount = format_quantity(self.value)
        if self.unit:
            return f"{amount} {self.unit}"
        return amount


# =============================================================================
# Parsing Functions
# =============================================================================

# Free-text amounts that stand for "one unit's worth"
NON_NUMERIC_QUANTITIES = frozenset({"to taste", "pinch", "a pinch", "dash", "a dash", "some"})

# Vulgar fraction glyphs found in pasted recipes
UNICODE_FRACTIONS: MappingProxyType[str, str] = MappingProxyType(
    {"½": "1/2", "⅓": "1/3", "⅔": "2/3", "¼": "1/4", "¾": "3/4", "⅛": "1/8"}
)

_NUMBER = r"\d+(?:\.\d+)?"
# "2", "1.5", "1/2", "1 1/2", "2-3"
_AMOUNT = rf"{_NUMBER}(?:\s+\d+/\d+|/\d+)?(?:\s*-\s*{_NUMBER})?"
_MEASURE_RE = re.compile(rf"^(?P<amount>{_AMOUNT})\s*(?P<unit>.*)$")


def _clean_amount_text(text: str) -> str:
    """Expand fraction glyphs and tighten "1 / 2" to "1/2"."""
    for glyph, fraction in UNICODE_FRACTIONS.items():
        text = text.replace(glyph, f" {fraction}")
    text = re.sub(r"\s*/\s*", "/", text)
    return " ".join(text.split())


def _term_value(term: str) -> float:
    """Sum the parts of "1 1/2"; a zero denominator counts as its numerator."""
    total = 0.0
    for part in term.split():
        numerator, slash, denominator = part.partition("/")
        if slash and float(denominator):
            total += float(numerator) / float(denominator)
        else:
            total += float(numerator)
    return total


def parse_quantity_string(quantity_str: str) -> float:
    """
    Read the numeric amount at the start of a quantity string.

    Accepts whole numbers, decimals with "." or ",", fractions, mixed
    numbers and fraction glyphs. A range such as "2-3" yields its midpoint.
    Anything without a leading number ("to taste", "") counts as 1.
    """
    text = _clean_amount_text((quantity_str or "").strip().lower().replace(",", "."))
    if not text or text in NON_NUMERIC_QUANTITIES:
        return 1.0

    match = re.match(_AMOUNT, text)
    if match is None:
        return 1.0

    low, _, high = match.group(0).partition("-")
    if high:
        return (_term_value(low) + _term_value(high)) / 2
    return _term_value(low)


def extract_quantity_and_unit(measure: str) -> tuple[str, str]:
    """
    Split a combined measure string into its amount text and unit.

    "2 cups" -> ("2", "cups"), "500g" -> ("500", "g"),
    "1½ tsp" -> ("1 1/2", "tsp"), "pinch" -> ("1", "pinch").
    """
    text = _clean_amount_text((measure or "").strip())
    if not text:
        return "1", ""

    match = _MEASURE_RE.match(text)
    if match is None:
        return "1", text
    return match.group("amount"), match.group("unit").strip()


def parse_measure(measure: str) -> Quantity:
    """Parse a free-text measure such as "1 1/2 cups" into a Quantity."""
    amount, unit = extract_quantity_and_unit(measure)
    return Quantity(parse_quantity_string(amount), unit)


# Preparation words that do not change what gets bought
PREPARATION_DESCRIPTORS = (
    "fresh",
    "dried",
    "chopped",
    "diced",
    "minced",
    "sliced",
    "grated",
    "shredded",
    "crushed",
    "ground",
    "whole",
    "halved",
    "quartered",
    "peeled",
    "seeded",
    "pitted",
    "boneless",
    "skinless",
    "cooked",
    "raw",
    "organic",
    "free-range",
    "free range",
    "large",
    "medium",
    "small",
)


def normalize_ingredient_name(name: str) -> str:
    """
    Normalize an ingredient name for merging shopping items.

    - Lowercase
    - Remove parenthetical notes and preparation descriptors
    - Collapse whitespace
    """
    if not name:
        return ""

    name = name.lower().strip()
    name = re.sub(r"\([^)]*\)", " ", name)

    for desc in PREPARATION_DESCRIPTORS:
        name = re.sub(rf"\b{re.escape(desc)}\b", " ", name)

    return " ".join(name.replace(",", " ").split())
