"""Grocery category classification for free-text ingredient names."""

from enum import Enum
from types import MappingProxyType

from recipefinder.logging_config import get_logger

logger = get_logger(__name__)


class GroceryCategory(str, Enum):
    """Fixed grocery aisle taxonomy used for shopping and kitchen grouping."""

    PRODUCE = "Produce"
    MEAT_SEAFOOD = "Meat & Seafood"
    DAIRY_EGGS = "Dairy & Eggs"
    BAKERY = "Bakery"
    PANTRY = "Pantry"
    FROZEN = "Frozen"
    BEVERAGES = "Beverages"
    SPICES = "Spices & Seasonings"
    OTHER = "Other"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Keyword Tables
# =============================================================================

# Checked in insertion order; the first category with a substring hit wins.
CATEGORY_KEYWORDS: MappingProxyType[GroceryCategory, tuple[str, ...]] = MappingProxyType(
    {
        GroceryCategory.PRODUCE: (
            "apple", "banana", "orange", "lettuce", "tomato", "potato", "onion", "garlic",
            "carrot", "celery", "cucumber", "pepper", "spinach", "broccoli", "cauliflower",
            "cabbage", "mushroom", "avocado", "lemon", "lime", "berry", "grape",
            "melon", "pineapple", "mango", "peach", "pear", "cherry", "plum",
            "kiwi", "papaya", "cantaloupe", "zucchini", "squash", "eggplant", "radish",
            "turnip", "beet", "kale", "arugula", "basil", "cilantro", "parsley", "mint",
            "thyme", "rosemary", "sage", "oregano", "dill", "chive", "ginger root",
            "vegetable",
        ),
        GroceryCategory.MEAT_SEAFOOD: (
            "chicken", "beef", "pork", "lamb", "turkey", "duck", "bacon", "sausage", "ham",
            "steak", "ribs", "brisket", "fish", "salmon", "tuna", "cod", "tilapia",
            "shrimp", "prawn", "lobster", "crab", "scallop", "mussel", "clam", "oyster",
            "seafood", "meat", "wing", "thigh", "breast",
        ),
        GroceryCategory.DAIRY_EGGS: (
            "milk", "cream", "butter", "cheese", "cheddar", "mozzarella", "parmesan", "feta",
            "yogurt", "yoghurt", "egg", "half and half", "gelato",
        ),
        GroceryCategory.BAKERY: (
            "bread", "baguette", "roll", "bun", "croissant", "bagel", "muffin", "donut",
            "pastry", "cake", "cookie", "pie", "tart", "biscuit", "scone", "cracker",
            "tortilla", "pita", "naan", "flatbread", "sourdough", "ciabatta", "pretzel",
        ),
        GroceryCategory.PANTRY: (
            "flour", "sugar", "salt", "oil", "rice", "pasta", "noodle", "spaghetti",
            "macaroni", "quinoa", "couscous", "beans", "lentil", "chickpea", "jam",
            "jelly", "honey", "maple syrup", "vinegar", "soy sauce", "worcestershire",
            "ketchup", "mustard", "mayo", "salsa", "sauce", "broth", "stock", "bouillon",
            "cereal", "oats", "granola", "cornmeal", "baking powder", "baking soda", "yeast",
            "vanilla", "extract", "cocoa", "chocolate chip", "nut", "almond", "walnut",
            "pecan", "cashew", "pistachio", "can", "jar", "dried", "powder",
        ),
        GroceryCategory.FROZEN: (
            "frozen", "ice", "popsicle",
        ),
        GroceryCategory.BEVERAGES: (
            "water", "juice", "soda", "pop", "cola", "sprite", "coffee", "tea", "beer",
            "wine", "vodka", "whiskey", "rum", "tequila", "gin", "champagne", "cider",
            "lemonade", "smoothie", "shake", "energy drink", "sports drink", "tonic",
            "sparkling",
        ),
        GroceryCategory.SPICES: (
            "cumin", "paprika", "turmeric", "coriander", "cardamom", "cinnamon", "nutmeg",
            "clove", "ginger", "cayenne", "curry", "masala", "seasoning", "spice", "herb",
            "bay leaf", "peppercorn", "fennel", "fenugreek", "mustard seed", "sesame seed",
            "poppy seed", "anise", "allspice", "cajun", "adobo", "za'atar",
        ),
    }
)

CATEGORY_ORDER: tuple[GroceryCategory, ...] = (*CATEGORY_KEYWORDS, GroceryCategory.OTHER)

CATEGORY_ICONS: MappingProxyType[GroceryCategory, str] = MappingProxyType(
    {
        GroceryCategory.PRODUCE: "leaf.fill",
        GroceryCategory.MEAT_SEAFOOD: "fish.fill",
        GroceryCategory.DAIRY_EGGS: "drop.fill",
        GroceryCategory.BAKERY: "birthday.cake.fill",
        GroceryCategory.PANTRY: "cabinet.fill",
        GroceryCategory.FROZEN: "snowflake",
        GroceryCategory.BEVERAGES: "cup.and.saucer.fill",
        GroceryCategory.SPICES: "sparkles",
        GroceryCategory.OTHER: "basket.fill",
    }
)

CATEGORY_COLORS: MappingProxyType[GroceryCategory, str] = MappingProxyType(
    {
        GroceryCategory.PRODUCE: "green",
        GroceryCategory.MEAT_SEAFOOD: "red",
        GroceryCategory.DAIRY_EGGS: "blue",
        GroceryCategory.BAKERY: "orange",
        GroceryCategory.PANTRY: "brown",
        GroceryCategory.FROZEN: "cyan",
        GroceryCategory.BEVERAGES: "purple",
        GroceryCategory.SPICES: "yellow",
        GroceryCategory.OTHER: "gray",
    }
)

# Autocomplete needs at least this many characters before guessing.
MIN_SUGGESTION_LENGTH = 3


# =============================================================================
# Classification
# =============================================================================


def classify(ingredient_name: str) -> GroceryCategory:
    """
    Map a free-text ingredient name to a grocery category.

    Matching is case-insensitive substring search over ``CATEGORY_KEYWORDS``
    in priority order, so "chicken broth" lands in Meat & Seafood before the
    Pantry "broth" keyword is considered. Names that match nothing are
    ``GroceryCategory.OTHER``.
    """
    normalized = (ingredient_name or "").lower().strip()
    if not normalized:
        return GroceryCategory.OTHER

    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in normalized for keyword in keywords):
            return category

    logger.debug(f"No category keyword matched {normalized!r}, using Other")
    return GroceryCategory.OTHER


def suggest_category(partial_input: str) -> GroceryCategory:
    """Suggest a category while the user is still typing."""
    if len((partial_input or "").strip()) < MIN_SUGGESTION_LENGTH:
        return GroceryCategory.OTHER
    return classify(partial_input)


def parse_category(value: "GroceryCategory | str | None") -> GroceryCategory:
    """Coerce a stored or user-supplied category label, defaulting to Other."""
    if isinstance(value, GroceryCategory):
        return value
    label = (value or "").strip().lower()
    for category in GroceryCategory:
        if category.value.lower() == label:
            return category
    return GroceryCategory.OTHER


def category_icon(category: GroceryCategory | str) -> str:
    """Icon token for a category."""
    return CATEGORY_ICONS[parse_category(category)]


def category_color(category: GroceryCategory | str) -> str:
    """Color token for a category."""
    return CATEGORY_COLORS[parse_category(category)]
