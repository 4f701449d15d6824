"""Tests for grocery category classification."""

import pytest

from recipefinder.normalize.categories import (
    CATEGORY_COLORS,
    CATEGORY_ICONS,
    CATEGORY_KEYWORDS,
    CATEGORY_ORDER,
    GroceryCategory,
    category_color,
    category_icon,
    classify,
    parse_category,
    suggest_category,
)


class TestClassify:
    """Tests for classify."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("tomato", GroceryCategory.PRODUCE),
            ("apple", GroceryCategory.PRODUCE),
            ("chicken", GroceryCategory.MEAT_SEAFOOD),
            ("salmon", GroceryCategory.MEAT_SEAFOOD),
            ("milk", GroceryCategory.DAIRY_EGGS),
            ("cheese", GroceryCategory.DAIRY_EGGS),
            ("eggs", GroceryCategory.DAIRY_EGGS),
            ("sourdough bread", GroceryCategory.BAKERY),
            ("flour", GroceryCategory.PANTRY),
            ("rice", GroceryCategory.PANTRY),
            ("extra virgin olive oil", GroceryCategory.PANTRY),
            ("frozen peas", GroceryCategory.FROZEN),
            ("coffee", GroceryCategory.BEVERAGES),
            ("green tea", GroceryCategory.BEVERAGES),
            ("cumin", GroceryCategory.SPICES),
            ("cinnamon", GroceryCategory.SPICES),
        ],
    )
    def test_known_items(self, name, expected):
        """Test common grocery items land in their aisle."""
        assert classify(name) == expected

    def test_case_insensitive(self):
        """Test classification ignores case."""
        assert classify("MILK") == classify("milk") == classify("Milk") == "Dairy & Eggs"

    def test_trims_whitespace(self):
        """Test leading and trailing whitespace is ignored."""
        assert classify("   Tomatoes  ") == GroceryCategory.PRODUCE

    def test_substring_matching(self):
        """Test keywords match inside longer phrases."""
        assert classify("chicken broth") == GroceryCategory.MEAT_SEAFOOD
        assert classify("Tomatoes") == GroceryCategory.PRODUCE

    def test_priority_order_wins(self):
        """Test the earliest category in priority order wins a tie."""
        # "orange" (Produce) beats "juice" (Beverages)
        assert classify("orange juice") == GroceryCategory.PRODUCE
        assert classify("vegetable broth") == GroceryCategory.PRODUCE
        assert classify("broth") == GroceryCategory.PANTRY
        assert classify("beef stock") == GroceryCategory.MEAT_SEAFOOD

    @pytest.mark.parametrize("name", ["", "   ", "paper towels", "dish soap", "xyz"])
    def test_unmatched_is_other(self, name):
        """Test names without keywords fall back to Other."""
        assert classify(name) is GroceryCategory.OTHER

    def test_none_is_other(self):
        """Test a missing name never raises."""
        assert classify(None) is GroceryCategory.OTHER

    def test_always_returns_a_category(self):
        """Test every input maps to one of the nine categories."""
        samples = ["", "MILK", "chicken broth", "🍅", "1234", "a" * 500, "Spaghetti & meatballs"]
        for sample in samples:
            assert classify(sample) in set(GroceryCategory)

    def test_category_compares_to_display_name(self):
        """Test categories behave as their display strings."""
        assert GroceryCategory.MEAT_SEAFOOD == "Meat & Seafood"
        assert str(GroceryCategory.SPICES) == "Spices & Seasonings"


class TestSuggestCategory:
    """Tests for autocomplete suggestions."""

    def test_short_input_is_other(self):
        assert suggest_category("to") is GroceryCategory.OTHER
        assert suggest_category("  eg ") is GroceryCategory.OTHER

    def test_long_enough_input_is_classified(self):
        assert suggest_category("tomato") == GroceryCategory.PRODUCE
        assert suggest_category("MILK") == GroceryCategory.DAIRY_EGGS


class TestCategoryTables:
    """Tests for the static category tables."""

    def test_order_covers_every_category_once(self):
        assert len(CATEGORY_ORDER) == len(GroceryCategory) == 9
        assert set(CATEGORY_ORDER) == set(GroceryCategory)
        assert CATEGORY_ORDER[0] is GroceryCategory.PRODUCE
        assert CATEGORY_ORDER[-1] is GroceryCategory.OTHER

    def test_other_has_no_keywords(self):
        assert GroceryCategory.OTHER not in CATEGORY_KEYWORDS

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            CATEGORY_KEYWORDS[GroceryCategory.OTHER] = ("anything",)
        with pytest.raises(TypeError):
            CATEGORY_ICONS[GroceryCategory.OTHER] = "x"

    def test_every_category_has_icon_and_color(self):
        for category in GroceryCategory:
            assert category_icon(category)
            assert category_color(category)
        assert set(CATEGORY_ICONS) == set(CATEGORY_COLORS) == set(GroceryCategory)

    def test_icon_lookup_by_display_name(self):
        assert category_icon("Produce") == "leaf.fill"
        assert category_color("Produce") == "green"

    def test_unknown_label_uses_other_tokens(self):
        assert category_icon("Kitchen Gadgets") == category_icon(GroceryCategory.OTHER)
        assert category_color("") == "gray"


class TestParseCategory:
    """Tests for parse_category."""

    def test_parses_display_names_case_insensitively(self):
        assert parse_category("dairy & eggs") is GroceryCategory.DAIRY_EGGS
        assert parse_category(" Frozen ") is GroceryCategory.FROZEN

    def test_passes_enum_through(self):
        assert parse_category(GroceryCategory.BAKERY) is GroceryCategory.BAKERY

    def test_unknown_is_other(self):
        assert parse_category("Snacks") is GroceryCategory.OTHER
        assert parse_category(None) is GroceryCategory.OTHER
