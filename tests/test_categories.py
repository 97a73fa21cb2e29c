"""Tests for grocery aisle categorization."""

import pytest

from bitepath.normalize.categories import (
    BEVERAGES,
    CATEGORY_ORDER,
    DAIRY_EGGS,
    FROZEN,
    MEAT_POULTRY,
    OTHER,
    PANTRY,
    PRODUCE,
    categorize,
)


class TestCategorize:
    """Tests for categorize function."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Apples", PRODUCE),
            ("Garlic", PRODUCE),
            ("Chicken breast", MEAT_POULTRY),
            ("Ground Beef", MEAT_POULTRY),
            ("Milk", DAIRY_EGGS),
            ("Eggs", DAIRY_EGGS),
            ("Olive oil", PANTRY),
            ("Baking Soda", PANTRY),
            ("Frozen peas", FROZEN),
            ("Sparkling water", BEVERAGES),
            ("Tofu", OTHER),
        ],
    )
    def test_keyword_match(self, name, expected):
        assert categorize(name) == expected

    def test_case_insensitive(self):
        assert categorize("TOMATO") == categorize("tomato") == PRODUCE

    def test_first_match_wins(self):
        """Test that earlier categories take precedence over later ones."""
        # "apple" is a Produce keyword and Produce is checked before Beverages
        assert categorize("Apple juice") == PRODUCE

    def test_unmatched_is_other(self):
        assert categorize("") == OTHER
        assert categorize("xyzzy") == OTHER

    def test_category_order(self):
        """Test the fixed aisle order used for grouping."""
        assert CATEGORY_ORDER == (
            PRODUCE,
            MEAT_POULTRY,
            DAIRY_EGGS,
            PANTRY,
            FROZEN,
            BEVERAGES,
            OTHER,
        )
