"""Grocery list aggregation and display."""

from bitepath.plan.aggregator import AggregatedIngredient, IngredientOccurrence, aggregate
from bitepath.plan.formatter import (
    FULL_VIEW,
    TODAY_VIEW,
    DisplayListItem,
    ViewConfig,
    format_ingredient,
    format_manual_item,
    make_unique_key,
)
from bitepath.plan.grocery_list import (
    GroceryList,
    build_grocery_list,
    build_range_list,
    select_meals,
    week_range,
)

__all__ = [
    "FULL_VIEW",
    "TODAY_VIEW",
    "AggregatedIngredient",
    "DisplayListItem",
    "GroceryList",
    "IngredientOccurrence",
    "ViewConfig",
    "aggregate",
    "build_grocery_list",
    "build_range_list",
    "format_ingredient",
    "format_manual_item",
    "make_unique_key",
    "select_meals",
    "week_range",
]
