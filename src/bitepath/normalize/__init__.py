"""Parse, classify and normalize meal ingredients."""

from bitepath.normalize.categories import CATEGORY_ORDER, categorize
from bitepath.normalize.parser import (
    IngredientRecord,
    PlannedMealIngredients,
    parse_ingredients,
    parse_planned_meals,
)
from bitepath.normalize.units import (
    ClassifiedUnit,
    ConvertedQuantity,
    classify_unit,
    convert,
    parse_quantity_string,
    to_base_unit,
)

__all__ = [
    "CATEGORY_ORDER",
    "ClassifiedUnit",
    "ConvertedQuantity",
    "IngredientRecord",
    "PlannedMealIngredients",
    "categorize",
    "classify_unit",
    "convert",
    "parse_ingredients",
    "parse_planned_meals",
    "parse_quantity_string",
    "to_base_unit",
]
