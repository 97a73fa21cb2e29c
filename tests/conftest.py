"""Pytest configuration and shared fixtures."""

import json
from datetime import date

import pytest

from bitepath.normalize.parser import IngredientRecord, PlannedMealIngredients
from bitepath.schemas import MealPlanRow
from bitepath.storage.kv import MemoryStore
from bitepath.storage.stores import ManualItemStore, StruckItemStore

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow running")


# =============================================================================
# Meal Fixtures
# =============================================================================

MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)
NEXT_MONDAY = date(2026, 10, 26)


def make_meal(name: str, *records: dict, plan_date: date = MONDAY) -> PlannedMealIngredients:
    """Build a decoded meal from plain ingredient dicts."""
    return PlannedMealIngredients(
        meal_name=name,
        plan_date=plan_date,
        records=[IngredientRecord.model_validate(r) for r in records],
    )


def make_row(
    name: str,
    ingredients,
    plan_date: date = MONDAY,
    meal_type: str = "dinner",
) -> MealPlanRow:
    """Build a meal-plan row the way the meal-plan query returns it."""
    blob = ingredients
    if isinstance(ingredients, list):
        blob = json.dumps(ingredients)
    return MealPlanRow.model_validate(
        {
            "planDate": plan_date.isoformat(),
            "mealType": meal_type,
            "meals": {"name": name, "ingredients": blob},
        }
    )


@pytest.fixture
def week_rows():
    """A small week of planned meals."""
    return [
        make_row(
            "Pancakes",
            [
                {"name": "Flour", "quantity": 200, "unit": "g"},
                {"name": "Milk", "quantity": 1, "unit": "cup"},
                {"name": "Eggs", "quantity": 2},
            ],
            plan_date=MONDAY,
            meal_type="breakfast",
        ),
        make_row(
            "Tomato Soup",
            [
                {"name": "Tomato", "quantity": "4", "unit": "pieces"},
                {"name": "Salt", "quantity": None, "unit": None, "description": "to taste"},
            ],
            plan_date=TUESDAY,
        ),
        make_row(
            "Bread",
            [{"name": "Flour", "quantity": 300, "unit": "g"}],
            plan_date=NEXT_MONDAY,
        ),
    ]


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def memory_store():
    """Empty in-process key-value store."""
    return MemoryStore()


@pytest.fixture
def struck_store(memory_store):
    """Struck-item set backed by the memory store."""
    return StruckItemStore(memory_store)


@pytest.fixture
def manual_store(memory_store):
    """Manual-item list backed by the same memory store."""
    return ManualItemStore(memory_store)
