"""Decode the serialized ingredient blobs stored with each meal."""

import json
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from bitepath.logging_config import get_logger
from bitepath.normalize.units import TO_TASTE_UNIT, parse_quantity_string
from bitepath.schemas import MealPlanRow

logger = get_logger(__name__)


class IngredientRecord(BaseModel):
    """One ingredient as stored with a meal, coerced from legacy shapes."""

    model_config = ConfigDict(extra="ignore")

    name: str
    quantity: float | None = None
    unit: str | None = None
    description: str | None = None

    @field_validator("name", mode="before")
    @classmethod
    def require_name(cls, v: Any) -> str:
        """Reject missing or blank names."""
        if v is None or not str(v).strip():
            raise ValueError("ingredient name is required")
        return str(v).strip()

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, v: Any) -> float | None:
        """Accept numbers and numeric-like strings; blank means no quantity."""
        if v is None:
            return None
        if isinstance(v, bool):
            raise ValueError("quantity must be a number")
        if isinstance(v, (int, float)):
            value = float(v)
        elif isinstance(v, str):
            if not v.strip():
                return None
            parsed = parse_quantity_string(v)
            if parsed is None:
                raise ValueError(f"quantity is not numeric: {v!r}")
            value = parsed
        else:
            raise ValueError(f"unsupported quantity type: {type(v).__name__}")

        if math.isnan(value) or math.isinf(value) or value < 0:
            raise ValueError(f"quantity out of range: {v!r}")
        return value

    @field_validator("unit", "description", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str | None:
        """Convert optional text fields to stripped strings."""
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @property
    def is_to_taste(self) -> bool:
        """Check whether the record is a "to taste" ingredient."""
        if (self.unit or "").lower() == TO_TASTE_UNIT:
            return True
        return self.quantity is None and (self.description or "").lower() == TO_TASTE_UNIT


@dataclass
class PlannedMealIngredients:
    """The decoded ingredients of one meal-plan entry."""

    meal_name: str
    plan_date: date
    records: list[IngredientRecord] = field(default_factory=list)
    meal_type: str | None = None


def parse_ingredients(
    blob: str | list[Any] | None,
    meal_name: str = "",
) -> list[IngredientRecord]:
    """
    Decode an ingredient blob into typed records.

    A missing blob yields no records. A blob that is not a JSON array is
    logged and yields no records. Elements that fail coercion are dropped
    one at a time.
    """
    if blob is None:
        return []

    if isinstance(blob, str):
        if not blob.strip():
            return []
        try:
            decoded = json.loads(blob)
        except json.JSONDecodeError as e:
            logger.warning(f"Malformed ingredient data for meal {meal_name!r}: {e}")
            return []
    else:
        decoded = blob

    if not isinstance(decoded, list):
        logger.warning(
            f"Ingredient data for meal {meal_name!r} is a {type(decoded).__name__}, not a list"
        )
        return []

    records: list[IngredientRecord] = []
    for index, element in enumerate(decoded):
        if not isinstance(element, dict):
            logger.debug(f"Skipping non-object ingredient #{index} in {meal_name!r}")
            continue
        try:
            records.append(IngredientRecord.model_validate(element))
        except ValidationError as e:
            logger.debug(
                f"Dropping ingredient #{index} in {meal_name!r}: {e.errors()[0]['msg']}"
            )

    return records


def parse_planned_meal(row: MealPlanRow) -> PlannedMealIngredients | None:
    """Decode one meal-plan row; rows without a meal yield None."""
    if row.meal is None:
        return None
    return PlannedMealIngredients(
        meal_name=row.meal.name,
        plan_date=row.plan_date,
        records=parse_ingredients(row.meal.ingredients, row.meal.name),
        meal_type=row.meal_type,
    )


def parse_planned_meals(rows: list[MealPlanRow]) -> list[PlannedMealIngredients]:
    """Decode every meal-plan row that carries a meal."""
    meals = []
    for row in rows:
        parsed = parse_planned_meal(row)
        if parsed is not None:
            meals.append(parsed)
    return meals
