"""Pydantic schemas for data the grocery engine consumes and persists."""

from datetime import date
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PlannedMealRef(BaseModel):
    """The meal attached to a meal-plan entry."""

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    ingredients: str | list[Any] | None = None


class MealPlanRow(BaseModel):
    """A meal-plan entry as returned by the meal-plan query."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    plan_date: date = Field(validation_alias=AliasChoices("plan_date", "planDate"))
    meal_type: str | None = Field(
        default=None, validation_alias=AliasChoices("meal_type", "mealType")
    )
    meal: PlannedMealRef | None = Field(
        default=None, validation_alias=AliasChoices("meal", "meals")
    )


class ManualGroceryItem(BaseModel):
    """An ad hoc item the user added to the grocery list."""

    id: str
    name: str = Field(min_length=1)
    quantity: str = ""
    unit: str = ""

    @property
    def unique_key(self) -> str:
        """Key used to strike the item off."""
        return f"manual:{self.id}"
