"""Build sorted, grouped grocery lists from planned meals and manual items."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, timedelta

from bitepath.config import DisplaySystem, get_settings
from bitepath.logging_config import get_logger
from bitepath.normalize.categories import CATEGORY_ORDER
from bitepath.normalize.parser import PlannedMealIngredients, parse_planned_meals
from bitepath.plan.aggregator import aggregate
from bitepath.plan.formatter import (
    FULL_VIEW,
    DisplayListItem,
    ViewConfig,
    format_ingredient,
    format_manual_item,
)
from bitepath.schemas import ManualGroceryItem, MealPlanRow

logger = get_logger(__name__)

MANUAL_SECTION = "Manually Added Items"


@dataclass
class GroceryList:
    """A computed grocery list: aggregated items first, then manual items."""

    view: ViewConfig
    display_system: DisplaySystem
    items: list[DisplayListItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def unique_keys(self) -> set[str]:
        """Keys of every item currently on the list."""
        return {item.unique_key for item in self.items}

    def sections(self) -> list[tuple[str, list[DisplayListItem]]]:
        """
        Group items for display.

        Aggregated items are grouped by category in fixed aisle order; manual
        items always form a trailing section. Empty sections are omitted.
        """
        grouped: dict[str, list[DisplayListItem]] = {name: [] for name in CATEGORY_ORDER}
        manual: list[DisplayListItem] = []
        for item in self.items:
            if item.is_manual:
                manual.append(item)
            else:
                grouped.setdefault(item.category, []).append(item)

        sections = [(name, items) for name, items in grouped.items() if items]
        if manual:
            sections.append((MANUAL_SECTION, manual))
        return sections


def build_grocery_list(
    meals: list[PlannedMealIngredients],
    display_system: DisplaySystem,
    manual_items: Iterable[ManualGroceryItem] = (),
    view: ViewConfig = FULL_VIEW,
) -> GroceryList:
    """
    Aggregate, format and order a grocery list.

    Aggregated items are sorted case-insensitively by name. Manual items are
    appended after them in insertion order.
    """
    aggregated = aggregate(meals)
    items = [format_ingredient(item, display_system, view) for item in aggregated]
    items.sort(key=lambda item: (item.item_name.casefold(), item.unique_key))

    manual = [format_manual_item(item, display_system) for item in manual_items]

    logger.debug(
        f"Built {view.name} grocery list: {len(items)} aggregated, {len(manual)} manual"
    )
    return GroceryList(view=view, display_system=display_system, items=items + manual)


def week_range(day: date, week_starts_on: int | None = None) -> tuple[date, date]:
    """Return the first and last day of the week containing day."""
    if week_starts_on is None:
        week_starts_on = get_settings().week_starts_on
    start = day - timedelta(days=(day.weekday() - week_starts_on) % 7)
    return start, start + timedelta(days=6)


def select_meals(
    rows: Iterable[MealPlanRow],
    start: date | None = None,
    end: date | None = None,
) -> list[PlannedMealIngredients]:
    """Decode the meal-plan rows that fall inside an inclusive date range."""
    selected = [
        row
        for row in rows
        if (start is None or row.plan_date >= start) and (end is None or row.plan_date <= end)
    ]
    return parse_planned_meals(selected)


def build_range_list(
    rows: Iterable[MealPlanRow],
    start: date | None,
    end: date | None,
    display_system: DisplaySystem,
    manual_items: Iterable[ManualGroceryItem] = (),
    view: ViewConfig = FULL_VIEW,
) -> GroceryList:
    """Build the grocery list for the meals planned between start and end."""
    return build_grocery_list(select_meals(rows, start, end), display_system, manual_items, view)
