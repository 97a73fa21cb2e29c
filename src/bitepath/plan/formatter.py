"""Render aggregated ingredients as printable grocery-list entries."""

import math
from dataclasses import dataclass

from bitepath.config import DisplaySystem
from bitepath.normalize.categories import categorize
from bitepath.normalize.units import (
    MASS,
    PIECE,
    SPICE,
    TO_TASTE,
    TO_TASTE_UNIT,
    UNITLESS,
    VOLUME,
    ConvertedQuantity,
    UnitCategory,
    classify_unit,
    convert,
    format_number,
    normalize_magnitude,
    parse_quantity_string,
    pluralize_unit,
    round_quantity,
    unit_system,
)
from bitepath.plan.aggregator import AggregatedIngredient, IngredientOccurrence
from bitepath.schemas import ManualGroceryItem

MANUAL_TOOLTIP = "Manually added item"


@dataclass(frozen=True)
class ViewConfig:
    """How a grocery-list view joins details and keys its items."""

    name: str
    separator: str
    categorized: bool = True


FULL_VIEW = ViewConfig(name="full", separator=" + ")
TODAY_VIEW = ViewConfig(name="today", separator="; ")


@dataclass
class DisplayListItem:
    """A single printable grocery-list entry."""

    item_name: str
    details_text: str
    category: str
    unique_key: str
    tooltip_text: str
    is_manual: bool = False
    muted: bool = False


def make_unique_key(name: str, unit: str, category: str | None = None) -> str:
    """Build the stable strike-state key for an aggregated item."""
    parts = [name, unit]
    if category:
        parts.append(category)
    return ":".join(" ".join(part.lower().split()) for part in parts)


def render_quantity(quantity: float, unit: str, category: UnitCategory) -> str:
    """Round, pluralize and join a quantity with its unit."""
    if not math.isfinite(quantity):
        return unit
    rounded = round_quantity(quantity)
    if category in (PIECE, UNITLESS) or not unit:
        return format_number(rounded) if rounded > 0 else ""
    if rounded <= 0:
        return unit
    return f"{format_number(rounded)} {pluralize_unit(unit, rounded)}"


def _display_quantity(
    quantity: float,
    unit: str,
    display_system: DisplaySystem,
) -> ConvertedQuantity:
    """Express a single entered quantity in the display system."""
    if display_system == "metric":
        converted = convert(quantity, unit, "metric")
        if converted is not None:
            return converted
    if unit.lower() in ("g", "ml"):
        return normalize_magnitude(quantity, unit.lower())
    return ConvertedQuantity(quantity, unit)


def _is_muted_unit(unit: str) -> bool:
    return classify_unit(unit).category == SPICE


def format_occurrence(occurrence: IngredientOccurrence, display_system: DisplaySystem) -> str:
    """Render one occurrence's own quantity and unit."""
    unit = (occurrence.unit or "").strip()
    if unit.lower() == TO_TASTE_UNIT or (
        occurrence.quantity is None and (occurrence.description or "").lower() == TO_TASTE_UNIT
    ):
        return TO_TASTE_UNIT
    if occurrence.quantity is None or occurrence.quantity <= 0:
        return unit

    shown = _display_quantity(occurrence.quantity, unit, display_system)
    return render_quantity(shown.quantity, shown.unit, classify_unit(shown.unit).category)


def occurrence_tooltip(occurrence: IngredientOccurrence) -> str:
    """Describe where an occurrence came from."""
    parts = []
    if occurrence.quantity is not None:
        parts.append(format_number(occurrence.quantity))
    if occurrence.unit:
        parts.append(occurrence.unit)
    if occurrence.description:
        parts.append(occurrence.description)
    parts.append(f"(from: {occurrence.meal_name})")
    return " ".join(parts)


def _summed_details(
    item: AggregatedIngredient,
    display_system: DisplaySystem,
) -> tuple[str, str]:
    """Render a summable bucket's total, returning (details, display unit)."""
    category = item.unit_category

    if category in (MASS, VOLUME) and item.total_quantity > 0:
        system = display_system
        # Imperial display keeps all-metric contributions metric
        if system == "imperial" and not any(
            unit_system(o.unit) == "imperial" for o in item.occurrences
        ):
            system = "metric"
        converted = convert(item.total_quantity, item.base_unit, system)
        if converted is not None:
            details = render_quantity(
                converted.quantity, converted.unit, classify_unit(converted.unit).category
            )
            return details, converted.unit

    if category in (MASS, VOLUME, PIECE, UNITLESS):
        return render_quantity(item.total_quantity, "", category), ""

    return render_quantity(item.total_quantity, item.base_unit, category), item.base_unit


def format_ingredient(
    item: AggregatedIngredient,
    display_system: DisplaySystem,
    view: ViewConfig = FULL_VIEW,
) -> DisplayListItem:
    """
    Render an aggregated ingredient for display.

    To-taste buckets read "to taste". Summable buckets show their converted,
    rounded total. Everything else lists each occurrence's own quantity,
    joined with the view's separator.
    """
    category = categorize(item.display_name)
    muted = False

    if item.unit_category == TO_TASTE and not item.mixed_units:
        details = TO_TASTE_UNIT
        muted = True
    elif item.is_summable:
        details, shown_unit = _summed_details(item, display_system)
        muted = item.unit_category == SPICE or (bool(shown_unit) and _is_muted_unit(shown_unit))
    else:
        rendered = [format_occurrence(o, display_system) for o in item.occurrences]
        details = view.separator.join(text for text in rendered if text)
        muted = item.unit_category in (SPICE, TO_TASTE) and not item.mixed_units

    return DisplayListItem(
        item_name=item.display_name,
        details_text=details,
        category=category,
        unique_key=make_unique_key(
            item.normalized_name,
            item.base_unit,
            category if view.categorized else None,
        ),
        tooltip_text="\n".join(occurrence_tooltip(o) for o in item.occurrences),
        muted=muted,
    )


def format_manual_item(
    item: ManualGroceryItem,
    display_system: DisplaySystem,
) -> DisplayListItem:
    """Render a manually added item with the same quantity rules."""
    quantity = parse_quantity_string(item.quantity) or 0.0
    unit = item.unit.strip()

    if quantity > 0:
        shown = _display_quantity(quantity, unit, display_system)
        details = render_quantity(shown.quantity, shown.unit, classify_unit(shown.unit).category)
        muted = bool(shown.unit) and _is_muted_unit(shown.unit)
    else:
        details = unit
        muted = bool(unit) and _is_muted_unit(unit)

    return DisplayListItem(
        item_name=item.name,
        details_text=details,
        category=categorize(item.name),
        unique_key=item.unique_key,
        tooltip_text=MANUAL_TOOLTIP,
        is_manual=True,
        muted=muted,
    )
