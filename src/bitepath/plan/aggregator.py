"""Merge planned-meal ingredients into one bucket per ingredient name."""

import math
from dataclasses import dataclass, field, replace

from bitepath.logging_config import get_logger
from bitepath.normalize.parser import IngredientRecord, PlannedMealIngredients
from bitepath.normalize.units import (
    MASS,
    TO_TASTE,
    TO_TASTE_UNIT,
    UNITLESS,
    UNITLESS_UNIT,
    VOLUME,
    UnitCategory,
    classify_unit,
    is_summable_unit,
    to_base_unit,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class IngredientOccurrence:
    """One contribution of an ingredient, kept verbatim for provenance."""

    meal_name: str
    quantity: float | None
    unit: str | None
    description: str | None = None


@dataclass
class AggregatedIngredient:
    """
    An ingredient bucket with its running total.

    total_quantity is in base_unit terms and only meaningful while
    is_summable holds. Once an incompatible occurrence is merged the bucket
    stays non-summable and is rendered from its occurrences.
    """

    display_name: str
    normalized_name: str
    base_unit: str
    unit_category: UnitCategory
    total_quantity: float = 0.0
    is_summable: bool = True
    mixed_units: bool = False
    occurrences: list[IngredientOccurrence] = field(default_factory=list)

    @property
    def meal_names(self) -> list[str]:
        """Meals contributing to this bucket, in first-seen order."""
        return list(dict.fromkeys(o.meal_name for o in self.occurrences))


@dataclass(frozen=True)
class _Contribution:
    base_unit: str
    category: UnitCategory
    amount: float | None  # in base-unit terms, None when not quantified
    summable: bool


def normalize_name(name: str) -> str:
    """Lowercase and trim an ingredient name for matching."""
    return " ".join(name.lower().split())


def _contribution(record: IngredientRecord) -> _Contribution:
    """Work out the aggregation key unit and amount for one record."""
    if record.is_to_taste:
        return _Contribution(TO_TASTE_UNIT, TO_TASTE, None, False)

    quantity = record.quantity
    classified = classify_unit(record.unit)

    if classified.category == UNITLESS and quantity is None:
        return _Contribution(UNITLESS_UNIT, UNITLESS, None, True)

    summable = is_summable_unit(record.unit)
    amount: float | None = quantity if quantity and quantity > 0 else None

    if amount is not None and classified.category in (MASS, VOLUME):
        base = to_base_unit(amount, record.unit)
        if base is not None:
            return _Contribution(base.unit, classified.category, base.quantity, summable)

    return _Contribution(classified.canonical_unit, classified.category, amount, summable)


def aggregate(meals: list[PlannedMealIngredients]) -> list[AggregatedIngredient]:
    """
    Aggregate ingredients across meals.

    Occurrences are bucketed by normalized name. An occurrence adds to the
    running total only when its (name, base unit) key matches the bucket's
    key and both are summable; any mismatch makes the bucket non-summable
    for the rest of the run.
    """
    buckets: dict[str, AggregatedIngredient] = {}

    for meal in meals:
        for record in meal.records:
            normalized = normalize_name(record.name)
            if not normalized:
                continue

            contribution = _contribution(record)
            if contribution.amount is not None and not math.isfinite(contribution.amount):
                logger.warning(
                    f"Quantity for {normalized!r} in {meal.meal_name!r} is out of range, "
                    "listing it unsummed"
                )
                contribution = replace(contribution, amount=None, summable=False)
            occurrence = IngredientOccurrence(
                meal_name=meal.meal_name,
                quantity=record.quantity,
                unit=record.unit,
                description=record.description,
            )

            bucket = buckets.get(normalized)
            if bucket is None:
                bucket = AggregatedIngredient(
                    display_name=record.name,
                    normalized_name=normalized,
                    base_unit=contribution.base_unit,
                    unit_category=contribution.category,
                    is_summable=contribution.summable,
                )
                buckets[normalized] = bucket
            else:
                mismatch = contribution.base_unit != bucket.base_unit
                if bucket.is_summable and (mismatch or not contribution.summable):
                    logger.debug(
                        f"Units for {normalized!r} do not combine "
                        f"({bucket.base_unit} vs {contribution.base_unit}), listing separately"
                    )
                    bucket.is_summable = False
                bucket.mixed_units = bucket.mixed_units or mismatch

            bucket.occurrences.append(occurrence)
            if bucket.is_summable and contribution.amount is not None:
                total = bucket.total_quantity + contribution.amount
                if math.isfinite(total):
                    bucket.total_quantity = total
                else:
                    logger.warning(f"Total for {normalized!r} overflows, listing separately")
                    bucket.is_summable = False

    logger.debug(f"Aggregated {len(meals)} meals into {len(buckets)} ingredients")
    return list(buckets.values())
