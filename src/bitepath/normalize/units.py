"""Unit classification, conversion and quantity formatting utilities."""

import math
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from pint import UnitRegistry

from bitepath.config import DISPLAY_SYSTEMS
from bitepath.logging_config import get_logger

logger = get_logger(__name__)

ureg = UnitRegistry()

UnitCategory = Literal["mass", "volume", "piece", "spice", "to-taste", "unitless", "discrete"]

MASS: UnitCategory = "mass"
VOLUME: UnitCategory = "volume"
PIECE: UnitCategory = "piece"
SPICE: UnitCategory = "spice"
TO_TASTE: UnitCategory = "to-taste"
UNITLESS: UnitCategory = "unitless"
DISCRETE: UnitCategory = "discrete"

TO_TASTE_UNIT = "to taste"
UNITLESS_UNIT = "unitless"


# =============================================================================
# Unit Vocabularies
# =============================================================================

# Count-based units, mapped to their singular form
PIECE_UNITS: dict[str, str] = {
    "piece": "piece",
    "pieces": "piece",
    "item": "item",
    "items": "item",
    "unit": "unit",
    "units": "unit",
    "clove": "clove",
    "cloves": "clove",
    "slice": "slice",
    "slices": "slice",
    "sprig": "sprig",
    "sprigs": "sprig",
    "head": "head",
    "heads": "head",
    "bunch": "bunch",
    "bunches": "bunch",
    "can": "can",
    "cans": "can",
    "bottle": "bottle",
    "bottles": "bottle",
    "package": "package",
    "packages": "package",
}

# Small measurements shown in a lighter style and never cross-system converted
SPICE_UNITS: dict[str, str] = {
    "tsp": "teaspoon",
    "tsps": "teaspoon",
    "teaspoon": "teaspoon",
    "teaspoons": "teaspoon",
    "tbsp": "tablespoon",
    "tbsps": "tablespoon",
    "tbs": "tablespoon",
    "tbl": "tablespoon",
    "tbls": "tablespoon",
    "tablespoon": "tablespoon",
    "tablespoons": "tablespoon",
    "pinch": "pinch",
    "pinches": "pinch",
    "dash": "dash",
    "dashes": "dash",
}

# Recognized but never summed: adding fractional cups reads as a misleading total
NON_SUMMABLE_UNITS: frozenset[str] = frozenset(
    {"cup", "cups", "pinch", "pinches", "dash", "dashes"}
)

# Recipe spellings the unit registry reads differently (or not at all)
UNIT_ALIASES: dict[str, str] = {
    "fl oz": "fluid_ounce",
    "fl. oz": "fluid_ounce",
    "fluid oz": "fluid_ounce",
    "fluid ounce": "fluid_ounce",
    "fluid ounces": "fluid_ounce",
    "floz": "fluid_ounce",
    "oz": "ounce",
    "lb": "pound",
    "lbs": "pound",
    "pt": "pint",
    "qt": "quart",
    "gal": "gallon",
    "kgs": "kilogram",
    "gr": "gram",
    "grs": "gram",
}

# Abbreviations that are never pluralized
INVARIANT_UNITS: frozenset[str] = frozenset(
    {"L", "l", "ml", "dl", "cl", "g", "kg", "mg", "oz", "fl oz", "lb"}
    | {"tsp", "tbsp", "tbs", "tbl", "pt", "qt", "gal"}
)
PLURAL_EXCEPTIONS: frozenset[str] = frozenset({"day", "key", "way", "toy", "boy", "guy"})

_MASS_DIMENSION = ureg.gram.dimensionality
_VOLUME_DIMENSION = ureg.liter.dimensionality
_METRIC_ROOTS = ("gram", "liter", "litre", "meter")
_UNIT_NAME = re.compile(r"[a-z][a-z_]*")

VULGAR_FRACTIONS: dict[str, float] = {
    "½": 0.5,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 0.25,
    "¾": 0.75,
    "⅛": 0.125,
}


# =============================================================================
# Quantity Parsing
# =============================================================================


def parse_quantity_string(quantity_str: str) -> float | None:
    """
    Parse a quantity string into a float.

    Handles formats like:
    - "2"
    - "1.5" or "1,5"
    - "1/2"
    - "1 1/2" (one and a half)
    - "1½"
    - "2-3" (range, returns average)
    - "2 large" (leading number wins)

    Returns None when the string carries no leading number.
    """
    text = quantity_str.strip().lower().replace(",", ".")
    if not text:
        return None

    for symbol, value in VULGAR_FRACTIONS.items():
        if symbol in text:
            whole = re.match(r"^(\d+)\s*" + re.escape(symbol), text)
            if whole:
                return int(whole.group(1)) + value
            if text.startswith(symbol):
                return value

    range_match = re.match(r"^(\d+(?:\.\d+)?)\s*-\s*(\d+(?:\.\d+)?)", text)
    if range_match:
        low = float(range_match.group(1))
        high = float(range_match.group(2))
        return (low + high) / 2

    mixed_match = re.match(r"^(\d+)\s+(\d+)/(\d+)", text)
    if mixed_match:
        denom = int(mixed_match.group(3))
        if denom == 0:
            return None
        return int(mixed_match.group(1)) + int(mixed_match.group(2)) / denom

    frac_match = re.match(r"^(\d+)\s*/\s*(\d+)", text)
    if frac_match:
        denom = int(frac_match.group(2))
        if denom == 0:
            return None
        return int(frac_match.group(1)) / denom

    num_match = re.match(r"^(\d+(?:\.\d+)?|\.\d+)", text)
    if num_match:
        return float(num_match.group(1))

    return None


# =============================================================================
# Classification
# =============================================================================


@dataclass(frozen=True)
class ClassifiedUnit:
    """A unit token and the category that decides how it aggregates."""

    category: UnitCategory
    canonical_unit: str  # "g"/"ml" for mass/volume, singular token otherwise
    token: str  # trimmed, lowercased input


def normalize_unit_token(unit: str | None) -> str:
    """Trim, lowercase and collapse whitespace in a unit string."""
    if not unit:
        return ""
    return " ".join(unit.strip().lower().split()).rstrip(".")


def _registry_unit(token: str):
    """Look a token up in the unit registry, or None if it is not a unit."""
    name = UNIT_ALIASES.get(token, token)
    # Single letters are too ambiguous in recipes ("t" is not a tonne here)
    if len(name) == 1 and name not in ("g", "l"):
        return None
    # The registry parses expressions; only plain unit names are looked up
    if not _UNIT_NAME.fullmatch(name):
        return None
    try:
        return ureg.parse_units(name)
    except Exception as e:
        logger.debug(f"Unit registry rejected {name!r}: {type(e).__name__}")
        return None


@lru_cache(maxsize=512)
def classify_unit(unit: str | None) -> ClassifiedUnit:
    """
    Categorize a unit string.

    Piece and spice vocabularies are checked first, then the unit registry
    decides mass or volume. Anything else is a discrete, exact-string unit.
    """
    token = normalize_unit_token(unit)

    if not token:
        return ClassifiedUnit(UNITLESS, UNITLESS_UNIT, token)
    if token == TO_TASTE_UNIT:
        return ClassifiedUnit(TO_TASTE, TO_TASTE_UNIT, token)
    if token in PIECE_UNITS:
        return ClassifiedUnit(PIECE, PIECE_UNITS[token], token)
    if token in SPICE_UNITS:
        return ClassifiedUnit(SPICE, SPICE_UNITS[token], token)

    registry_unit = _registry_unit(token)
    if registry_unit is not None:
        if registry_unit.dimensionality == _MASS_DIMENSION:
            return ClassifiedUnit(MASS, "g", token)
        if registry_unit.dimensionality == _VOLUME_DIMENSION:
            return ClassifiedUnit(VOLUME, "ml", token)

    logger.debug(f"Unrecognized unit {token!r}, matching by exact spelling")
    return ClassifiedUnit(DISCRETE, token, token)


def is_summable_unit(unit: str | None) -> bool:
    """Check whether quantities in this unit may be added together."""
    classified = classify_unit(unit)
    if classified.category == TO_TASTE:
        return False
    return classified.token not in NON_SUMMABLE_UNITS


def unit_system(unit: str | None) -> Literal["metric", "imperial"] | None:
    """Report the unit system of a mass or volume unit."""
    classified = classify_unit(unit)
    if classified.category not in (MASS, VOLUME):
        return None
    registry_unit = _registry_unit(classified.token)
    if registry_unit is None:
        return None
    name = str(registry_unit)
    if name.endswith(_METRIC_ROOTS):
        return "metric"
    return "imperial"


# =============================================================================
# Conversion
# =============================================================================


@dataclass(frozen=True)
class ConvertedQuantity:
    """A quantity expressed in a display unit."""

    quantity: float
    unit: str


def to_base_unit(quantity: float, unit: str | None) -> ConvertedQuantity | None:
    """
    Convert a mass or volume quantity to grams or milliliters.

    Returns None for units that are not mass or volume.
    """
    classified = classify_unit(unit)
    if classified.category not in (MASS, VOLUME):
        return None
    registry_unit = _registry_unit(classified.token)
    if registry_unit is None:
        return None
    target = "gram" if classified.category == MASS else "milliliter"
    value = ureg.Quantity(quantity, registry_unit).to(target).magnitude
    return ConvertedQuantity(quantity=float(value), unit=classified.canonical_unit)


def normalize_magnitude(quantity: float, unit: str) -> ConvertedQuantity:
    """Promote 1000 g to kg and 1000 ml to L; other units pass through."""
    if unit == "g" and quantity >= 1000:
        return ConvertedQuantity(quantity / 1000, "kg")
    if unit == "ml" and quantity >= 1000:
        return ConvertedQuantity(quantity / 1000, "L")
    return ConvertedQuantity(quantity, unit)


def _to_imperial(base: ConvertedQuantity) -> ConvertedQuantity:
    if base.unit == "g":
        ounces = ureg.Quantity(base.quantity, "gram").to("ounce").magnitude
        if ounces >= 16:
            pounds = ureg.Quantity(base.quantity, "gram").to("pound").magnitude
            return ConvertedQuantity(float(pounds), "pound")
        return ConvertedQuantity(float(ounces), "ounce")

    cups = ureg.Quantity(base.quantity, "milliliter").to("cup").magnitude
    if cups >= 0.25:
        return ConvertedQuantity(float(cups), "cup")
    tablespoons = ureg.Quantity(base.quantity, "milliliter").to("tablespoon").magnitude
    return ConvertedQuantity(float(tablespoons), "tablespoon")


def convert(
    quantity: float,
    from_unit: str | None,
    to_system: str,
) -> ConvertedQuantity | None:
    """
    Convert a mass or volume quantity into a display system.

    Metric results use g/kg and ml/L; imperial results use ounce/pound and
    tablespoon/cup. Returns None for piece, spice, discrete and to-taste
    units, which are never cross-system converted.

    Raises:
        ValueError: If to_system is not "imperial" or "metric".
    """
    if to_system not in DISPLAY_SYSTEMS:
        raise ValueError(f"Unknown unit system: {to_system!r}")

    base = to_base_unit(quantity, from_unit)
    if base is None:
        return None

    if to_system == "metric":
        return normalize_magnitude(base.quantity, base.unit)
    return _to_imperial(base)


# =============================================================================
# Display Helpers
# =============================================================================


def round_quantity(value: float) -> float | int:
    """Round for display: integers stay whole, everything else to one decimal."""
    if not math.isfinite(value):
        return value
    rounded = round(value, 1)
    if rounded == int(rounded):
        return int(rounded)
    return rounded


def format_number(value: float | int) -> str:
    """Render a number without a trailing .0."""
    if math.isfinite(value) and value == int(value):
        return str(int(value))
    return f"{value:g}"


def pluralize_unit(unit: str, quantity: float | int) -> str:
    """
    Pluralize a unit word for a rounded quantity.

    Only quantities above 1 are pluralized. Metric abbreviations and words
    already ending in "s" are left alone.
    """
    if quantity <= 1 or not unit or unit in INVARIANT_UNITS or unit.endswith("s"):
        return unit
    lowered = unit.lower()
    if lowered.endswith("y") and lowered not in PLURAL_EXCEPTIONS:
        return unit[:-1] + "ies"
    if lowered.endswith(("ch", "sh", "x", "z")):
        return unit + "es"
    return unit + "s"
