"""Unit tests for unit classification, conversion and display helpers."""

import pytest

from bitepath.normalize.units import (
    DISCRETE,
    MASS,
    PIECE,
    SPICE,
    TO_TASTE,
    UNITLESS,
    VOLUME,
    classify_unit,
    convert,
    format_number,
    is_summable_unit,
    normalize_magnitude,
    parse_quantity_string,
    pluralize_unit,
    round_quantity,
    to_base_unit,
    unit_system,
)

# =============================================================================
# Quantity Parsing Tests
# =============================================================================


class TestParseQuantityString:
    """Tests for parse_quantity_string function."""

    def test_parse_integer(self):
        """Test parsing simple integers."""
        assert parse_quantity_string("2") == 2.0
        assert parse_quantity_string("10") == 10.0

    def test_parse_decimal(self):
        """Test parsing decimal numbers, including comma decimals."""
        assert parse_quantity_string("1.5") == 1.5
        assert parse_quantity_string("0,25") == 0.25
        assert parse_quantity_string(".5") == 0.5

    def test_parse_fraction(self):
        """Test parsing simple and mixed fractions."""
        assert parse_quantity_string("1/2") == 0.5
        assert parse_quantity_string("3/4") == 0.75
        assert parse_quantity_string("1 1/2") == 1.5
        assert parse_quantity_string("1½") == 1.5
        assert parse_quantity_string("¼") == 0.25

    def test_parse_range(self):
        """Test parsing ranges like '2-3'."""
        assert parse_quantity_string("2-3") == 2.5

    def test_leading_number_wins(self):
        """Test that trailing words are ignored."""
        assert parse_quantity_string("2 large") == 2.0

    def test_non_numeric(self):
        """Test that strings without a number yield None."""
        assert parse_quantity_string("") is None
        assert parse_quantity_string("   ") is None
        assert parse_quantity_string("to taste") is None
        assert parse_quantity_string("NaN") is None
        assert parse_quantity_string("1/0") is None


# =============================================================================
# Classification Tests
# =============================================================================


class TestClassifyUnit:
    """Tests for classify_unit function."""

    @pytest.mark.parametrize("unit", ["g", "grams", "kg", "oz", "lb", "pound"])
    def test_mass_units(self, unit):
        """Test that mass units canonicalize to grams."""
        result = classify_unit(unit)
        assert result.category == MASS
        assert result.canonical_unit == "g"

    @pytest.mark.parametrize("unit", ["ml", "L", "cup", "cups", "fl oz", "quart"])
    def test_volume_units(self, unit):
        """Test that volume units canonicalize to milliliters."""
        result = classify_unit(unit)
        assert result.category == VOLUME
        assert result.canonical_unit == "ml"

    def test_piece_units_singularize(self):
        """Test that piece vocabulary maps plurals to the singular."""
        assert classify_unit("Cloves").category == PIECE
        assert classify_unit("Cloves").canonical_unit == "clove"
        assert classify_unit("bunches").canonical_unit == "bunch"

    def test_spice_units(self):
        """Test that spice abbreviations and spellings share one unit."""
        assert classify_unit("tsp").category == SPICE
        assert classify_unit("tsp").canonical_unit == "teaspoon"
        assert classify_unit("Tablespoons").canonical_unit == "tablespoon"
        assert classify_unit("pinch").category == SPICE

    def test_to_taste_and_unitless(self):
        """Test the literal 'to taste' and empty units."""
        assert classify_unit(" To Taste ").category == TO_TASTE
        assert classify_unit("").category == UNITLESS
        assert classify_unit(None).category == UNITLESS

    def test_unknown_unit_is_discrete(self):
        """Test that unrecognized units keep their exact lowercased spelling."""
        result = classify_unit("Handful")
        assert result.category == DISCRETE
        assert result.canonical_unit == "handful"

    def test_single_letters_are_not_registry_units(self):
        """Test that ambiguous single letters fall through to discrete."""
        assert classify_unit("t").category == DISCRETE
        assert classify_unit("c").category == DISCRETE

    @pytest.mark.parametrize("unit", ["g)", "**", "1/0", "(kg", "g^2", "kg*", "3g", "g-"])
    def test_malformed_units_are_discrete(self, unit):
        """Test that expression-like tokens never reach the registry parser."""
        result = classify_unit(unit)
        assert result.category == DISCRETE
        assert result.canonical_unit == unit

    @pytest.mark.parametrize("unit", ["tbs", "Tbl", "tbls", "tbsps"])
    def test_tablespoon_spellings(self, unit):
        """Test that common tablespoon abbreviations share one spice unit."""
        result = classify_unit(unit)
        assert result.category == SPICE
        assert result.canonical_unit == "tablespoon"


class TestSummability:
    """Tests for is_summable_unit and unit_system."""

    def test_cup_pinch_dash_never_sum(self):
        """Test the non-summable display set."""
        assert not is_summable_unit("cup")
        assert not is_summable_unit("Cups")
        assert not is_summable_unit("pinch")
        assert not is_summable_unit("dash")

    def test_summable_units(self):
        """Test ordinary units are summable."""
        assert is_summable_unit("g")
        assert is_summable_unit("clove")
        assert is_summable_unit("tsp")
        assert is_summable_unit(None)

    def test_to_taste_not_summable(self):
        assert not is_summable_unit("to taste")

    def test_unit_system(self):
        """Test detection of the unit system of mass and volume units."""
        assert unit_system("g") == "metric"
        assert unit_system("kg") == "metric"
        assert unit_system("ml") == "metric"
        assert unit_system("oz") == "imperial"
        assert unit_system("cup") == "imperial"
        assert unit_system("clove") is None


# =============================================================================
# Conversion Tests
# =============================================================================


class TestConvert:
    """Tests for base-unit and display-system conversion."""

    def test_to_base_unit(self):
        """Test conversion to grams and milliliters."""
        assert to_base_unit(1.5, "kg").quantity == pytest.approx(1500)
        assert to_base_unit(1.5, "kg").unit == "g"
        assert to_base_unit(2, "L").quantity == pytest.approx(2000)
        assert to_base_unit(2, "L").unit == "ml"
        assert to_base_unit(2, "clove") is None

    def test_convert_to_metric_normalizes_magnitude(self):
        """Test that metric results are promoted to kg and L."""
        result = convert(2, "kg", "metric")
        assert result.unit == "kg"
        assert result.quantity == pytest.approx(2)

        result = convert(1, "cup", "metric")
        assert result.unit == "ml"
        assert result.quantity == pytest.approx(236.588, abs=0.001)

    def test_convert_to_imperial(self):
        """Test that imperial results use ounce/pound and tablespoon/cup."""
        result = convert(100, "g", "imperial")
        assert result.unit == "ounce"
        assert result.quantity == pytest.approx(3.527, abs=0.001)

        result = convert(1, "kg", "imperial")
        assert result.unit == "pound"
        assert result.quantity == pytest.approx(2.2046, abs=0.0001)

        assert convert(500, "ml", "imperial").unit == "cup"
        assert convert(15, "ml", "imperial").unit == "tablespoon"

    @pytest.mark.parametrize("unit", ["clove", "tsp", "handful", "to taste", ""])
    def test_pass_through_categories(self, unit):
        """Test that non mass/volume units are never converted."""
        assert convert(2, unit, "metric") is None
        assert convert(2, unit, "imperial") is None

    def test_invalid_system_raises(self):
        """Test that an unknown target system is a programmer error."""
        with pytest.raises(ValueError, match="Unknown unit system"):
            convert(1, "g", "cubits")

    @pytest.mark.parametrize("quantity, unit", [(5, "oz"), (2, "lb"), (3.5, "lb")])
    def test_mass_round_trip(self, quantity, unit):
        """Test imperial to metric and back stays within 1e-6."""
        metric = convert(quantity, unit, "metric")
        back = convert(metric.quantity, metric.unit, "imperial")
        original = to_base_unit(quantity, unit).quantity
        assert to_base_unit(back.quantity, back.unit).quantity == pytest.approx(
            original, abs=1e-6
        )

    def test_normalize_magnitude(self):
        """Test the 1000 boundary for grams and milliliters."""
        assert normalize_magnitude(1000, "g") == normalize_magnitude(1, "kg")
        assert normalize_magnitude(1000, "g").unit == "kg"
        assert normalize_magnitude(999, "g").unit == "g"
        assert normalize_magnitude(1500, "ml").quantity == 1.5
        assert normalize_magnitude(1500, "ml").unit == "L"
        assert normalize_magnitude(1500, "cup").unit == "cup"


# =============================================================================
# Display Helper Tests
# =============================================================================


class TestRounding:
    """Tests for display rounding."""

    def test_whole_numbers_stay_integers(self):
        assert round_quantity(2.0) == 2
        assert isinstance(round_quantity(2.0), int)
        assert round_quantity(1.96) == 2

    def test_one_decimal(self):
        assert round_quantity(1.25) in (1.2, 1.3)
        assert round_quantity(236.5882) == 236.6

    def test_non_finite_values_pass_through(self):
        """Test that overflowed values never raise during display."""
        assert round_quantity(float("inf")) == float("inf")
        assert format_number(float("inf")) == "inf"

    def test_format_number(self):
        assert format_number(3) == "3"
        assert format_number(3.0) == "3"
        assert format_number(1.5) == "1.5"


class TestPluralizeUnit:
    """Tests for pluralize_unit function."""

    def test_quantity_one_is_singular(self):
        """Test that exactly 1 never pluralizes."""
        assert pluralize_unit("cup", 1) == "cup"

    def test_fractions_stay_singular(self):
        assert pluralize_unit("cup", 0.5) == "cup"

    def test_regular_plural(self):
        assert pluralize_unit("cup", 2) == "cups"
        assert pluralize_unit("ounce", 3.5) == "ounces"

    def test_y_to_ies(self):
        """Test y endings and the exception list."""
        assert pluralize_unit("berry", 2) == "berries"
        assert pluralize_unit("day", 2) == "days"
        assert pluralize_unit("key", 3) == "keys"

    def test_sibilant_endings(self):
        assert pluralize_unit("pinch", 2) == "pinches"
        assert pluralize_unit("dash", 2) == "dashes"

    def test_abbreviations_and_plurals_unchanged(self):
        """Test that metric abbreviations and plural words are left alone."""
        for unit in ("g", "kg", "ml", "L", "tbsp", "oz"):
            assert pluralize_unit(unit, 5) == unit
        assert pluralize_unit("cups", 2) == "cups"
