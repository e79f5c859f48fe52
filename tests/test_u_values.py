"""Tests for U-value lookup from construction descriptions."""

import pytest

from sapengine.baseline.u_values import (
    UValueSource,
    blend_window_u_value,
    insulation_depth_mm,
    lookup_u_value,
    parse_age_band,
    thermal_mass,
)
from sapengine.core.models import ElementType


class TestWallLookup:
    """Wall descriptions."""

    def test_filled_cavity(self):
        """Test a filled cavity resolves by keyword to 0.5."""
        estimate = lookup_u_value(ElementType.WALL, "Cavity wall, filled cavity")

        assert estimate.u_value == 0.5
        assert estimate.source == UValueSource.KEYWORD

    def test_unfilled_cavity_not_read_as_filled(self):
        """Test "unfilled" does not match the filled rule."""
        assert lookup_u_value(ElementType.WALL, "Cavity wall, unfilled").u_value == 1.6
        assert lookup_u_value(ElementType.WALL, "Cavity wall, as built, no insulation (assumed)").u_value == 1.6

    def test_cavity_with_depth(self):
        """Test a stated insulation depth refines the filled cavity value."""
        assert lookup_u_value(ElementType.WALL, "Cavity wall, filled cavity, 100mm").u_value == 0.35

    @pytest.mark.parametrize("text,u_value", [
        ("Solid brick, as built, no insulation (assumed)", 2.1),
        ("Sandstone or limestone, as built", 1.7),
        ("Granite or whinstone, as built", 1.7),
        ("Timber frame, as built, insulated (assumed)", 0.6),
        ("System built, as built, no insulation", 1.0),
        ("Solid brick, with external insulation", 0.3),
        ("Solid brick, with internal insulation", 0.4),
    ])
    def test_keyword_table(self, text, u_value):
        """Test common register wall descriptions."""
        assert lookup_u_value(ElementType.WALL, text).u_value == u_value

    def test_case_insensitive(self):
        """Test matching ignores case."""
        assert lookup_u_value(ElementType.WALL, "CAVITY WALL, FILLED CAVITY").u_value == 0.5

    def test_age_band_fallback(self):
        """Test generic text falls back to the age band."""
        estimate = lookup_u_value(ElementType.WALL, "As built", "England and Wales: 1950-1966")

        assert estimate.u_value == 1.5
        assert estimate.source == UValueSource.AGE_BAND

    @pytest.mark.parametrize("text", [
        "Cavity wall, as built, no insulation (assumed)",
        "Solid brick, as built, no insulation (assumed)",
    ])
    def test_as_built_wall_uses_age_band(self, text):
        """Test an assumed "as built" wall takes the age-band value over its keyword."""
        estimate = lookup_u_value(ElementType.WALL, text, "England and Wales: 1983-1990")

        assert estimate.u_value == 0.5
        assert estimate.source == UValueSource.AGE_BAND

    def test_as_built_without_age_band_uses_keyword(self):
        """Test an "as built" wall keeps its keyword value when no band parses."""
        estimate = lookup_u_value(ElementType.WALL, "Cavity wall, as built, no insulation (assumed)", "unknown")

        assert estimate.u_value == 1.6
        assert estimate.source == UValueSource.KEYWORD

    def test_as_built_roof_keeps_keyword(self):
        """Test the age-band override applies to walls only."""
        estimate = lookup_u_value(ElementType.ROOF, "Flat, as built, no insulation", "2012 onwards")

        assert estimate.u_value == 2.0
        assert estimate.source == UValueSource.KEYWORD

    def test_keyword_beats_age_band(self):
        """Test a keyword match ignores the age band."""
        estimate = lookup_u_value(ElementType.WALL, "Cavity wall, filled cavity", "before 1900")

        assert estimate.u_value == 0.5

    def test_worst_case_default(self):
        """Test no text and no age band gives the worst case."""
        estimate = lookup_u_value(ElementType.WALL, None, None)

        assert estimate.u_value == 2.1
        assert estimate.source == UValueSource.DEFAULT

    @pytest.mark.parametrize("element_type,u_value", [
        (ElementType.ROOF, 2.3),
        (ElementType.FLOOR, 0.7),
        (ElementType.WINDOW, 4.8),
    ])
    def test_worst_case_per_type(self, element_type, u_value):
        """Test worst-case defaults for the other element types."""
        assert lookup_u_value(element_type, "").u_value == u_value


class TestRoofLookup:
    """Roof descriptions."""

    @pytest.mark.parametrize("text,u_value", [
        ("Pitched, 270 mm loft insulation", 0.15),
        ("Pitched, 300+ mm loft insulation", 0.13),
        ("Pitched, 100 mm loft insulation", 0.4),
        ("Pitched, 12 mm loft insulation", 1.5),
        ("Pitched, 0 mm loft insulation", 2.3),
        ("Pitched, 4 inch loft insulation", 0.4),
    ])
    def test_loft_depth(self, text, u_value):
        """Test loft insulation depth buckets."""
        assert lookup_u_value(ElementType.ROOF, text).u_value == u_value

    def test_dwelling_above(self):
        """Test a roof with a dwelling above loses no heat."""
        assert lookup_u_value(ElementType.ROOF, "(another dwelling above)").u_value == 0.0

    def test_flat_uninsulated(self):
        """Test flat roof rules."""
        assert lookup_u_value(ElementType.ROOF, "Flat, no insulation").u_value == 2.0
        assert lookup_u_value(ElementType.ROOF, "Flat, insulated").u_value == 0.5

    def test_thatched(self):
        """Test thatch."""
        assert lookup_u_value(ElementType.ROOF, "Thatched").u_value == 0.35


class TestFloorAndWindowLookup:
    """Floor and window descriptions."""

    @pytest.mark.parametrize("text,u_value", [
        ("Suspended, no insulation (assumed)", 0.7),
        ("Solid, insulated", 0.25),
        ("Solid, limited insulation (assumed)", 0.45),
        ("(another dwelling below)", 0.0),
    ])
    def test_floor(self, text, u_value):
        """Test floor descriptions."""
        assert lookup_u_value(ElementType.FLOOR, text).u_value == u_value

    @pytest.mark.parametrize("text,u_value", [
        ("Fully double glazed", 2.8),
        ("Single glazed", 4.8),
        ("Fully triple glazed", 1.8),
        ("High performance glazing", 1.6),
        ("Secondary glazing", 2.4),
        ("Double glazing installed before 2002", 3.1),
    ])
    def test_window(self, text, u_value):
        """Test window descriptions."""
        assert lookup_u_value(ElementType.WINDOW, text).u_value == u_value


class TestAgeBands:
    """Age band parsing."""

    @pytest.mark.parametrize("text,year", [
        ("England and Wales: 1930-1949", 1930),
        ("England and Wales: before 1900", 1899),
        ("England and Wales: 2012 onwards", 2012),
        ("1983", 1983),
        ("B", 1900),
        ("k", 2007),
    ])
    def test_parse(self, text, year):
        """Test register age band formats."""
        assert parse_age_band(text) == year

    @pytest.mark.parametrize("text", [None, "", "INVALID!", "unknown"])
    def test_unparseable(self, text):
        """Test junk gives None."""
        assert parse_age_band(text) is None

    def test_modern_walls_better(self):
        """Test newer bands never have worse walls."""
        old = lookup_u_value(ElementType.WALL, None, "1900-1929").u_value
        new = lookup_u_value(ElementType.WALL, None, "2012 onwards").u_value

        assert new < old


class TestHelpers:
    """Depth parsing, glazing blend and thermal mass."""

    def test_depth_mm(self):
        """Test millimetre depths."""
        assert insulation_depth_mm("270 mm loft insulation") == 270

    def test_depth_inches(self):
        """Test inch depths convert at 25 mm per inch."""
        assert insulation_depth_mm("4 inch") == 100

    def test_no_depth(self):
        """Test text without a depth gives None."""
        assert insulation_depth_mm("loft insulation") is None

    def test_blend_half(self):
        """Test 50% double glazing blends with single glazing."""
        assert blend_window_u_value(2.8, 50) == pytest.approx(3.8)

    def test_blend_full_and_missing(self):
        """Test 100% and unknown proportions leave the value unchanged."""
        assert blend_window_u_value(2.8, 100) == pytest.approx(2.8)
        assert blend_window_u_value(2.8, None) == 2.8

    @pytest.mark.parametrize("element_type,text,kappa", [
        (ElementType.WALL, "Solid brick", 200),
        (ElementType.WALL, "Timber frame", 50),
        (ElementType.WALL, None, 100),
        (ElementType.FLOOR, "Solid, no insulation", 300),
        (ElementType.FLOOR, "Suspended", 50),
        (ElementType.ROOF, "Pitched", 50),
        (ElementType.WINDOW, "Double glazed", 0),
    ])
    def test_thermal_mass(self, element_type, text, kappa):
        """Test heat capacity per area from construction keywords."""
        assert thermal_mass(element_type, text) == kappa
