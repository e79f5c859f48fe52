"""Tests for the climate tables and occupancy estimate."""

import dataclasses

import pytest

from sapengine.analysis.internal_gains import estimate_occupancy
from sapengine.climate import UK_CLIMATE
from sapengine.core.models import Orientation


class TestClimateDataset:
    """Monthly tables."""

    def test_region_count(self):
        """Test UK average plus 21 regions."""
        assert UK_CLIMATE.region_count == 22
        assert len(UK_CLIMATE.region_names) == 22

    def test_has_region(self):
        """Test region bounds."""
        assert UK_CLIMATE.has_region(0)
        assert UK_CLIMATE.has_region(21)
        assert not UK_CLIMATE.has_region(22)
        assert not UK_CLIMATE.has_region(-1)

    def test_tables_are_monthly(self):
        """Test every region has twelve values per table."""
        for region in range(UK_CLIMATE.region_count):
            assert len(UK_CLIMATE.external_temperature_table[region]) == 12
            assert len(UK_CLIMATE.wind_speed_table[region]) == 12
            assert len(UK_CLIMATE.horizontal_solar_table[region]) == 12

    def test_frozen(self):
        """Test the dataset cannot be modified."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            UK_CLIMATE.days_in_month = (30,) * 12

    def test_days_in_year(self):
        """Test month lengths sum to 365."""
        assert sum(UK_CLIMATE.days_in_month) == 365

    def test_winter_colder_than_summer(self):
        """Test January is colder than July everywhere."""
        for region in range(UK_CLIMATE.region_count):
            assert UK_CLIMATE.external_temperature(region, 0) < UK_CLIMATE.external_temperature(region, 6)


class TestOrientation:
    """Solar coefficient columns."""

    @pytest.mark.parametrize("orientation,column", [
        (Orientation.NORTH, 0),
        (Orientation.SOUTH, 4),
        (Orientation.SOUTH_WEST, 3),
        (Orientation.WEST, 2),
        (Orientation.NORTH_WEST, 1),
    ])
    def test_mirrored_columns(self, orientation, column):
        """Test western orientations reuse the eastern coefficients."""
        assert orientation.solar_column == column


class TestOccupancy:
    """Assumed occupancy from floor area."""

    def test_small_dwelling(self):
        """Test dwellings up to 13.9 m2 have one occupant."""
        assert estimate_occupancy(10) == 1.0

    def test_typical_dwelling(self):
        """Test 85 m2 gives about 2.55 occupants."""
        assert estimate_occupancy(85) == pytest.approx(2.551, abs=1e-3)

    def test_increasing(self):
        """Test occupancy grows with floor area."""
        assert estimate_occupancy(50) < estimate_occupancy(100) < estimate_occupancy(200)
