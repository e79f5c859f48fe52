"""Tests for settings."""

import pytest
from pydantic import ValidationError

from sapengine.core.config import Settings


class TestSettings:
    """Defaults and environment overrides."""

    def test_defaults(self, monkeypatch):
        """Test documented defaults."""
        monkeypatch.delenv("SAP_FUEL_PRICE_GBP_PER_KWH", raising=False)
        settings = Settings(_env_file=None)

        assert settings.default_region == 0
        assert settings.default_floor_area_m2 == 80.0
        assert settings.fuel_price_gbp_per_kwh == 0.10
        assert settings.analysis_period_years == 25

    def test_env_override(self, monkeypatch):
        """Test SAP_* environment variables override defaults."""
        monkeypatch.setenv("SAP_FUEL_PRICE_GBP_PER_KWH", "0.12")
        monkeypatch.setenv("SAP_MAX_WORKERS", "2")

        settings = Settings(_env_file=None)

        assert settings.fuel_price_gbp_per_kwh == 0.12
        assert settings.max_workers == 2

    def test_invalid_log_level(self):
        """Test unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_region_bounds(self):
        """Test the default region must be a real climate region."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, default_region=30)
