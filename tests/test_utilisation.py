"""Tests for the gain utilisation factor and thermal time constant."""

import math

import pytest

from sapengine.analysis.utilisation import time_constant, utilisation_factor


class TestTimeConstant:
    """Thermal time constant tau = TMP / (3.6 HLP)."""

    def test_value(self):
        """Test tau for a typical dwelling."""
        assert time_constant(250, 2.0) == pytest.approx(250 / 7.2)

    def test_zero_hlp(self):
        """Test zero HLP gives zero rather than dividing by zero."""
        assert time_constant(250, 0.0) == 0.0


class TestUtilisationFactor:
    """Bounds and edge cases of the utilisation factor."""

    @pytest.mark.parametrize("gains", [0.1, 50, 500, 1500, 3000, 10000, 1e6])
    @pytest.mark.parametrize("tmp", [50, 250, 450])
    def test_bounds(self, gains, tmp):
        """Test 0 <= n <= 1 across gain/loss ratios and thermal masses."""
        n = utilisation_factor(tmp, 3.0, 250, 20, 5, gains)

        assert 0.0 <= n <= 1.0

    def test_ratio_of_one(self):
        """Test y == 1 uses the limit a / (a + 1)."""
        tmp, hlp, h = 250, 2.0, 200
        a = 1 + time_constant(tmp, hlp) / 15
        loss = h * (20 - 5)

        assert utilisation_factor(tmp, hlp, h, 20, 5, loss) == pytest.approx(a / (a + 1))

    def test_ratio_near_one_is_continuous(self):
        """Test values either side of y == 1 approach the limit."""
        at_one = utilisation_factor(250, 2.0, 200, 20, 5, 3000)
        below = utilisation_factor(250, 2.0, 200, 20, 5, 3000 * (1 - 1e-6))
        above = utilisation_factor(250, 2.0, 200, 20, 5, 3000 * (1 + 1e-6))

        assert below == pytest.approx(at_one, rel=1e-4)
        assert above == pytest.approx(at_one, rel=1e-4)

    def test_zero_heat_transfer(self):
        """Test H = 0 gives 0."""
        assert utilisation_factor(250, 0.0, 0.0, 20, 5, 500) == 0.0

    def test_zero_gains(self):
        """Test no gains gives 0."""
        assert utilisation_factor(250, 2.0, 200, 20, 5, 0.0) == 0.0

    def test_no_temperature_difference(self):
        """Test Ti == Te gives 0."""
        assert utilisation_factor(250, 2.0, 200, 15, 15, 500) == 0.0

    def test_reversed_temperature_difference(self):
        """Test Te > Ti gives 0."""
        assert utilisation_factor(250, 2.0, 200, 15, 20, 500) == 0.0

    def test_large_ratio_does_not_overflow(self):
        """Test very large y gives roughly 1/y, not NaN."""
        n = utilisation_factor(450, 0.5, 50, 20, 19.99, 1e9)

        assert not math.isnan(n)
        assert 0.0 <= n < 1e-3

    def test_small_ratio_near_one(self):
        """Test small gains are almost fully used."""
        assert utilisation_factor(250, 2.0, 200, 20, 5, 10) > 0.99

    def test_decreases_with_gains(self):
        """Test more gains relative to loss are used less efficiently."""
        low = utilisation_factor(250, 2.0, 200, 20, 5, 1000)
        high = utilisation_factor(250, 2.0, 200, 20, 5, 6000)

        assert high < low
