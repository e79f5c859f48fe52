"""Tests for infiltration and ventilation heat loss."""

import pytest

from sapengine.analysis.ventilation import (
    AIR_HEAT_CAPACITY,
    VentilationCalculator,
    effective_air_change_rate,
)
from sapengine.core.models import VentilationConfig, VentilationSystem


class TestEffectiveAirChangeRate:
    """Effective ACH per ventilation system."""

    def test_natural_below_one(self):
        """Test natural ventilation below 1 ACH uses 0.5 + 0.5 n^2."""
        vent = VentilationConfig(system=VentilationSystem.NATURAL)

        assert effective_air_change_rate(0.4, vent) == pytest.approx(0.58)

    def test_natural_above_one(self):
        """Test natural ventilation at or above 1 ACH passes through."""
        vent = VentilationConfig(system=VentilationSystem.NATURAL)

        assert effective_air_change_rate(1.2, vent) == pytest.approx(1.2)
        assert effective_air_change_rate(1.0, vent) == pytest.approx(1.0)

    def test_natural_continuous_at_one(self):
        """Test both branches meet at 1 ACH."""
        vent = VentilationConfig(system=VentilationSystem.NATURAL)

        assert effective_air_change_rate(1.0 - 1e-9, vent) == pytest.approx(1.0)

    def test_balanced_heat_recovery(self):
        """Test MVHR adds the unrecovered share of the mechanical rate."""
        vent = VentilationConfig(
            system=VentilationSystem.BALANCED_HEAT_RECOVERY,
            system_air_change_rate=1.0,
            heat_recovery_efficiency=0.8,
        )

        assert effective_air_change_rate(0.3, vent) == pytest.approx(0.5)

    def test_positive_input(self):
        """Test positive input adds the full mechanical rate."""
        vent = VentilationConfig(system=VentilationSystem.POSITIVE_INPUT, system_air_change_rate=0.5)

        assert effective_air_change_rate(0.3, vent) == pytest.approx(0.8)

    def test_extract_only_high_infiltration(self):
        """Test extract only with infiltration above the system rate uses the system rate."""
        vent = VentilationConfig(system=VentilationSystem.EXTRACT_ONLY, system_air_change_rate=0.5)

        assert effective_air_change_rate(0.6, vent) == pytest.approx(0.5)

    def test_extract_only_low_infiltration(self):
        """Test extract only with low infiltration adds half the system rate."""
        vent = VentilationConfig(system=VentilationSystem.EXTRACT_ONLY, system_air_change_rate=0.5)

        assert effective_air_change_rate(0.2, vent) == pytest.approx(0.45)


class TestInfiltration:
    """Structural and point-source infiltration."""

    def test_terrace_point_source(self, victorian_terrace):
        """Test one chimney and one fan over 204 m3."""
        point_source, _ = VentilationCalculator().infiltration(victorian_terrace)

        assert point_source == pytest.approx(50 / 204)

    def test_terrace_total(self, victorian_terrace):
        """Test storeys, masonry, unsealed floor, no lobby and 50% draught-proofing add up."""
        _, infiltration = VentilationCalculator().infiltration(victorian_terrace)

        expected = 50 / 204 + 0.1 + 0.35 + 0.2 + 0.05 + 0.15
        assert infiltration == pytest.approx(expected)

    def test_air_permeability_replaces_structural(self, victorian_terrace):
        """Test a pressure test result replaces the structural estimate."""
        vent = victorian_terrace.ventilation.model_copy(
            update={"air_permeability_test": True, "air_permeability_value": 10.0}
        )
        description = victorian_terrace.model_copy(update={"ventilation": vent})

        _, infiltration = VentilationCalculator().infiltration(description)

        assert infiltration == pytest.approx(50 / 204 + 0.5)


class TestVentilationHeatLoss:
    """Monthly heat loss."""

    def test_shelter_factor(self, victorian_terrace):
        """Test two sheltered sides give 0.85."""
        result = VentilationCalculator().calculate(victorian_terrace)

        assert result.shelter_factor == pytest.approx(0.85)
        assert result.sheltered_infiltration_ach == pytest.approx(result.infiltration_ach * 0.85)

    def test_heat_loss_from_ach(self, victorian_terrace):
        """Test heat loss = ACH x volume x 0.33."""
        result = VentilationCalculator().calculate(victorian_terrace)

        for ach, loss in zip(result.effective_air_change_rate, result.monthly_heat_loss):
            assert loss == pytest.approx(ach * 204 * AIR_HEAT_CAPACITY)

    def test_twelve_months(self, victorian_terrace):
        """Test monthly series have twelve entries and the average matches."""
        result = VentilationCalculator().calculate(victorian_terrace)

        assert len(result.monthly_heat_loss) == 12
        assert result.average_heat_loss == pytest.approx(sum(result.monthly_heat_loss) / 12)

    def test_more_shelter_less_loss(self, victorian_terrace):
        """Test extra sheltered sides reduce ventilation loss."""
        vent = victorian_terrace.ventilation.model_copy(update={"number_of_sides_sheltered": 4})
        sheltered = victorian_terrace.model_copy(update={"ventilation": vent})

        calc = VentilationCalculator()
        assert calc.calculate(sheltered).average_heat_loss < calc.calculate(victorian_terrace).average_heat_loss
