"""
Domestic hot water energy (SAP 2012 section 4 and Appendix H).

Energy content of the hot water used each month, plus an optional solar
thermal contribution that is reported separately and never exceeds the
monthly energy content.

Usage:
    from sapengine.analysis.water_heating import WaterHeatingCalculator

    water = WaterHeatingCalculator().calculate(description, occupancy)
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from ..climate import UK_CLIMATE, ClimateDataset, MONTHS
from ..core.models import BuildingDescription, Overshading, SolarHotWaterConfig
from .solar import solar_radiation

# Specific heat of water, kJ/kgK
WATER_HEAT_CAPACITY = 4.19

LOW_WATER_USE_FACTOR = 0.95

# Table H2: collector overshading factor
COLLECTOR_OVERSHADING = {
    Overshading.HEAVY: 0.5,
    Overshading.MORE_THAN_AVERAGE: 0.65,
    Overshading.AVERAGE: 0.8,
    Overshading.VERY_LITTLE: 1.0,
}


def daily_hot_water_volume(occupancy: float, low_water_use: bool = False) -> float:
    """Average daily hot water use Vd (litres/day)."""
    volume = 25.0 * occupancy + 36.0
    if low_water_use:
        volume *= LOW_WATER_USE_FACTOR
    return volume


def collector_performance_factor(ratio: float) -> float:
    """Collector performance factor from a*/eta0 (H14)."""
    if ratio < 20:
        factor = 0.97 - 0.0367 * ratio + 0.0006 * ratio ** 2
    else:
        factor = 0.693 - 0.0108 * ratio
    return max(factor, 0.0)


def storage_volume_factor(effective_volume: float, daily_volume: float) -> float:
    """Solar storage volume factor (H16); 1.0 when no dedicated volume is given."""
    if effective_volume <= 0 or daily_volume <= 0:
        return 1.0
    factor = 1.0 + 0.2 * math.log(effective_volume / daily_volume)
    return min(max(factor, 0.0), 1.0)


@dataclass(frozen=True)
class WaterHeatingResult:
    """Monthly hot water volume (litres/day) and energy (kWh)."""
    daily_volume: float
    monthly_volume: Tuple[float, ...]
    monthly_energy_content: Tuple[float, ...]
    annual_energy_content: float
    monthly_solar_input: Tuple[float, ...]
    annual_solar_input: float

    @property
    def annual_net_demand(self) -> float:
        return self.annual_energy_content - self.annual_solar_input

    def to_dict(self) -> Dict:
        return {
            "daily_volume": self.daily_volume,
            "monthly_volume": list(self.monthly_volume),
            "monthly_energy_content": list(self.monthly_energy_content),
            "annual_energy_content": self.annual_energy_content,
            "monthly_solar_input": list(self.monthly_solar_input),
            "annual_solar_input": self.annual_solar_input,
            "annual_net_demand": self.annual_net_demand,
        }


class WaterHeatingCalculator:
    """
    Hot water energy content and solar thermal input.

    Usage:
        calc = WaterHeatingCalculator()
        result = calc.calculate(description, occupancy)
    """

    def __init__(self, climate: ClimateDataset = UK_CLIMATE):
        self.climate = climate

    def calculate(self, description: BuildingDescription, occupancy: float) -> WaterHeatingResult:
        config = description.water_heating
        if not config.enabled:
            zeros = tuple(0.0 for _ in range(MONTHS))
            return WaterHeatingResult(0.0, zeros, zeros, 0.0, zeros, 0.0)

        days = np.array(self.climate.days_in_month, dtype=float)
        vd = daily_hot_water_volume(occupancy, config.low_water_use)
        volume = vd * np.array(self.climate.hot_water_monthly_factor)
        rise = np.array(self.climate.hot_water_temperature_rise)
        content = WATER_HEAT_CAPACITY * volume * days * rise / 3600.0

        solar = np.zeros(MONTHS)
        if description.solar_hot_water.enabled:
            solar = self._solar_input(description, description.solar_hot_water, vd, content)

        return WaterHeatingResult(
            daily_volume=vd,
            monthly_volume=tuple(float(v) for v in volume),
            monthly_energy_content=tuple(float(e) for e in content),
            annual_energy_content=float(content.sum()),
            monthly_solar_input=tuple(float(s) for s in solar),
            annual_solar_input=float(solar.sum()),
        )

    def _solar_input(
        self,
        description: BuildingDescription,
        collector: SolarHotWaterConfig,
        daily_volume: float,
        content: np.ndarray,
    ) -> np.ndarray:
        """Monthly solar contribution (kWh), Appendix H monthly method."""
        if collector.aperture_area <= 0 or collector.zero_loss_efficiency <= 0:
            return np.zeros(MONTHS)

        a_star = 0.892 * (collector.linear_loss_coefficient + 45.0 * collector.second_order_loss_coefficient)
        performance = collector_performance_factor(a_star / collector.zero_loss_efficiency)
        storage = storage_volume_factor(collector.dedicated_storage_volume, daily_volume)
        shading = COLLECTOR_OVERSHADING[collector.overshading]

        solar = np.zeros(MONTHS)
        for m in range(MONTHS):
            flux = solar_radiation(
                self.climate, description.region, int(collector.orientation), collector.tilt, m
            )
            available = (
                collector.aperture_area * collector.zero_loss_efficiency * shading
                * max(flux, 0.0) * 0.024 * self.climate.days_in_month[m]
            )
            if available <= 0 or content[m] <= 0:
                continue
            ratio = available / content[m]
            utilisation = 1.0 - math.exp(-1.0 / ratio)
            solar[m] = min(available * utilisation * performance * storage, content[m])
        return solar
