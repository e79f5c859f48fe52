"""
Mean internal temperature (SAP 2012 Table 9, 9a, 9b, 9c).

For each month, the living area is heated to the target temperature and
the rest of the dwelling to a target derated by the heat loss parameter.
Each zone's daily mean subtracts the temperature drop during heating-off
periods: 7 h and 8 h on weekdays, 8 h at weekends.

Usage:
    from sapengine.analysis.temperature import TemperatureModel

    temps = TemperatureModel().calculate(description, tmp, heat_transfer, gains)
"""

import math
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np

from ..climate import UK_CLIMATE, ClimateDataset, MONTHS
from ..core.models import BuildingDescription, ControlType, TemperatureConfig
from .utilisation import time_constant, utilisation_factor

# Heating-off hours
WEEKDAY_OFF_PERIODS = (7.0, 8.0)
WEEKEND_OFF_PERIODS = (0.0, 8.0)

# Table 9 applies HLP up to this value when derating the rest of the dwelling
MAX_HLP_FOR_REST_OF_DWELLING = 6.0


def external_temperatures(climate: ClimateDataset, region: int, altitude: float) -> np.ndarray:
    """Monthly external temperature corrected for altitude (0.3 K per 50 m)."""
    correction = 0.3 * altitude / 50.0
    return np.array([
        climate.external_temperature(region, m) - correction for m in range(MONTHS)
    ])


def temperature_reduction(
    tmp: float,
    hlp: float,
    h: float,
    ti: float,
    te: float,
    g: float,
    responsiveness: float,
    th: float,
    toff: float,
) -> float:
    """
    Mean temperature drop over a heating-off period (Table 9b).

    Args:
        tmp: Thermal mass parameter (kJ/m2K)
        hlp: Heat loss parameter (W/m2K)
        h: Heat transfer coefficient (W/K)
        ti: Temperature the utilisation factor is evaluated at (C)
        te: External temperature (C)
        g: Total gains (W)
        responsiveness: Heating system responsiveness R (0-1)
        th: Demand temperature of the zone (C)
        toff: Hours the heating is off

    Returns:
        Reduction u (K); 0 for degenerate inputs
    """
    if h <= 0 or hlp <= 0 or toff <= 0:
        return 0.0

    eta = utilisation_factor(tmp, hlp, h, ti, te, g)
    tc = 4.0 + 0.25 * time_constant(tmp, hlp)
    tsc = (1.0 - responsiveness) * (th - 2.0) + responsiveness * (te + eta * g / h)

    if toff <= tc:
        u = 0.5 * toff * toff * (th - tsc) / (24.0 * tc)
    else:
        u = (th - tsc) * (toff - 0.5 * tc) / 24.0

    if math.isnan(u):
        return 0.0
    return u


def rest_of_dwelling_target(target: float, hlp: float, control_type: ControlType) -> float:
    """Demand temperature for the rest of the dwelling (Table 9, Th2)."""
    hlp = min(hlp, MAX_HLP_FOR_REST_OF_DWELLING)
    if control_type == ControlType.TYPE_1:
        th2 = target - 0.5 * hlp
    else:
        th2 = target - hlp + hlp ** 2 / 12.0
    if math.isnan(th2):
        return target
    return th2


@dataclass(frozen=True)
class TemperatureResult:
    """Monthly and annual mean temperatures (C)."""
    living_area: Tuple[float, ...]
    rest_of_dwelling: Tuple[float, ...]
    internal: Tuple[float, ...]
    external: Tuple[float, ...]
    annual_internal: float
    annual_external: float

    def to_dict(self) -> Dict:
        return {
            "living_area": list(self.living_area),
            "rest_of_dwelling": list(self.rest_of_dwelling),
            "internal": list(self.internal),
            "external": list(self.external),
            "annual_internal": self.annual_internal,
            "annual_external": self.annual_external,
        }


class TemperatureModel:
    """
    Two-zone monthly mean internal temperature.

    The utilisation factor is always applied to gains here, independent
    of SpaceHeatingConfig.use_utilisation_factor_for_gains.
    """

    def __init__(self, climate: ClimateDataset = UK_CLIMATE):
        self.climate = climate

    def zone_mean(
        self,
        tmp: float,
        hlp: float,
        h: float,
        te: float,
        g: float,
        responsiveness: float,
        th: float,
    ) -> float:
        """Weekly mean temperature of a zone heated to `th` (Table 9c)."""
        def reduction(off_periods: Sequence[float]) -> float:
            return sum(
                temperature_reduction(tmp, hlp, h, th, te, g, responsiveness, th, toff)
                for toff in off_periods
            )

        weekday = th - reduction(WEEKDAY_OFF_PERIODS)
        weekend = th - reduction(WEEKEND_OFF_PERIODS)
        return (5.0 * weekday + 2.0 * weekend) / 7.0

    def calculate(
        self,
        description: BuildingDescription,
        tmp: float,
        heat_transfer: Sequence[float],
        gains: Sequence[float],
    ) -> TemperatureResult:
        """
        Calculate monthly internal temperatures.

        Args:
            description: Building description
            tmp: Thermal mass parameter (kJ/m2K)
            heat_transfer: Monthly fabric + ventilation heat loss H (W/K)
            gains: Monthly solar + internal gains (W)

        Returns:
            TemperatureResult
        """
        config: TemperatureConfig = description.temperature
        tfa = description.total_floor_area
        te = external_temperatures(self.climate, description.region, description.altitude)
        r = config.responsiveness
        f_la = config.living_area_fraction

        living = np.zeros(MONTHS)
        rest = np.zeros(MONTHS)
        for m in range(MONTHS):
            h = heat_transfer[m]
            hlp = h / tfa
            g = gains[m]
            living[m] = self.zone_mean(tmp, hlp, h, te[m], g, r, config.target)
            th2 = rest_of_dwelling_target(config.target, hlp, config.control_type)
            rest[m] = self.zone_mean(tmp, hlp, h, te[m], g, r, th2)

        internal = f_la * living + (1.0 - f_la) * rest

        return TemperatureResult(
            living_area=tuple(float(t) for t in living),
            rest_of_dwelling=tuple(float(t) for t in rest),
            internal=tuple(float(t) for t in internal),
            external=tuple(float(t) for t in te),
            annual_internal=float(internal.mean()),
            annual_external=float(te.mean()),
        )
