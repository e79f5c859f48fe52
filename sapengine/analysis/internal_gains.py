"""
Internal heat gains (SAP 2012 Appendix L and Table 5).

Monthly mean gains in W from:
- Lighting (Appendix L1), reduced by low-energy outlets and daylight
- Appliances (Appendix L2)
- Cooking (Appendix L3)
- Metabolic gains from occupants

Note: the reduced-gains factors (lighting x0.4, appliances x0.67, cooking
23 + 5N) are a heuristic. They have not been reviewed against measured
data.

Usage:
    from sapengine.analysis.internal_gains import InternalGainsCalculator, estimate_occupancy

    n = estimate_occupancy(85.0)
    gains = InternalGainsCalculator().calculate(85.0, n, gl=0.07, config=description.lighting_appliances)
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from ..climate import UK_CLIMATE, ClimateDataset, MONTHS
from ..core.models import LightingApplianceConfig

# Fraction of lighting energy released as heat
LIGHTING_HEAT_FRACTION = 0.85

REDUCED_LIGHTING_FACTOR = 0.4
REDUCED_APPLIANCE_FACTOR = 0.67

# Phase of the seasonal cosine (months)
LIGHTING_PHASE = 0.2
APPLIANCE_PHASE = 1.78


def estimate_occupancy(tfa: float) -> float:
    """
    Assumed number of occupants (SAP 2012 Table 1b).

    Args:
        tfa: Total floor area (m2)

    Returns:
        Occupancy N (at least 1)
    """
    if tfa <= 13.9:
        return 1.0
    excess = tfa - 13.9
    return 1.0 + 1.76 * (1.0 - math.exp(-0.000349 * excess ** 2)) + 0.0013 * excess


@dataclass(frozen=True)
class InternalGainsResult:
    """Monthly internal gains (W) and associated annual energy (kWh)."""
    lighting: Tuple[float, ...]
    appliances: Tuple[float, ...]
    cooking: Tuple[float, ...]
    metabolic: Tuple[float, ...]
    total: Tuple[float, ...]
    annual_lighting_kwh: float
    annual_appliances_kwh: float
    annual_cooking_kwh: float

    def to_dict(self) -> Dict:
        return {
            "lighting": list(self.lighting),
            "appliances": list(self.appliances),
            "cooking": list(self.cooking),
            "metabolic": list(self.metabolic),
            "total": list(self.total),
            "annual_lighting_kwh": self.annual_lighting_kwh,
            "annual_appliances_kwh": self.annual_appliances_kwh,
            "annual_cooking_kwh": self.annual_cooking_kwh,
        }


class InternalGainsCalculator:
    """
    Lighting, appliance, cooking and metabolic gains.

    Usage:
        calc = InternalGainsCalculator()
        gains = calc.calculate(tfa, occupancy, gl, config)
    """

    def __init__(self, climate: ClimateDataset = UK_CLIMATE):
        self.climate = climate

    def calculate(
        self,
        tfa: float,
        occupancy: float,
        gl: float,
        config: LightingApplianceConfig,
    ) -> InternalGainsResult:
        """
        Calculate monthly internal gains.

        Args:
            tfa: Total floor area (m2)
            occupancy: Assumed occupants
            gl: Daylight parameter GL from the fabric calculation
            config: Lighting and appliance options

        Returns:
            InternalGainsResult
        """
        days = np.array(self.climate.days_in_month, dtype=float)
        months = np.arange(MONTHS, dtype=float)
        reduced = config.reduced_internal_heat_gains
        size = (tfa * occupancy) ** 0.4714

        # Lighting (L1)
        lighting_kwh = np.zeros(MONTHS)
        if config.total_outlets > 0:
            c1 = 1.0 - 0.5 * config.low_energy_fraction
            c2 = 52.2 * gl ** 2 - 9.94 * gl + 1.433 if gl <= 0.095 else 0.96
            annual = 59.73 * size * c1 * c2
            lighting_kwh = (
                annual
                * (1.0 + 0.5 * np.cos(2 * math.pi * (months - LIGHTING_PHASE) / 12.0))
                * days / 365.0
            )
        lighting = lighting_kwh * LIGHTING_HEAT_FRACTION * 1000.0 / (24.0 * days)
        if reduced:
            lighting = REDUCED_LIGHTING_FACTOR * lighting

        # Appliances (L2)
        appliances_kwh = (
            207.8 * size
            * (1.0 + 0.157 * np.cos(2 * math.pi * (months - APPLIANCE_PHASE) / 12.0))
            * days / 365.0
        )
        appliances = appliances_kwh * 1000.0 / (24.0 * days)
        if reduced:
            appliances = REDUCED_APPLIANCE_FACTOR * appliances

        # Cooking (L3)
        cooking_w = 23.0 + 5.0 * occupancy if reduced else 35.0 + 7.0 * occupancy
        cooking = np.full(MONTHS, cooking_w)

        metabolic = np.full(MONTHS, 60.0 * occupancy)

        total = lighting + appliances + cooking + metabolic

        return InternalGainsResult(
            lighting=tuple(float(x) for x in lighting),
            appliances=tuple(float(x) for x in appliances),
            cooking=tuple(float(x) for x in cooking),
            metabolic=tuple(float(x) for x in metabolic),
            total=tuple(float(x) for x in total),
            annual_lighting_kwh=float(lighting_kwh.sum()),
            annual_appliances_kwh=float(appliances_kwh.sum()),
            annual_cooking_kwh=cooking_w * 0.024 * 365,
        )
