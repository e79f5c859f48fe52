"""
Ventilation and infiltration heat loss (SAP 2012 section 2).

Steps:
1. Point-source infiltration from chimneys, flues, fans and vents
2. Structural infiltration, or the air permeability test result
3. Shelter factor and monthly wind speed adjustment
4. Effective air change rate for the ventilation system
5. Heat loss = ACH x volume x 0.33 (W/K)

Usage:
    from sapengine.analysis.ventilation import VentilationCalculator

    vent = VentilationCalculator().calculate(description)
    print(vent.average_heat_loss)
"""

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from ..climate import UK_CLIMATE, ClimateDataset, MONTHS
from ..core.models import (
    BuildingDescription,
    Construction,
    SuspendedFloor,
    VentilationConfig,
    VentilationSystem,
)

# Air heat capacity, Wh/m3K
AIR_HEAT_CAPACITY = 0.33

# Design wind speed the monthly factor is relative to (m/s)
REFERENCE_WIND_SPEED = 4.0

# Air flow per opening, m3/h
POINT_SOURCE_FLOW = {
    "chimney": 40.0,
    "open_flue": 20.0,
    "fan_or_vent": 10.0,
}

CONSTRUCTION_INFILTRATION = {
    Construction.TIMBER_FRAME: 0.2,
    Construction.MASONRY: 0.35,
}

FLOOR_INFILTRATION = {
    SuspendedFloor.NONE: 0.0,
    SuspendedFloor.SEALED: 0.1,
    SuspendedFloor.UNSEALED: 0.2,
}


@dataclass(frozen=True)
class VentilationResult:
    """Infiltration and ventilation heat loss."""
    point_source_ach: float
    infiltration_ach: float       # before shelter
    shelter_factor: float
    sheltered_infiltration_ach: float
    adjusted_infiltration: Tuple[float, ...]   # wind-adjusted, per month
    effective_air_change_rate: Tuple[float, ...]
    monthly_heat_loss: Tuple[float, ...]       # W/K
    average_heat_loss: float                   # W/K

    def to_dict(self) -> Dict:
        return {
            "point_source_ach": self.point_source_ach,
            "infiltration_ach": self.infiltration_ach,
            "shelter_factor": self.shelter_factor,
            "sheltered_infiltration_ach": self.sheltered_infiltration_ach,
            "adjusted_infiltration": list(self.adjusted_infiltration),
            "effective_air_change_rate": list(self.effective_air_change_rate),
            "monthly_heat_loss": list(self.monthly_heat_loss),
            "average_heat_loss": self.average_heat_loss,
        }


def effective_air_change_rate(infiltration: float, vent: VentilationConfig) -> float:
    """
    Effective air change rate for one month's wind-adjusted infiltration.

    Args:
        infiltration: Wind-adjusted infiltration (ACH)
        vent: Ventilation configuration

    Returns:
        Effective ACH
    """
    mechanical = vent.system_air_change_rate

    if vent.system == VentilationSystem.BALANCED_HEAT_RECOVERY:
        return infiltration + mechanical * (1.0 - vent.heat_recovery_efficiency)
    if vent.system == VentilationSystem.POSITIVE_INPUT:
        return infiltration + mechanical
    if vent.system == VentilationSystem.EXTRACT_ONLY:
        if infiltration >= mechanical:
            return mechanical
        return infiltration + 0.5 * mechanical
    # Natural ventilation or intermittent extract fans
    if infiltration >= 1.0:
        return infiltration
    return 0.5 + 0.5 * infiltration * infiltration


class VentilationCalculator:
    """
    Monthly ventilation heat loss.

    Usage:
        calc = VentilationCalculator(climate=UK_CLIMATE)
        result = calc.calculate(description)
    """

    def __init__(self, climate: ClimateDataset = UK_CLIMATE):
        self.climate = climate

    def infiltration(self, description: BuildingDescription) -> Tuple[float, float]:
        """Return (point-source ACH, total infiltration ACH) before shelter."""
        vent = description.ventilation
        volume = description.volume

        flow = (
            POINT_SOURCE_FLOW["chimney"] * vent.number_of_chimneys
            + POINT_SOURCE_FLOW["open_flue"] * vent.number_of_open_flues
            + POINT_SOURCE_FLOW["fan_or_vent"] * (
                vent.number_of_intermittent_fans
                + vent.number_of_passive_vents
                + vent.number_of_flueless_gas_fires
            )
        )
        point_source = flow / volume if volume > 0 else 0.0

        if vent.air_permeability_test:
            return point_source, point_source + vent.air_permeability_value / 20.0

        infiltration = point_source
        infiltration += (description.storeys - 1) * 0.1
        infiltration += CONSTRUCTION_INFILTRATION[vent.dwelling_construction]
        infiltration += FLOOR_INFILTRATION[vent.suspended_wooden_floor]
        if not vent.draught_lobby:
            infiltration += 0.05
        infiltration += 0.25 - 0.2 * vent.percentage_draught_proofed / 100.0
        return point_source, infiltration

    def calculate(self, description: BuildingDescription) -> VentilationResult:
        vent = description.ventilation
        point_source, infiltration = self.infiltration(description)

        shelter_factor = 1.0 - 0.075 * vent.number_of_sides_sheltered
        sheltered = infiltration * shelter_factor

        wind = np.array([
            self.climate.wind_speed(description.region, m) for m in range(MONTHS)
        ])
        adjusted = sheltered * wind / REFERENCE_WIND_SPEED
        effective = np.array([effective_air_change_rate(float(n), vent) for n in adjusted])
        heat_loss = effective * description.volume * AIR_HEAT_CAPACITY

        return VentilationResult(
            point_source_ach=point_source,
            infiltration_ach=infiltration,
            shelter_factor=shelter_factor,
            sheltered_infiltration_ach=sheltered,
            adjusted_infiltration=tuple(float(n) for n in adjusted),
            effective_air_change_rate=tuple(float(n) for n in effective),
            monthly_heat_loss=tuple(float(h) for h in heat_loss),
            average_heat_loss=float(heat_loss.mean()),
        )
