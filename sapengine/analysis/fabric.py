"""
Fabric heat loss.

Per element conductive loss (net area x U), aggregated per element type,
plus the thermal mass parameter and window solar gains.

Usage:
    from sapengine.analysis.fabric import FabricHeatLossCalculator

    fabric = FabricHeatLossCalculator().calculate(description)
    print(fabric.total_heat_loss, fabric.by_type())
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import numpy as np

from ..climate import UK_CLIMATE, ClimateDataset, MONTHS
from ..core.models import BuildingDescription, ElementType
from .solar import light_access_gain, window_solar_gain

# kWh per year from a mean power in W
W_TO_KWH_PER_YEAR = 0.024 * 365


@dataclass(frozen=True)
class ElementHeatLoss:
    """Heat loss of a single element."""
    id: str
    type: ElementType
    gross_area: float
    net_area: float
    u_value: float
    k_value: float
    heat_loss: float  # W/K
    monthly_solar_gain: Optional[Tuple[float, ...]] = None  # W, windows only

    def to_dict(self) -> Dict:
        data = {
            "id": self.id,
            "type": self.type.value,
            "gross_area": self.gross_area,
            "net_area": self.net_area,
            "u_value": self.u_value,
            "k_value": self.k_value,
            "heat_loss": self.heat_loss,
        }
        if self.monthly_solar_gain is not None:
            data["monthly_solar_gain"] = list(self.monthly_solar_gain)
        return data


@dataclass(frozen=True)
class FabricResult:
    """Fabric heat loss breakdown (W/K) and solar gains (W)."""
    elements: Tuple[ElementHeatLoss, ...]
    wall_heat_loss: float
    roof_heat_loss: float
    floor_heat_loss: float
    window_heat_loss: float
    total_heat_loss: float
    thermal_mass_parameter: float  # kJ/m2K
    monthly_solar_gain: Tuple[float, ...]
    annual_solar_gain: float  # mean W
    annual_solar_gain_kwh: float
    light_access_factor: float  # GL
    total_area: float = field(default=0.0)

    def by_type(self) -> Dict[str, float]:
        return {
            "floor": self.floor_heat_loss,
            "wall": self.wall_heat_loss,
            "roof": self.roof_heat_loss,
            "window": self.window_heat_loss,
        }

    def to_dict(self) -> Dict:
        return {
            "elements": [e.to_dict() for e in self.elements],
            "heat_loss_by_type": self.by_type(),
            "total_heat_loss": self.total_heat_loss,
            "total_area": self.total_area,
            "thermal_mass_parameter": self.thermal_mass_parameter,
            "monthly_solar_gain": list(self.monthly_solar_gain),
            "annual_solar_gain": self.annual_solar_gain,
            "annual_solar_gain_kwh": self.annual_solar_gain_kwh,
            "light_access_factor": self.light_access_factor,
        }


class FabricHeatLossCalculator:
    """
    Conductive heat loss and solar gain through the building fabric.

    Usage:
        calc = FabricHeatLossCalculator(climate=UK_CLIMATE)
        result = calc.calculate(description)
    """

    def __init__(self, climate: ClimateDataset = UK_CLIMATE):
        self.climate = climate

    def calculate(self, description: BuildingDescription) -> FabricResult:
        """
        Calculate fabric heat loss for a validated description.

        Args:
            description: Building description (invariants already checked)

        Returns:
            FabricResult
        """
        tfa = description.total_floor_area

        # Window area attached to each parent wall
        subtracted: Dict[str, float] = {}
        for element in description.elements:
            if element.is_window and element.subtract_from:
                subtracted[element.subtract_from] = (
                    subtracted.get(element.subtract_from, 0.0) + element.gross_area
                )

        by_type = {t: 0.0 for t in ElementType}
        solar_total = np.zeros(MONTHS)
        results = []
        thermal_capacity = 0.0
        total_area = 0.0
        light_gain = 0.0

        for element in description.elements:
            gross = element.gross_area
            net = max(gross - subtracted.get(element.id, 0.0), 0.0)
            heat_loss = net * element.u_value
            by_type[element.type] += heat_loss
            thermal_capacity += element.k_value * gross
            total_area += net

            monthly_gain = None
            if element.is_window:
                gains = np.array([
                    window_solar_gain(self.climate, description.region, element, m)
                    for m in range(MONTHS)
                ])
                solar_total += gains
                monthly_gain = tuple(float(g) for g in gains)
                light_gain += light_access_gain(self.climate, element)

            results.append(ElementHeatLoss(
                id=element.id,
                type=element.type,
                gross_area=gross,
                net_area=net,
                u_value=element.u_value,
                k_value=element.k_value,
                heat_loss=heat_loss,
                monthly_solar_gain=monthly_gain,
            ))

        total = (
            by_type[ElementType.FLOOR]
            + by_type[ElementType.WALL]
            + by_type[ElementType.ROOF]
            + by_type[ElementType.WINDOW]
        )
        annual_solar = float(solar_total.mean())

        return FabricResult(
            elements=tuple(results),
            wall_heat_loss=by_type[ElementType.WALL],
            roof_heat_loss=by_type[ElementType.ROOF],
            floor_heat_loss=by_type[ElementType.FLOOR],
            window_heat_loss=by_type[ElementType.WINDOW],
            total_heat_loss=total,
            thermal_mass_parameter=thermal_capacity / tfa,
            monthly_solar_gain=tuple(float(g) for g in solar_total),
            annual_solar_gain=annual_solar,
            annual_solar_gain_kwh=annual_solar * W_TO_KWH_PER_YEAR,
            light_access_factor=light_gain / tfa,
            total_area=total_area,
        )
