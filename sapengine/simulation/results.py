"""
Energy demand results.

EnergyDemandResult bundles every calculator's output for one building:
- Geometry (TFA, volume) and occupancy
- Fabric heat loss by type and window solar gains
- Monthly ventilation heat loss
- Monthly gains breakdown
- Monthly and annual temperatures
- Annual space heating and water heating demand

Results are frozen and compare by value, so two runs over the same
description can be checked with ==.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..analysis.fabric import FabricResult
from ..analysis.internal_gains import InternalGainsResult
from ..analysis.space_heating import SpaceHeatingResult
from ..analysis.temperature import TemperatureResult
from ..analysis.ventilation import VentilationResult
from ..analysis.water_heating import WaterHeatingResult


@dataclass(frozen=True)
class EnergyRequirements:
    """Annual delivered-energy requirements before system efficiency (kWh)."""
    space_heating: float
    water_heating: float
    lighting: Optional[float] = None
    appliances: Optional[float] = None
    cooking: Optional[float] = None

    def to_dict(self) -> Dict[str, float]:
        data = {
            "space_heating": self.space_heating,
            "water_heating": self.water_heating,
        }
        for key in ("lighting", "appliances", "cooking"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class EnergyDemandResult:
    """Complete result of one engine run."""
    name: str
    total_floor_area: float
    volume: float
    storeys: int
    occupancy: float
    fabric: FabricResult
    ventilation: VentilationResult
    gains: InternalGainsResult
    heat_transfer: Tuple[float, ...]        # fabric + ventilation, W/K
    heat_loss_parameter: Tuple[float, ...]  # W/m2K
    temperature: TemperatureResult
    space_heating: SpaceHeatingResult
    water_heating: WaterHeatingResult
    energy_requirements: EnergyRequirements

    @property
    def annual_space_heating_kwh(self) -> float:
        return self.space_heating.annual_demand_kwh

    @property
    def annual_water_heating_kwh(self) -> float:
        return self.water_heating.annual_energy_content

    @property
    def fabric_heat_loss(self) -> float:
        return self.fabric.total_heat_loss

    @property
    def average_ventilation_heat_loss(self) -> float:
        return self.ventilation.average_heat_loss

    @property
    def monthly_gains(self) -> Dict[str, Tuple[float, ...]]:
        """Gains breakdown per month (W)."""
        return {
            "solar": self.fabric.monthly_solar_gain,
            "lighting": self.gains.lighting,
            "appliances": self.gains.appliances,
            "cooking": self.gains.cooking,
            "metabolic": self.gains.metabolic,
        }

    def summary(self) -> Dict[str, float]:
        """Headline figures."""
        return {
            "total_floor_area": self.total_floor_area,
            "volume": self.volume,
            "occupancy": self.occupancy,
            "fabric_heat_loss": self.fabric_heat_loss,
            "average_ventilation_heat_loss": self.average_ventilation_heat_loss,
            "annual_internal_temperature": self.temperature.annual_internal,
            "annual_external_temperature": self.temperature.annual_external,
            "annual_space_heating_kwh": self.annual_space_heating_kwh,
            "space_heating_kwh_per_m2": self.space_heating.annual_demand_kwh_per_m2,
            "annual_water_heating_kwh": self.annual_water_heating_kwh,
        }

    def to_dict(self) -> Dict:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "name": self.name,
            "summary": self.summary(),
            "storeys": self.storeys,
            "fabric": self.fabric.to_dict(),
            "ventilation": self.ventilation.to_dict(),
            "gains": self.gains.to_dict(),
            "heat_transfer": list(self.heat_transfer),
            "heat_loss_parameter": list(self.heat_loss_parameter),
            "temperature": self.temperature.to_dict(),
            "space_heating": self.space_heating.to_dict(),
            "water_heating": self.water_heating.to_dict(),
            "energy_requirements": self.energy_requirements.to_dict(),
        }
