"""
Energy simulation engine.

Orchestrates the monthly calculators:

    BuildingDescription
        -> fabric heat loss, solar gains, TMP, GL
        -> ventilation heat loss
        -> occupancy and internal gains
        -> mean internal temperature
        -> space heating demand
        -> water heating energy
        = EnergyDemandResult

The engine is pure: no I/O, no logging, no state kept between calls.
Input is validated once here; numeric edge cases inside the calculators
resolve to 0.

Usage:
    from sapengine.simulation import EnergySimulationEngine

    engine = EnergySimulationEngine()
    result = engine.run(description)
    print(result.annual_space_heating_kwh)
"""

from typing import Any, Dict, Union

import numpy as np

from ..analysis.fabric import FabricHeatLossCalculator, FabricResult
from ..analysis.internal_gains import InternalGainsCalculator, estimate_occupancy
from ..analysis.space_heating import SpaceHeatingDemandCalculator
from ..analysis.temperature import TemperatureModel
from ..analysis.ventilation import VentilationCalculator
from ..analysis.water_heating import WaterHeatingCalculator
from ..climate import UK_CLIMATE, ClimateDataset
from ..core.models import BuildingDescription
from ..utils.validation import coerce_building_description, validate_building_description
from .results import EnergyDemandResult, EnergyRequirements

DescriptionInput = Union[BuildingDescription, Dict[str, Any]]


class EnergySimulationEngine:
    """
    SAP-2012-style monthly energy engine.

    Usage:
        engine = EnergySimulationEngine(climate=UK_CLIMATE)
        result = engine.run(description)
    """

    def __init__(self, climate: ClimateDataset = UK_CLIMATE):
        self.climate = climate
        self.fabric = FabricHeatLossCalculator(climate)
        self.ventilation = VentilationCalculator(climate)
        self.internal_gains = InternalGainsCalculator(climate)
        self.temperature = TemperatureModel(climate)
        self.space_heating = SpaceHeatingDemandCalculator(climate)
        self.water_heating = WaterHeatingCalculator(climate)

    def validate(self, description: DescriptionInput) -> BuildingDescription:
        """Parse and check a description. Raises InvalidInputError."""
        parsed = coerce_building_description(description)
        return validate_building_description(parsed, self.climate)

    def calculate_fabric_heat_loss(self, description: DescriptionInput) -> FabricResult:
        """Fabric heat loss only (W/K by element and type)."""
        return self.fabric.calculate(self.validate(description))

    def run(self, description: DescriptionInput) -> EnergyDemandResult:
        """
        Calculate energy demand for one building.

        Args:
            description: BuildingDescription or equivalent dict

        Returns:
            EnergyDemandResult

        Raises:
            InvalidInputError: If the description is malformed
        """
        d = self.validate(description)
        tfa = d.total_floor_area

        fabric = self.fabric.calculate(d)
        ventilation = self.ventilation.calculate(d)

        occupancy = d.occupancy if d.occupancy is not None else estimate_occupancy(tfa)
        gains = self.internal_gains.calculate(
            tfa, occupancy, fabric.light_access_factor, d.lighting_appliances
        )

        heat_transfer = fabric.total_heat_loss + np.array(ventilation.monthly_heat_loss)
        total_gains = np.array(fabric.monthly_solar_gain) + np.array(gains.total)

        temperature = self.temperature.calculate(
            d, fabric.thermal_mass_parameter, heat_transfer, total_gains
        )
        space_heating = self.space_heating.calculate(
            fabric.thermal_mass_parameter,
            tfa,
            heat_transfer,
            temperature.internal,
            temperature.external,
            total_gains,
            use_utilisation_factor=d.space_heating.use_utilisation_factor_for_gains,
        )
        water_heating = self.water_heating.calculate(d, occupancy)

        report_lac = d.lighting_appliances.report_energy_requirements
        requirements = EnergyRequirements(
            space_heating=space_heating.annual_demand_kwh,
            water_heating=water_heating.annual_net_demand,
            lighting=gains.annual_lighting_kwh if report_lac else None,
            appliances=gains.annual_appliances_kwh if report_lac else None,
            cooking=gains.annual_cooking_kwh if report_lac else None,
        )

        return EnergyDemandResult(
            name=d.name,
            total_floor_area=tfa,
            volume=d.volume,
            storeys=d.storeys,
            occupancy=occupancy,
            fabric=fabric,
            ventilation=ventilation,
            gains=gains,
            heat_transfer=tuple(float(h) for h in heat_transfer),
            heat_loss_parameter=tuple(float(h) / tfa for h in heat_transfer),
            temperature=temperature,
            space_heating=space_heating,
            water_heating=water_heating,
            energy_requirements=requirements,
        )


_default_engine = EnergySimulationEngine()


def calculate_energy_demand(description: DescriptionInput) -> EnergyDemandResult:
    """Run the default (UK climate) engine on one description."""
    return _default_engine.run(description)
