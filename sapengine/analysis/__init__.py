"""
Analysis module - monthly SAP 2012 calculators.

Components:
- FabricHeatLossCalculator: conductive loss and window solar gains
- VentilationCalculator: infiltration and ventilation heat loss
- InternalGainsCalculator: lighting, appliance, cooking, metabolic gains
- utilisation_factor: shared gain-utilisation formula
- TemperatureModel: two-zone mean internal temperature
- SpaceHeatingDemandCalculator: monthly heat balance
- WaterHeatingCalculator: hot water energy and solar thermal input

All calculators are pure: they take a ClimateDataset at construction and
return frozen result dataclasses.
"""

from .fabric import FabricHeatLossCalculator, FabricResult, ElementHeatLoss
from .solar import solar_radiation
from .ventilation import VentilationCalculator, VentilationResult
from .internal_gains import InternalGainsCalculator, InternalGainsResult, estimate_occupancy
from .utilisation import utilisation_factor, time_constant
from .temperature import TemperatureModel, TemperatureResult, temperature_reduction
from .space_heating import SpaceHeatingDemandCalculator, SpaceHeatingResult
from .water_heating import WaterHeatingCalculator, WaterHeatingResult

__all__ = [
    "FabricHeatLossCalculator",
    "FabricResult",
    "ElementHeatLoss",
    "solar_radiation",
    "VentilationCalculator",
    "VentilationResult",
    "InternalGainsCalculator",
    "InternalGainsResult",
    "estimate_occupancy",
    "utilisation_factor",
    "time_constant",
    "TemperatureModel",
    "TemperatureResult",
    "temperature_reduction",
    "SpaceHeatingDemandCalculator",
    "SpaceHeatingResult",
    "WaterHeatingCalculator",
    "WaterHeatingResult",
]
