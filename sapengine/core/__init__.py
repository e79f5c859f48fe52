"""
Core module - building description models and settings.
"""

from .models import (
    BuildingDescription,
    FloorSpec,
    FabricElement,
    ElementType,
    Orientation,
    Overshading,
    VentilationConfig,
    VentilationSystem,
    Construction,
    SuspendedFloor,
    LightingApplianceConfig,
    WaterHeatingConfig,
    SolarHotWaterConfig,
    TemperatureConfig,
    ControlType,
    SpaceHeatingConfig,
)
from .config import Settings, settings

__all__ = [
    "BuildingDescription",
    "FloorSpec",
    "FabricElement",
    "ElementType",
    "Orientation",
    "Overshading",
    "VentilationConfig",
    "VentilationSystem",
    "Construction",
    "SuspendedFloor",
    "LightingApplianceConfig",
    "WaterHeatingConfig",
    "SolarHotWaterConfig",
    "TemperatureConfig",
    "ControlType",
    "SpaceHeatingConfig",
    "Settings",
    "settings",
]
