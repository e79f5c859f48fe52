"""
Building description models.

Typed, immutable input to the energy engine:
- FloorSpec: one storey's floor area and height
- FabricElement: wall, roof, floor or window with U-value and k-value
- VentilationConfig: infiltration sources and ventilation system
- LightingApplianceConfig, WaterHeatingConfig, SolarHotWaterConfig
- TemperatureConfig, SpaceHeatingConfig: heating-control policy
- BuildingDescription: the complete dwelling

Every optional field has a documented default. Cross-field invariants
(TFA > 0, window parents, net wall area) are checked once at the engine
boundary by sapengine.utils.validation.

Usage:
    from sapengine.core.models import BuildingDescription, FabricElement

    description = BuildingDescription(
        region=13,
        floors=[{"area": 42.5, "height": 2.4}, {"area": 42.5, "height": 2.4}],
        elements=[{"id": "walls", "type": "wall", "area": 62, "u_value": 2.1}],
    )
    upgraded = description.with_u_values({"walls": 0.3})
"""

from enum import Enum, IntEnum
from typing import Dict, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# ENUMS
# =============================================================================

class ElementType(str, Enum):
    """Fabric element categories."""
    WALL = "wall"
    ROOF = "roof"
    FLOOR = "floor"
    WINDOW = "window"


class Orientation(IntEnum):
    """Compass orientation of a glazed element, clockwise from north."""
    NORTH = 0
    NORTH_EAST = 1
    EAST = 2
    SOUTH_EAST = 3
    SOUTH = 4
    SOUTH_WEST = 5
    WEST = 6
    NORTH_WEST = 7

    @property
    def solar_column(self) -> int:
        """Coefficient column; SW, W and NW mirror SE, E and NE."""
        return {5: 3, 6: 2, 7: 1}.get(int(self), int(self))


class Overshading(IntEnum):
    """Overshading class, SAP Table 6d row."""
    HEAVY = 0
    MORE_THAN_AVERAGE = 1
    AVERAGE = 2
    VERY_LITTLE = 3


class VentilationSystem(str, Enum):
    """Ventilation system. Values are the legacy single-letter codes."""
    BALANCED_HEAT_RECOVERY = "a"
    POSITIVE_INPUT = "b"
    EXTRACT_ONLY = "c"
    NATURAL = "d"


class Construction(str, Enum):
    TIMBER_FRAME = "timberframe"
    MASONRY = "masonry"


class SuspendedFloor(str, Enum):
    NONE = "none"
    SEALED = "sealed"
    UNSEALED = "unsealed"


class ControlType(IntEnum):
    """
    Heating control type for the rest of the dwelling.

    TYPE_1: not separately controlled, target derated linearly by HLP.
    TYPE_2 / TYPE_3: separate temperature (and time) control, target
    derated by HLP with a quadratic correction.
    """
    TYPE_1 = 1
    TYPE_2 = 2
    TYPE_3 = 3


# =============================================================================
# COMPONENT MODELS
# =============================================================================

class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class FloorSpec(_Frozen):
    """One storey."""
    name: str = ""
    area: float = Field(ge=0, description="Floor area (m2)")
    height: float = Field(gt=0, description="Storey height (m)")

    @property
    def volume(self) -> float:
        return self.area * self.height


class FabricElement(_Frozen):
    """
    A heat-loss element.

    The gross area is `length * height` when both are given, otherwise
    `area`. Windows reduce the net area of the element named by
    `subtract_from`. Orientation, overshading, g and ff only matter for
    windows.
    """
    id: str = Field(min_length=1)
    type: ElementType
    name: str = ""
    area: float = Field(default=0.0, ge=0)
    length: Optional[float] = Field(default=None, ge=0)
    height: Optional[float] = Field(default=None, ge=0)
    u_value: float = Field(ge=0, description="Thermal transmittance (W/m2K)")
    k_value: float = Field(default=0.0, ge=0, description="Heat capacity per area (kJ/m2K)")
    subtract_from: Optional[str] = None
    orientation: Orientation = Orientation.SOUTH
    overshading: Overshading = Overshading.AVERAGE
    g: float = Field(default=0.7, ge=0, le=1, description="Solar transmittance")
    ff: float = Field(default=0.7, ge=0, le=1, description="Frame factor")

    @property
    def gross_area(self) -> float:
        if self.length and self.height:
            return self.length * self.height
        return self.area

    @property
    def is_window(self) -> bool:
        return self.type == ElementType.WINDOW


class VentilationConfig(_Frozen):
    """Infiltration sources and ventilation system (SAP worksheet box 6-24)."""
    number_of_chimneys: int = Field(default=0, ge=0)
    number_of_open_flues: int = Field(default=0, ge=0)
    number_of_intermittent_fans: int = Field(default=0, ge=0)
    number_of_passive_vents: int = Field(default=0, ge=0)
    number_of_flueless_gas_fires: int = Field(default=0, ge=0)
    air_permeability_test: bool = False
    air_permeability_value: float = Field(default=0.0, ge=0, description="q50 (m3/h/m2)")
    dwelling_construction: Construction = Construction.MASONRY
    suspended_wooden_floor: SuspendedFloor = SuspendedFloor.NONE
    draught_lobby: bool = False
    percentage_draught_proofed: float = Field(default=0.0, ge=0, le=100)
    number_of_sides_sheltered: int = Field(default=2, ge=0, le=4)
    system: VentilationSystem = VentilationSystem.NATURAL
    system_air_change_rate: float = Field(default=0.5, ge=0)
    heat_recovery_efficiency: float = Field(default=0.0, ge=0, le=1)


class LightingApplianceConfig(_Frozen):
    """
    Lighting and appliance gains.

    Only the ratio low_energy_outlets / total_outlets matters, so either
    outlet counts or a (fraction, 1.0) pair may be given. Zero total
    outlets means no fixed lighting.
    """
    low_energy_outlets: float = Field(default=0.5, ge=0)
    total_outlets: float = Field(default=1.0, ge=0)
    reduced_internal_heat_gains: bool = False
    report_energy_requirements: bool = False

    @model_validator(mode="after")
    def _check_outlets(self) -> "LightingApplianceConfig":
        if self.total_outlets > 0 and self.low_energy_outlets > self.total_outlets:
            raise ValueError("low_energy_outlets cannot exceed total_outlets")
        return self

    @property
    def low_energy_fraction(self) -> float:
        if self.total_outlets == 0:
            return 0.0
        return self.low_energy_outlets / self.total_outlets


class WaterHeatingConfig(_Frozen):
    enabled: bool = True
    low_water_use: bool = Field(default=False, description="Design target of 125 l/person/day")


class SolarHotWaterConfig(_Frozen):
    """Solar thermal collector (SAP 2012 Appendix H). Defaults: glazed flat plate."""
    enabled: bool = False
    aperture_area: float = Field(default=3.0, ge=0, description="Collector aperture (m2)")
    zero_loss_efficiency: float = Field(default=0.75, ge=0, le=1)
    linear_loss_coefficient: float = Field(default=3.5, ge=0)
    second_order_loss_coefficient: float = Field(default=0.015, ge=0)
    tilt: float = Field(default=30.0, ge=0, le=90)
    orientation: Orientation = Orientation.SOUTH
    overshading: Overshading = Overshading.VERY_LITTLE
    dedicated_storage_volume: float = Field(default=0.0, ge=0, description="Litres")


class TemperatureConfig(_Frozen):
    """Heating-control policy."""
    responsiveness: float = Field(default=1.0, ge=0, le=1)
    target: float = Field(default=21.0, description="Living area demand temperature (C)")
    control_type: ControlType = ControlType.TYPE_1
    living_area_fraction: float = Field(default=1.0, ge=0, le=1)


class SpaceHeatingConfig(_Frozen):
    use_utilisation_factor_for_gains: bool = True


# =============================================================================
# BUILDING DESCRIPTION
# =============================================================================

class BuildingDescription(_Frozen):
    """Complete dwelling description consumed by EnergySimulationEngine."""
    name: str = ""
    region: int = Field(default=0, ge=0)
    altitude: float = Field(default=0.0, description="Metres above sea level")
    floors: Tuple[FloorSpec, ...] = Field(min_length=1)
    elements: Tuple[FabricElement, ...] = ()
    ventilation: VentilationConfig = Field(default_factory=VentilationConfig)
    lighting_appliances: LightingApplianceConfig = Field(default_factory=LightingApplianceConfig)
    water_heating: WaterHeatingConfig = Field(default_factory=WaterHeatingConfig)
    solar_hot_water: SolarHotWaterConfig = Field(default_factory=SolarHotWaterConfig)
    temperature: TemperatureConfig = Field(default_factory=TemperatureConfig)
    space_heating: SpaceHeatingConfig = Field(default_factory=SpaceHeatingConfig)
    occupancy: Optional[float] = Field(default=None, gt=0, description="Override for assumed occupancy")

    @property
    def total_floor_area(self) -> float:
        return sum(floor.area for floor in self.floors)

    @property
    def volume(self) -> float:
        return sum(floor.volume for floor in self.floors)

    @property
    def storeys(self) -> int:
        return len(self.floors)

    def element(self, element_id: str) -> FabricElement:
        for element in self.elements:
            if element.id == element_id:
                return element
        raise KeyError(element_id)

    def elements_of_type(self, element_type: ElementType) -> Tuple[FabricElement, ...]:
        return tuple(e for e in self.elements if e.type == element_type)

    def with_u_values(self, overrides: Mapping[str, float]) -> "BuildingDescription":
        """
        Derive a new description with some element U-values replaced.

        Args:
            overrides: Element id -> new U-value

        Returns:
            New BuildingDescription; self is unchanged

        Raises:
            KeyError: If an id does not name an element
        """
        known = {e.id for e in self.elements}
        missing = [element_id for element_id in overrides if element_id not in known]
        if missing:
            raise KeyError(", ".join(missing))

        elements = tuple(
            e.model_copy(update={"u_value": float(overrides[e.id])}) if e.id in overrides else e
            for e in self.elements
        )
        return self.model_copy(update={"elements": elements})

    def with_u_values_for_type(self, element_type: ElementType, u_value: float) -> "BuildingDescription":
        """Derive a new description with every element of one type set to `u_value`."""
        overrides: Dict[str, float] = {
            e.id: u_value for e in self.elements if e.type == element_type
        }
        return self.with_u_values(overrides)
