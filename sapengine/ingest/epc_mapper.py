"""
Energy Performance Certificate (EPC) mapper.

Infers a complete BuildingDescription from a loosely typed certificate
record (the open-data EPC register columns):
- Region from the postcode area
- Storeys, wall, window, roof and floor areas from floor area and rooms
- U-values and thermal mass from the element descriptions
- Ventilation system from the mechanical ventilation text
- Low-energy lighting fraction and solar hot water flag

The result is an approximation for an unsurveyed dwelling, never a
measurement. Missing, blank or unparseable fields fall back to documented
defaults; mapping never raises. Each inferred value records its source in
an InferenceReport.

Usage:
    mapper = ParameterInferenceMapper()
    description, report = mapper.map_with_report({
        "postcode": "CF10 1AA",
        "total_floor_area": 85,
        "walls_description": "Cavity wall, filled cavity",
    })
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..baseline.u_values import (
    SINGLE_GLAZING_U_VALUE,
    UValueEstimate,
    UValueSource,
    blend_window_u_value,
    lookup_u_value,
    thermal_mass,
)
from ..core.config import Settings, settings as default_settings
from ..core.models import (
    BuildingDescription,
    Construction,
    ElementType,
    FabricElement,
    FloorSpec,
    LightingApplianceConfig,
    Orientation,
    Overshading,
    SolarHotWaterConfig,
    SuspendedFloor,
    TemperatureConfig,
    VentilationConfig,
    VentilationSystem,
)
from ..geometry.building_geometry import BuildingGeometryCalculator, plausible_room_count

logger = logging.getLogger(__name__)

# Values the register uses for "no data"
_MISSING_MARKERS = {"", "n/a", "na", "none", "null", "no data!", "invalid!", "not recorded", "unknown"}


# =============================================================================
# POSTCODE AREA -> SAP CLIMATE REGION
# =============================================================================

POSTCODE_AREA_REGIONS: Dict[str, int] = {}

_REGION_AREAS: Dict[int, Tuple[str, ...]] = {
    1: ("E", "EC", "N", "NW", "SE", "SW", "W", "WC", "BR", "CR", "DA", "EN", "HA", "IG",
        "KT", "RM", "SM", "TW", "UB", "WD", "AL", "HP", "LU", "SG", "SL", "RG", "OX"),
    2: ("BN", "CT", "ME", "RH", "TN", "GU"),
    3: ("SO", "PO", "BH", "SP", "DT"),
    4: ("EX", "PL", "TQ", "TR", "TA"),
    5: ("BS", "BA", "GL", "HR"),
    6: ("B", "CV", "DY", "WS", "WV", "ST", "DE", "LE", "NG", "NN", "MK", "TF", "WR"),
    7: ("M", "BL", "OL", "SK", "WN", "WA", "CW", "CH", "L", "PR", "BB"),
    8: ("CA", "LA", "FY", "DG"),
    9: ("TD",),
    10: ("NE", "DH", "SR", "TS", "DL"),
    11: ("LS", "BD", "HD", "HX", "WF", "S", "DN", "HU", "YO", "HG"),
    12: ("CB", "IP", "NR", "PE", "CO", "SS", "LN"),
    13: ("CF", "SA", "LL", "LD", "SY", "NP"),
    14: ("G", "PA", "KA", "ML"),
    15: ("EH", "FK", "KY", "DD"),
    16: ("AB", "PH"),
    17: ("IV", "KW"),
    18: ("HS",),
    20: ("ZE",),
    21: ("BT",),
}

for _region, _areas in _REGION_AREAS.items():
    for _area in _areas:
        POSTCODE_AREA_REGIONS[_area] = _region

_POSTCODE_AREA = re.compile(r"^([A-Z]{1,2})\d")


def region_from_postcode(postcode: Optional[str]) -> Optional[int]:
    """SAP climate region for a UK postcode, None if the area is unknown."""
    if not postcode:
        return None
    match = _POSTCODE_AREA.match(postcode.strip().upper())
    if not match:
        return None
    return POSTCODE_AREA_REGIONS.get(match.group(1))


# =============================================================================
# CERTIFICATE RECORD
# =============================================================================

def _parse_number(value: Any) -> Optional[float]:
    """Parse a register number, None for blanks and junk."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    text = str(value).strip().replace(",", "")
    if text.lower() in _MISSING_MARKERS:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


class CertificateRecord(BaseModel):
    """
    Loosely typed certificate record. Every field is optional.

    Register column names are accepted in any case and with hyphens
    ("WALLS-DESCRIPTION" -> walls_description) via `from_mapping`.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    uprn: Optional[str] = None
    address: Optional[str] = None
    postcode: Optional[str] = None
    property_type: Optional[str] = None
    built_form: Optional[str] = None
    construction_age_band: Optional[str] = None
    total_floor_area: Optional[float] = None
    number_habitable_rooms: Optional[int] = None
    floor_height: Optional[float] = None
    walls_description: Optional[str] = None
    roof_description: Optional[str] = None
    floor_description: Optional[str] = None
    windows_description: Optional[str] = None
    multi_glaze_proportion: Optional[float] = None
    mechanical_ventilation: Optional[str] = None
    solar_hot_water_flag: Optional[str] = None
    low_energy_lighting: Optional[float] = None
    fixed_lighting_outlets_count: Optional[float] = None
    low_energy_fixed_lighting_outlets_count: Optional[float] = None
    region: Optional[int] = None

    @field_validator(
        "uprn", "address", "postcode", "property_type", "built_form",
        "construction_age_band", "walls_description", "roof_description",
        "floor_description", "windows_description", "mechanical_ventilation",
        "solar_hot_water_flag",
        mode="before",
    )
    @classmethod
    def _lenient_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return None if text.lower() in _MISSING_MARKERS else text

    @field_validator(
        "total_floor_area", "floor_height", "multi_glaze_proportion",
        "low_energy_lighting", "fixed_lighting_outlets_count",
        "low_energy_fixed_lighting_outlets_count",
        mode="before",
    )
    @classmethod
    def _lenient_float(cls, value: Any) -> Optional[float]:
        return _parse_number(value)

    @field_validator("number_habitable_rooms", "region", mode="before")
    @classmethod
    def _lenient_int(cls, value: Any) -> Optional[int]:
        number = _parse_number(value)
        return None if number is None else int(round(number))

    @classmethod
    def from_mapping(cls, data: Any) -> "CertificateRecord":
        """Build a record from any mapping; anything else gives an empty record."""
        if isinstance(data, CertificateRecord):
            return data
        if not isinstance(data, Mapping):
            return cls()
        normalised = {
            str(key).strip().lower().replace("-", "_").replace(" ", "_"): value
            for key, value in data.items()
        }
        try:
            return cls.model_validate(normalised)
        except ValidationError as e:
            # Validators already coerce junk to None; keep what parses
            bad = {str(err["loc"][0]) for err in e.errors() if err.get("loc")}
            logger.debug(f"Dropping unparseable certificate fields: {sorted(bad)}")
            return cls.model_validate({k: v for k, v in normalised.items() if k not in bad})


# =============================================================================
# INFERENCE REPORT
# =============================================================================

@dataclass
class InferenceReport:
    """Provenance of every inferred value."""
    sources: Dict[str, str] = field(default_factory=dict)  # field -> keyword/age_band/default/certificate/estimate
    details: Dict[str, str] = field(default_factory=dict)
    notes: List[str] = field(default_factory=list)

    def record(self, name: str, source: str, detail: str = "") -> None:
        self.sources[name] = source
        if detail:
            self.details[name] = detail

    @property
    def defaulted_fields(self) -> List[str]:
        return [name for name, source in self.sources.items() if source == UValueSource.DEFAULT.value]

    def to_dict(self) -> Dict:
        return {
            "sources": dict(self.sources),
            "details": dict(self.details),
            "notes": list(self.notes),
        }


# =============================================================================
# MAPPER
# =============================================================================

class ParameterInferenceMapper:
    """
    Map certificate records to building descriptions.

    Usage:
        mapper = ParameterInferenceMapper()
        description = mapper.map(record)
    """

    # Mechanical ventilation rates (ACH)
    MVHR_AIR_CHANGE_RATE = 1.0
    MVHR_EFFICIENCY = 0.8
    MECHANICAL_AIR_CHANGE_RATE = 0.5

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.geometry = BuildingGeometryCalculator()

    def map(self, record: Union[CertificateRecord, Mapping[str, Any], None]) -> BuildingDescription:
        """Infer a BuildingDescription. Never raises on missing or unknown fields."""
        description, _ = self.map_with_report(record)
        return description

    def map_with_report(
        self,
        record: Union[CertificateRecord, Mapping[str, Any], None],
    ) -> Tuple[BuildingDescription, InferenceReport]:
        """
        Infer a BuildingDescription and report where each value came from.

        Args:
            record: CertificateRecord or plain dict of register fields

        Returns:
            (description, report)
        """
        cert = CertificateRecord.from_mapping(record)
        report = InferenceReport()
        building_id = cert.uprn or cert.address or "certificate"

        region = self._region(cert, report)
        floors, geometry = self._geometry(cert, report)
        elements = self._elements(cert, geometry, report)
        ventilation = self._ventilation(cert, report)
        lighting = self._lighting(cert, report)
        solar = self._solar_hot_water(cert, report)

        for name in report.defaulted_fields:
            logger.debug(
                f"No usable data for {name}, using worst-case default",
                extra={"building_id": building_id},
            )

        description = BuildingDescription(
            name=cert.address or cert.uprn or "",
            region=region,
            altitude=self.settings.default_altitude_m,
            floors=floors,
            elements=elements,
            ventilation=ventilation,
            lighting_appliances=lighting,
            solar_hot_water=solar,
            temperature=TemperatureConfig(
                responsiveness=1.0,
                target=21.0,
                living_area_fraction=1.0,
            ),
        )
        logger.debug(
            f"Mapped certificate: {geometry.total_floor_area_m2:.0f} m2, "
            f"{geometry.floors} storeys, region {region}",
            extra={"building_id": building_id, "region": region},
        )
        return description, report

    def _region(self, cert: CertificateRecord, report: InferenceReport) -> int:
        if cert.region is not None and 0 <= cert.region <= 21:
            report.record("region", "certificate")
            return cert.region
        region = region_from_postcode(cert.postcode)
        if region is not None:
            report.record("region", "postcode", cert.postcode or "")
            return region
        report.record("region", UValueSource.DEFAULT.value)
        return self.settings.default_region

    def _geometry(self, cert: CertificateRecord, report: InferenceReport):
        if cert.total_floor_area and cert.total_floor_area > 0:
            floor_area = cert.total_floor_area
            report.record("total_floor_area", "certificate")
        else:
            floor_area = self.settings.default_floor_area_m2
            report.record("total_floor_area", UValueSource.DEFAULT.value)

        if plausible_room_count(cert.number_habitable_rooms, floor_area):
            rooms = cert.number_habitable_rooms
            report.record("storeys", "estimate", f"{rooms} habitable rooms")
        else:
            rooms = self.settings.default_habitable_rooms
            detail = f"ignored {cert.number_habitable_rooms} habitable rooms" if cert.number_habitable_rooms else ""
            report.record("storeys", UValueSource.DEFAULT.value, detail)

        if cert.floor_height and cert.floor_height > 0:
            height = cert.floor_height
            report.record("floor_height", "certificate")
        else:
            height = self.settings.default_floor_height_m
            report.record("floor_height", UValueSource.DEFAULT.value)

        geometry = self.geometry.estimate(floor_area, habitable_rooms=rooms, floor_height_m=height)
        floors = tuple(
            FloorSpec(name=f"floor_{i}", area=geometry.floor_area_per_storey_m2, height=height)
            for i in range(geometry.floors)
        )
        return floors, geometry

    def _u_value(
        self,
        element_type: ElementType,
        text: Optional[str],
        cert: CertificateRecord,
        report: InferenceReport,
    ) -> UValueEstimate:
        estimate = lookup_u_value(element_type, text, cert.construction_age_band)
        report.record(f"{element_type.value}_u_value", estimate.source.value, estimate.detail)
        return estimate

    def _elements(self, cert: CertificateRecord, geometry, report: InferenceReport) -> Tuple[FabricElement, ...]:
        wall = self._u_value(ElementType.WALL, cert.walls_description, cert, report)
        roof = self._u_value(ElementType.ROOF, cert.roof_description, cert, report)
        floor = self._u_value(ElementType.FLOOR, cert.floor_description, cert, report)
        window = self._u_value(ElementType.WINDOW, cert.windows_description, cert, report)

        window_u = window.u_value
        if cert.multi_glaze_proportion is not None and window.u_value < SINGLE_GLAZING_U_VALUE:
            window_u = blend_window_u_value(window.u_value, cert.multi_glaze_proportion)
            report.notes.append(
                f"Window U-value blended with single glazing at "
                f"{cert.multi_glaze_proportion:.0f}% multiple glazing"
            )

        # The estimated window area can exceed the wall area for very deep plans
        window_area = min(geometry.window_area_m2, geometry.wall_area_m2)
        if window_area < geometry.window_area_m2:
            report.notes.append("Window area capped at wall area")

        return (
            FabricElement(
                id="floor",
                type=ElementType.FLOOR,
                name="Ground floor",
                area=geometry.ground_floor_area_m2,
                u_value=floor.u_value,
                k_value=thermal_mass(ElementType.FLOOR, cert.floor_description),
            ),
            FabricElement(
                id="walls",
                type=ElementType.WALL,
                name="External walls",
                area=geometry.wall_area_m2,
                u_value=wall.u_value,
                k_value=thermal_mass(ElementType.WALL, cert.walls_description),
            ),
            FabricElement(
                id="roof",
                type=ElementType.ROOF,
                name="Roof",
                area=geometry.roof_area_m2,
                u_value=roof.u_value,
                k_value=thermal_mass(ElementType.ROOF, cert.roof_description),
            ),
            FabricElement(
                id="windows",
                type=ElementType.WINDOW,
                name="Windows",
                area=window_area,
                u_value=window_u,
                subtract_from="walls",
                orientation=Orientation.SOUTH,
                overshading=Overshading.AVERAGE,
                g=0.7,
                ff=0.7,
            ),
        )

    def _ventilation(self, cert: CertificateRecord, report: InferenceReport) -> VentilationConfig:
        walls = (cert.walls_description or "").lower()
        floor = (cert.floor_description or "").lower()

        construction = Construction.TIMBER_FRAME if "timber frame" in walls else Construction.MASONRY
        suspended = SuspendedFloor.NONE if "solid" in floor else SuspendedFloor.SEALED

        system = VentilationSystem.NATURAL
        rate = self.MECHANICAL_AIR_CHANGE_RATE
        efficiency = 0.0
        text = (cert.mechanical_ventilation or "").lower()
        if "mvhr" in text or "heat recovery" in text:
            system = VentilationSystem.BALANCED_HEAT_RECOVERY
            rate = self.MVHR_AIR_CHANGE_RATE
            efficiency = self.MVHR_EFFICIENCY
        elif "positive input" in text:
            system = VentilationSystem.POSITIVE_INPUT
        elif "extract" in text:
            system = VentilationSystem.EXTRACT_ONLY
        report.record(
            "ventilation_system",
            "keyword" if system != VentilationSystem.NATURAL else UValueSource.DEFAULT.value,
            system.name.lower(),
        )

        return VentilationConfig(
            dwelling_construction=construction,
            suspended_wooden_floor=suspended,
            draught_lobby=True,
            percentage_draught_proofed=50,
            number_of_sides_sheltered=2,
            system=system,
            system_air_change_rate=rate,
            heat_recovery_efficiency=efficiency,
        )

    def _lighting(self, cert: CertificateRecord, report: InferenceReport) -> LightingApplianceConfig:
        total = cert.fixed_lighting_outlets_count
        low = cert.low_energy_fixed_lighting_outlets_count
        if total and total > 0 and low is not None and 0 <= low <= total:
            report.record("low_energy_lighting", "certificate", "outlet counts")
            return LightingApplianceConfig(low_energy_outlets=low, total_outlets=total)

        if cert.low_energy_lighting is not None and 0 <= cert.low_energy_lighting <= 100:
            report.record("low_energy_lighting", "certificate", "percentage")
            return LightingApplianceConfig(
                low_energy_outlets=cert.low_energy_lighting / 100, total_outlets=1.0
            )

        report.record("low_energy_lighting", UValueSource.DEFAULT.value)
        return LightingApplianceConfig(low_energy_outlets=0.5, total_outlets=1.0)

    def _solar_hot_water(self, cert: CertificateRecord, report: InferenceReport) -> SolarHotWaterConfig:
        flag = (cert.solar_hot_water_flag or "").strip().lower()
        if flag in ("y", "yes", "true", "1"):
            report.record("solar_hot_water", "certificate")
            return SolarHotWaterConfig(enabled=True)
        return SolarHotWaterConfig(enabled=False)
