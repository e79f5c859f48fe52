"""
Pytest configuration and fixtures for sapengine tests.

Provides reusable test fixtures for:
- Victorian terrace building description (two storeys, solid brick)
- Minimal single-storey building description
- Certificate records
- Engine instance
"""

import pytest
from pathlib import Path

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from sapengine.core.models import (
    BuildingDescription,
    ControlType,
    Construction,
    ElementType,
    FabricElement,
    FloorSpec,
    Orientation,
    Overshading,
    SuspendedFloor,
    TemperatureConfig,
    VentilationConfig,
    VentilationSystem,
)
from sapengine.simulation.engine import EnergySimulationEngine


# =============================================================================
# BUILDING FIXTURES
# =============================================================================

@pytest.fixture
def victorian_terrace() -> BuildingDescription:
    """Two-storey solid brick terrace, 85 m2, Wales (region 13)."""
    return BuildingDescription(
        name="Victorian terrace",
        region=13,
        altitude=50,
        floors=(
            FloorSpec(name="ground", area=42.5, height=2.4),
            FloorSpec(name="first", area=42.5, height=2.4),
        ),
        elements=(
            FabricElement(id="walls", type=ElementType.WALL, area=62, u_value=2.1, k_value=200),
            FabricElement(id="roof", type=ElementType.ROOF, area=42.5, u_value=0.4, k_value=50),
            FabricElement(id="floor", type=ElementType.FLOOR, area=42.5, u_value=0.7, k_value=100),
            FabricElement(
                id="window_south",
                type=ElementType.WINDOW,
                area=8,
                u_value=2.8,
                subtract_from="walls",
                orientation=Orientation.SOUTH,
                overshading=Overshading.AVERAGE,
                g=0.76,
                ff=0.7,
            ),
            FabricElement(
                id="window_north",
                type=ElementType.WINDOW,
                area=7,
                u_value=2.8,
                subtract_from="walls",
                orientation=Orientation.NORTH,
                overshading=Overshading.AVERAGE,
                g=0.76,
                ff=0.7,
            ),
        ),
        ventilation=VentilationConfig(
            number_of_chimneys=1,
            number_of_intermittent_fans=1,
            dwelling_construction=Construction.MASONRY,
            suspended_wooden_floor=SuspendedFloor.UNSEALED,
            draught_lobby=False,
            percentage_draught_proofed=50,
            number_of_sides_sheltered=2,
            system=VentilationSystem.NATURAL,
        ),
        temperature=TemperatureConfig(
            responsiveness=1.0,
            target=21.0,
            control_type=ControlType.TYPE_1,
            living_area_fraction=0.5,
        ),
    )


@pytest.fixture
def minimal_building() -> BuildingDescription:
    """Single storey, 50 m2, one wall, one window, well insulated."""
    return BuildingDescription(
        name="Minimal",
        region=0,
        floors=(FloorSpec(area=50, height=2.5),),
        elements=(
            FabricElement(id="wall", type=ElementType.WALL, area=60, u_value=0.5, k_value=100),
            FabricElement(id="roof", type=ElementType.ROOF, area=50, u_value=0.2, k_value=50),
            FabricElement(id="floor", type=ElementType.FLOOR, area=50, u_value=0.25, k_value=100),
            FabricElement(
                id="window", type=ElementType.WINDOW, area=5, u_value=2.0, subtract_from="wall"
            ),
        ),
    )


@pytest.fixture
def minimal_building_dict(minimal_building) -> dict:
    """The minimal building as a plain JSON-style dict."""
    return minimal_building.model_dump(mode="json")


# =============================================================================
# CERTIFICATE FIXTURES
# =============================================================================

@pytest.fixture
def certificate_record() -> dict:
    """Register-style certificate record for a Cardiff terrace."""
    return {
        "uprn": "100100012345",
        "address": "12 Example Street, Cardiff",
        "postcode": "CF24 3AA",
        "property_type": "House",
        "built_form": "Mid-Terrace",
        "construction_age_band": "England and Wales: 1900-1929",
        "total_floor_area": "85",
        "number_habitable_rooms": "5",
        "walls_description": "Solid brick, as built, no insulation (assumed)",
        "roof_description": "Pitched, 100 mm loft insulation",
        "floor_description": "Suspended, no insulation (assumed)",
        "windows_description": "Fully double glazed",
        "multi_glaze_proportion": "100",
        "mechanical_ventilation": "natural",
        "solar_hot_water_flag": "N",
        "low_energy_lighting": "60",
    }


# =============================================================================
# ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def engine() -> EnergySimulationEngine:
    """Engine with the UK climate tables."""
    return EnergySimulationEngine()
