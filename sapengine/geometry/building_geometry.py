"""
Building Geometry Estimator

Estimates envelope geometry when a certificate gives only floor area and
room count:
- Storeys from habitable rooms (three rooms per storey, at most ten)
- External wall area from a square footprint per storey, 70% exposed
- Window area as 15% of floor area
- Roof and ground floor from the footprint

Also sums net element areas of a BuildingDescription for area-based
upgrade costing.

These are approximations, not measurements.
"""

from dataclasses import dataclass
from typing import Dict, Optional
import math

from ..core.models import BuildingDescription, ElementType

EXPOSED_WALL_FRACTION = 0.7
WINDOW_TO_FLOOR_RATIO = 0.15
ROOMS_PER_STOREY = 3
MAX_HABITABLE_ROOMS = 30
MAX_STOREYS = MAX_HABITABLE_ROOMS // ROOMS_PER_STOREY
MIN_STOREY_AREA_M2 = 10.0


@dataclass
class EstimatedGeometry:
    """Envelope areas estimated from floor area and room count."""
    total_floor_area_m2: float
    floors: int
    floor_height_m: float
    footprint_area_m2: float
    wall_area_m2: float  # Gross, windows included
    window_area_m2: float
    roof_area_m2: float
    ground_floor_area_m2: float

    @property
    def floor_area_per_storey_m2(self) -> float:
        return self.total_floor_area_m2 / self.floors

    def to_dict(self) -> Dict[str, float]:
        return {
            "total_floor_area_m2": self.total_floor_area_m2,
            "floors": self.floors,
            "floor_height_m": self.floor_height_m,
            "footprint_area_m2": self.footprint_area_m2,
            "wall_area_m2": self.wall_area_m2,
            "window_area_m2": self.window_area_m2,
            "roof_area_m2": self.roof_area_m2,
            "ground_floor_area_m2": self.ground_floor_area_m2,
        }


def estimate_floors(habitable_rooms: Optional[int]) -> int:
    """Storeys from habitable room count, between one and MAX_STOREYS."""
    if not habitable_rooms or habitable_rooms < 1:
        return 1
    return min(MAX_STOREYS, max(1, math.ceil(habitable_rooms / ROOMS_PER_STOREY)))


def plausible_room_count(habitable_rooms: Optional[int], floor_area_m2: float) -> bool:
    """
    Whether a certificate room count can describe the dwelling.

    Counts above MAX_HABITABLE_ROOMS, or ones that would stack storeys
    smaller than MIN_STOREY_AREA_M2, are register noise.
    """
    if not habitable_rooms or habitable_rooms < 1 or habitable_rooms > MAX_HABITABLE_ROOMS:
        return False
    return floor_area_m2 / estimate_floors(habitable_rooms) >= MIN_STOREY_AREA_M2


class BuildingGeometryCalculator:
    """
    Estimate envelope geometry from floor area and room count.

    Usage:
        calculator = BuildingGeometryCalculator()
        geometry = calculator.estimate(floor_area_m2=85, habitable_rooms=5)
        print(geometry.wall_area_m2)
    """

    def estimate(
        self,
        floor_area_m2: float,
        habitable_rooms: Optional[int] = None,
        floor_height_m: float = 2.5,
        floors: Optional[int] = None,
    ) -> EstimatedGeometry:
        """
        Estimate geometry.

        The wall formula applies the square-footprint perimeter of the
        total floor area to every storey:
        4 * sqrt(TFA) * height * floors * 0.7.

        Args:
            floor_area_m2: Total floor area (m2)
            habitable_rooms: Room count, used when floors is not given
            floor_height_m: Storey height (m)
            floors: Known storey count

        Returns:
            EstimatedGeometry
        """
        n_floors = floors if floors and floors > 0 else estimate_floors(habitable_rooms)
        footprint = floor_area_m2 / n_floors

        wall_area = (
            4 * math.sqrt(floor_area_m2) * floor_height_m * n_floors * EXPOSED_WALL_FRACTION
        )
        window_area = floor_area_m2 * WINDOW_TO_FLOOR_RATIO

        return EstimatedGeometry(
            total_floor_area_m2=floor_area_m2,
            floors=n_floors,
            floor_height_m=floor_height_m,
            footprint_area_m2=footprint,
            wall_area_m2=wall_area,
            window_area_m2=window_area,
            roof_area_m2=footprint,
            ground_floor_area_m2=footprint,
        )


def net_element_area(description: BuildingDescription, element_id: str) -> float:
    """Gross area of one element less the windows that name it in subtract_from."""
    element = description.element(element_id)
    openings = sum(
        e.gross_area for e in description.elements
        if e.is_window and e.subtract_from == element_id
    )
    return max(0.0, element.gross_area - openings)


def net_areas_by_type(description: BuildingDescription) -> Dict[ElementType, float]:
    """Net area per element type (m2)."""
    areas: Dict[ElementType, float] = {t: 0.0 for t in ElementType}
    for element in description.elements:
        areas[element.type] += net_element_area(description, element.id)
    return areas
