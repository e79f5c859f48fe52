"""Envelope geometry estimation and element area sums."""

from .building_geometry import (
    BuildingGeometryCalculator,
    EstimatedGeometry,
    estimate_floors,
    net_areas_by_type,
    net_element_area,
)

__all__ = [
    "BuildingGeometryCalculator",
    "EstimatedGeometry",
    "estimate_floors",
    "net_areas_by_type",
    "net_element_area",
]
