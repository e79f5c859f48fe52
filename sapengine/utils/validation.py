"""
Input validation for building descriptions.

Checks the cross-field invariants that pydantic field constraints cannot
express, once, at the engine boundary:
- total floor area > 0
- unique element ids
- windows name an existing wall as parent
- wall net area (gross minus windows) >= 0
- region exists in the climate dataset

Usage:
    from sapengine.utils.validation import (
        validate_building_description,
        InvalidInputError,
    )

    description = validate_building_description(description)
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..climate import UK_CLIMATE, ClimateDataset
from ..core.models import BuildingDescription, ElementType

# Tolerance for net area rounding, m2
AREA_TOLERANCE = 1e-9


class InvalidInputError(ValueError):
    """Raised when a building description is malformed."""

    def __init__(self, message: str, field: str = "", suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field = field
        self.suggestions = suggestions or []


def coerce_building_description(
    data: Union[BuildingDescription, Dict[str, Any]],
) -> BuildingDescription:
    """
    Parse a dict into a BuildingDescription.

    Raises:
        InvalidInputError: If pydantic rejects the data
    """
    if isinstance(data, BuildingDescription):
        return data
    try:
        return BuildingDescription.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise InvalidInputError(
            f"Invalid building description: {first.get('msg', str(e))}",
            field=location,
        ) from e


def validate_building_description(
    description: BuildingDescription,
    climate: ClimateDataset = UK_CLIMATE,
) -> BuildingDescription:
    """
    Check cross-field invariants.

    Args:
        description: Parsed description
        climate: Dataset providing the valid region range

    Returns:
        The same description, unchanged

    Raises:
        InvalidInputError: On the first violated invariant
    """
    if description.total_floor_area <= 0:
        raise InvalidInputError(
            f"Total floor area must be positive, got {description.total_floor_area}",
            field="floors",
            suggestions=["Give at least one floor with area > 0"],
        )

    if not climate.has_region(description.region):
        raise InvalidInputError(
            f"Unknown climate region {description.region}",
            field="region",
            suggestions=[f"Use a region between 0 and {climate.region_count - 1}"],
        )

    by_id = {}
    for element in description.elements:
        if element.id in by_id:
            raise InvalidInputError(
                f"Duplicate element id '{element.id}'",
                field=f"elements.{element.id}",
            )
        by_id[element.id] = element

    window_area: Dict[str, float] = {}
    for element in description.elements:
        if element.subtract_from is None:
            continue
        if not element.is_window:
            raise InvalidInputError(
                f"Only windows may subtract from another element ('{element.id}' is a {element.type.value})",
                field=f"elements.{element.id}.subtract_from",
            )
        parent = by_id.get(element.subtract_from)
        if parent is None or parent.type != ElementType.WALL:
            walls = [e.id for e in description.elements if e.type == ElementType.WALL]
            raise InvalidInputError(
                f"Window '{element.id}' references unknown wall '{element.subtract_from}'",
                field=f"elements.{element.id}.subtract_from",
                suggestions=walls,
            )
        window_area[parent.id] = window_area.get(parent.id, 0.0) + element.gross_area

    for wall_id, area in window_area.items():
        gross = by_id[wall_id].gross_area
        if gross - area < -AREA_TOLERANCE:
            raise InvalidInputError(
                f"Wall '{wall_id}' has {area:.2f} m2 of windows but only {gross:.2f} m2 gross area",
                field=f"elements.{wall_id}.area",
            )

    return description
