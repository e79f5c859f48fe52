"""
Upgrade Catalog - fabric upgrade measures.

Each measure targets one element type and defines:
- Applicability (element U-value above a threshold)
- Target U-value after the upgrade
- Cost identifier into the UK cost database (GBP per m2)
- Treated quantity (net m2 of the upgraded elements)

Only U-value measures are catalogued. Installing MVHR in a naturally
ventilated dwelling with no air permeability test changes the ventilation
system rather than an element, so it is not offered here; score it with
UpgradeComparator.compare on a description with a balanced system.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..core.models import BuildingDescription, ElementType
from ..geometry.building_geometry import net_element_area


@dataclass(frozen=True)
class UpgradeMeasure:
    """A U-value upgrade applied to every qualifying element of one type."""
    id: str
    name: str
    description: str
    element_type: ElementType
    target_u_value: float  # W/m2K after upgrade
    applies_above_u: float  # Only elements worse than this qualify
    cost_id: str  # Key in UPGRADE_COSTS

    def affected_elements(self, description: BuildingDescription) -> Tuple[str, ...]:
        """Ids of elements this measure would upgrade."""
        return tuple(
            e.id for e in description.elements_of_type(self.element_type)
            if e.u_value > self.applies_above_u
        )

    def is_applicable(self, description: BuildingDescription) -> bool:
        return bool(self.affected_elements(description))

    def apply(self, description: BuildingDescription) -> BuildingDescription:
        """Derive the upgraded description. The input is unchanged."""
        return description.with_u_values(
            {element_id: self.target_u_value for element_id in self.affected_elements(description)}
        )

    def treated_area(self, description: BuildingDescription) -> float:
        """Net area of the affected elements (m2)."""
        return sum(
            net_element_area(description, element_id)
            for element_id in self.affected_elements(description)
        )


# =============================================================================
# UK UPGRADE CATALOG
# =============================================================================

UK_UPGRADE_CATALOG: Dict[str, UpgradeMeasure] = {
    "wall_insulation": UpgradeMeasure(
        id="wall_insulation",
        name="Wall insulation",
        description="Add external wall insulation",
        element_type=ElementType.WALL,
        target_u_value=0.3,
        applies_above_u=0.5,
        cost_id="wall_insulation",
    ),
    "roof_insulation": UpgradeMeasure(
        id="roof_insulation",
        name="Roof insulation",
        description="Upgrade roof insulation to 300mm",
        element_type=ElementType.ROOF,
        target_u_value=0.15,
        applies_above_u=0.2,
        cost_id="roof_insulation",
    ),
    "window_replacement": UpgradeMeasure(
        id="window_replacement",
        name="Window replacement",
        description="Replace windows with triple glazing",
        element_type=ElementType.WINDOW,
        target_u_value=1.5,
        applies_above_u=2.0,
        cost_id="window_replacement",
    ),
}


class UpgradeCatalog:
    """
    Access the upgrade catalog.

    Usage:
        catalog = UpgradeCatalog()
        for measure in catalog.applicable(description):
            upgraded = measure.apply(description)
    """

    def __init__(self, measures: Dict[str, UpgradeMeasure] = None):
        self.measures = measures or UK_UPGRADE_CATALOG

    def all(self) -> List[UpgradeMeasure]:
        """Get all measures in catalog order."""
        return list(self.measures.values())

    def get(self, measure_id: str) -> Optional[UpgradeMeasure]:
        """Get measure by ID."""
        return self.measures.get(measure_id)

    def by_element_type(self, element_type: ElementType) -> List[UpgradeMeasure]:
        return [m for m in self.measures.values() if m.element_type == element_type]

    def applicable(self, description: BuildingDescription) -> List[UpgradeMeasure]:
        """Measures with at least one qualifying element, in catalog order."""
        return [m for m in self.measures.values() if m.is_applicable(description)]


def get_measure(measure_id: str) -> Optional[UpgradeMeasure]:
    """Get a measure by ID."""
    return UK_UPGRADE_CATALOG.get(measure_id)


def list_measure_ids() -> List[str]:
    """List all measure IDs."""
    return list(UK_UPGRADE_CATALOG.keys())
