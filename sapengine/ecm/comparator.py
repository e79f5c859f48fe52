"""
Upgrade comparator - energy savings of fabric upgrades.

Runs the engine on a baseline description and on a derived description
whose element U-values were changed, then reports the annual savings.

Savings are floored at zero: a measure never reports an energy penalty.

Usage:
    comparator = UpgradeComparator()
    delta = comparator.compare_u_values(description, {"walls": 0.3})
    print(f"Saves {delta.space_heating_kwh:.0f} kWh/yr")
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..core.models import BuildingDescription
from ..simulation.engine import DescriptionInput, EnergySimulationEngine
from ..simulation.results import EnergyDemandResult
from ..simulation.runner import BatchRunner
from ..utils.validation import InvalidInputError
from .catalog import UpgradeMeasure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpgradeScenario:
    """A baseline and a modified description differing in U-values."""
    name: str
    baseline: BuildingDescription
    modified: BuildingDescription

    @classmethod
    def from_u_values(
        cls,
        baseline: BuildingDescription,
        overrides: Mapping[str, float],
        name: str = "",
    ) -> "UpgradeScenario":
        """
        Derive a scenario by replacing element U-values.

        Raises:
            InvalidInputError: If an override names an unknown element
        """
        try:
            modified = baseline.with_u_values(overrides)
        except KeyError as e:
            raise InvalidInputError(
                f"Unknown element id(s): {e.args[0]}",
                field="elements",
                suggestions=[element.id for element in baseline.elements],
            ) from e
        return cls(name=name or ", ".join(overrides), baseline=baseline, modified=modified)

    @classmethod
    def from_measure(cls, baseline: BuildingDescription, measure: UpgradeMeasure) -> "UpgradeScenario":
        return cls(name=measure.id, baseline=baseline, modified=measure.apply(baseline))


@dataclass(frozen=True)
class SavingsDelta:
    """Annual savings of a modified description over its baseline."""
    name: str
    space_heating_kwh: float  # max(0, baseline - modified)
    water_heating_kwh: float  # max(0, baseline - modified)
    fabric_heat_loss_w_per_k: float  # baseline - modified
    baseline_space_heating_kwh: float
    modified_space_heating_kwh: float

    @property
    def total_kwh(self) -> float:
        return self.space_heating_kwh + self.water_heating_kwh

    def to_dict(self) -> Dict[str, float]:
        return {
            "name": self.name,
            "space_heating_kwh": self.space_heating_kwh,
            "water_heating_kwh": self.water_heating_kwh,
            "total_kwh": self.total_kwh,
            "fabric_heat_loss_w_per_k": self.fabric_heat_loss_w_per_k,
            "baseline_space_heating_kwh": self.baseline_space_heating_kwh,
            "modified_space_heating_kwh": self.modified_space_heating_kwh,
        }


def savings_between(
    baseline: EnergyDemandResult,
    modified: EnergyDemandResult,
    name: str = "",
) -> SavingsDelta:
    """Savings from two engine results."""
    return SavingsDelta(
        name=name,
        space_heating_kwh=max(
            0.0, baseline.annual_space_heating_kwh - modified.annual_space_heating_kwh
        ),
        water_heating_kwh=max(
            0.0,
            baseline.energy_requirements.water_heating - modified.energy_requirements.water_heating,
        ),
        fabric_heat_loss_w_per_k=baseline.fabric_heat_loss - modified.fabric_heat_loss,
        baseline_space_heating_kwh=baseline.annual_space_heating_kwh,
        modified_space_heating_kwh=modified.annual_space_heating_kwh,
    )


class UpgradeComparator:
    """
    Compare baseline and upgraded descriptions.

    Usage:
        comparator = UpgradeComparator()
        delta = comparator.compare(baseline, upgraded)
        deltas = comparator.compare_many(scenarios, max_workers=4)
    """

    def __init__(self, engine: Optional[EnergySimulationEngine] = None):
        self.engine = engine or EnergySimulationEngine()

    def compare(
        self,
        baseline: DescriptionInput,
        modified: DescriptionInput,
        name: str = "",
    ) -> SavingsDelta:
        """
        Annual savings of `modified` over `baseline`.

        Args:
            baseline: Description before the upgrade
            modified: Description after the upgrade
            name: Label carried into the delta

        Returns:
            SavingsDelta with non-negative kWh savings

        Raises:
            InvalidInputError: If either description is invalid
        """
        baseline_result = self.engine.run(baseline)
        modified_result = self.engine.run(modified)
        delta = savings_between(baseline_result, modified_result, name)
        logger.debug(
            f"{name or 'upgrade'}: {delta.baseline_space_heating_kwh:.0f} -> "
            f"{delta.modified_space_heating_kwh:.0f} kWh/yr space heating"
        )
        return delta

    def compare_scenario(self, scenario: UpgradeScenario) -> SavingsDelta:
        return self.compare(scenario.baseline, scenario.modified, scenario.name)

    def compare_u_values(
        self,
        baseline: DescriptionInput,
        overrides: Mapping[str, float],
        name: str = "",
    ) -> SavingsDelta:
        """Savings from replacing some element U-values."""
        description = self.engine.validate(baseline)
        return self.compare_scenario(UpgradeScenario.from_u_values(description, overrides, name))

    def compare_measure(self, baseline: DescriptionInput, measure: UpgradeMeasure) -> SavingsDelta:
        """Savings from applying one catalog measure."""
        description = self.engine.validate(baseline)
        return self.compare_scenario(UpgradeScenario.from_measure(description, measure))

    def compare_many(
        self,
        scenarios: Sequence[UpgradeScenario],
        max_workers: Optional[int] = None,
    ) -> List[SavingsDelta]:
        """
        Score many scenarios through the batch runner.

        Each distinct baseline is simulated once.

        Args:
            scenarios: Scenarios to evaluate
            max_workers: Process pool size (settings default if None)

        Returns:
            One SavingsDelta per scenario, in input order

        Raises:
            InvalidInputError: If any description is invalid
        """
        if not scenarios:
            return []

        descriptions: List[BuildingDescription] = []
        baseline_index: Dict[int, int] = {}
        pairs: List[Tuple[int, int]] = []
        for scenario in scenarios:
            key = id(scenario.baseline)
            if key not in baseline_index:
                baseline_index[key] = len(descriptions)
                descriptions.append(scenario.baseline)
            descriptions.append(scenario.modified)
            pairs.append((baseline_index[key], len(descriptions) - 1))

        logger.info(f"Comparing {len(scenarios)} upgrade scenarios ({len(descriptions)} runs)")
        items = BatchRunner(max_workers=max_workers).run_batch(descriptions)

        failed = next((item for item in items if not item.success), None)
        if failed is not None:
            raise InvalidInputError(failed.error_message or "Invalid description", field=failed.error_field or "")

        return [
            savings_between(items[b].result, items[m].result, scenario.name)
            for scenario, (b, m) in zip(scenarios, pairs)
        ]
