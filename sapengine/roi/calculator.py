"""
Recommendation Ranker - payback for fabric upgrades.

Metrics:
- Simple payback period (cost / annual saving)
- Net Present Value (NPV) over the analysis period
- Annual CO2 reduction

Recommendations are sorted by payback, fastest first. Measures that save
nothing get an infinite payback and sort last.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..core.config import settings
from ..ecm.catalog import UpgradeCatalog, UpgradeMeasure
from ..ecm.comparator import UpgradeComparator, UpgradeScenario
from ..simulation.engine import DescriptionInput
from .costs_uk import UKCosts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recommendation:
    """A costed upgrade recommendation."""
    measure_type: str
    description: str
    cost_estimate: float  # GBP
    annual_kwh_savings: float
    payback_years: float  # inf when nothing is saved

    annual_cost_savings: float = 0.0  # GBP/year
    npv: float = 0.0  # GBP over the analysis period
    annual_co2_reduction_kg: float = 0.0

    def to_dict(self) -> Dict:
        return {
            "measure_type": self.measure_type,
            "description": self.description,
            "cost_estimate": self.cost_estimate,
            "annual_kwh_savings": self.annual_kwh_savings,
            "payback_years": self.payback_years if math.isfinite(self.payback_years) else None,
            "annual_cost_savings": self.annual_cost_savings,
            "npv": self.npv,
            "annual_co2_reduction_kg": self.annual_co2_reduction_kg,
        }


def simple_payback(cost: float, annual_kwh_savings: float, fuel_price: float) -> float:
    """cost / (kWh saved * price); infinite when nothing is saved."""
    annual_savings = annual_kwh_savings * fuel_price
    if annual_savings <= 0:
        return math.inf
    return cost / annual_savings


class RecommendationRanker:
    """
    Cost, score and rank fabric upgrades.

    Usage:
        ranker = RecommendationRanker(fuel_price=0.10)
        recommendations = ranker.recommend(description)
        print(ranker.generate_summary(recommendations))
    """

    def __init__(
        self,
        costs: UKCosts = None,
        fuel_price: float = None,
        fuel: str = "mains_gas",
        discount_rate: float = None,
        analysis_period: int = None,
        comparator: UpgradeComparator = None,
        catalog: UpgradeCatalog = None,
    ):
        self.costs = costs or UKCosts()
        self.fuel = fuel
        self.fuel_price = settings.fuel_price_gbp_per_kwh if fuel_price is None else fuel_price
        self.discount_rate = settings.discount_rate if discount_rate is None else discount_rate
        self.analysis_period = settings.analysis_period_years if analysis_period is None else analysis_period
        self.comparator = comparator or UpgradeComparator()
        self.catalog = catalog or UpgradeCatalog()

    def build(
        self,
        measure_type: str,
        description: str,
        cost_estimate: float,
        annual_kwh_savings: float,
    ) -> Recommendation:
        """
        Cost one upgrade.

        Args:
            measure_type: Measure identifier
            description: Human readable action
            cost_estimate: Installed cost (GBP)
            annual_kwh_savings: Heat demand saved (kWh/year)

        Returns:
            Recommendation with payback, NPV and CO2
        """
        annual_kwh_savings = max(0.0, annual_kwh_savings)
        annual_cost_savings = annual_kwh_savings * self.fuel_price
        carbon = self.costs.energy_price(self.fuel).carbon_intensity_kg_per_kwh

        return Recommendation(
            measure_type=measure_type,
            description=description,
            cost_estimate=cost_estimate,
            annual_kwh_savings=annual_kwh_savings,
            payback_years=simple_payback(cost_estimate, annual_kwh_savings, self.fuel_price),
            annual_cost_savings=annual_cost_savings,
            npv=self._calculate_npv(cost_estimate, annual_cost_savings, self.analysis_period),
            annual_co2_reduction_kg=annual_kwh_savings * carbon,
        )

    def recommend(
        self,
        description: DescriptionInput,
        measures: Optional[Iterable[UpgradeMeasure]] = None,
        max_workers: Optional[int] = None,
    ) -> List[Recommendation]:
        """
        Recommend applicable catalog measures for a dwelling.

        Args:
            description: Dwelling to improve
            measures: Candidate measures (applicable catalog measures if None)
            max_workers: Process pool size for scoring

        Returns:
            Recommendations sorted by payback

        Raises:
            InvalidInputError: If the description is invalid
        """
        baseline = self.comparator.engine.validate(description)
        if measures is None:
            candidates = self.catalog.applicable(baseline)
        else:
            candidates = [m for m in measures if m.is_applicable(baseline)]

        if not candidates:
            logger.info(f"No applicable upgrades for {baseline.name or 'building'}")
            return []

        scenarios = [UpgradeScenario.from_measure(baseline, m) for m in candidates]
        deltas = self.comparator.compare_many(scenarios, max_workers=max_workers)

        recommendations = []
        for measure, delta in zip(candidates, deltas):
            area = measure.treated_area(baseline)
            cost = self.costs.upgrade_cost(measure.cost_id, area)
            recommendations.append(
                self.build(measure.id, measure.description, cost, delta.space_heating_kwh)
            )
            logger.debug(
                f"{measure.id}: {area:.1f} m2, {cost:,.0f} GBP, "
                f"{delta.space_heating_kwh:,.0f} kWh/yr",
                extra={"measure": measure.id},
            )

        return self.rank(recommendations)

    def _calculate_npv(
        self,
        investment: float,
        annual_savings: float,
        years: int
    ) -> float:
        """Calculate Net Present Value."""
        npv = -investment
        for year in range(1, years + 1):
            npv += annual_savings / ((1 + self.discount_rate) ** year)
        return npv

    def rank(self, recommendations: Iterable[Recommendation]) -> List[Recommendation]:
        """Sort by payback (fastest first). Ties keep their input order."""
        return sorted(recommendations, key=lambda r: r.payback_years)

    def generate_summary(self, recommendations: List[Recommendation]) -> str:
        """Generate human-readable summary of recommendations."""
        lines = []
        lines.append("Upgrade Recommendations")
        lines.append("=" * 60)
        lines.append("")

        ranked = self.rank(recommendations)

        lines.append(f"{'Measure':<38} {'Cost (GBP)':<12} {'kWh/yr':<10} {'Payback':<10} {'NPV (GBP)':<10}")
        lines.append("-" * 84)

        for r in ranked:
            payback_str = f"{r.payback_years:.1f} yr" if r.payback_years < 100 else "N/A"
            lines.append(
                f"{r.description[:36]:<38} "
                f"{r.cost_estimate:>10,.0f}   "
                f"{r.annual_kwh_savings:>8,.0f}  "
                f"{payback_str:<10} "
                f"{r.npv:>10,.0f}"
            )

        lines.append("")
        lines.append(f"Fuel price: {self.fuel_price:.3f} GBP/kWh")
        lines.append(f"Analysis period: {self.analysis_period} years")
        lines.append(f"Discount rate: {self.discount_rate*100:.1f}%")

        return "\n".join(lines)
