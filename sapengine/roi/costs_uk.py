"""
UK Cost Database - upgrade costs and fuel prices.

Sources:
- Ofgem price cap - typical domestic unit rates
- SAP 2012 Table 12 - fuel CO2 emission factors
- Installer quotes for solid wall, loft and glazing upgrades

Prices in GBP, including VAT. Upgrade costs are all-in per m2 of the
treated element (materials, labour, access).
"""

from dataclasses import dataclass
from typing import Dict, Optional

from ..core.config import settings


@dataclass
class EnergyCost:
    """Energy cost parameters."""
    price_gbp_per_kwh: float
    carbon_intensity_kg_per_kwh: float  # SAP 2012 emission factor


# UK domestic energy prices
ENERGY_PRICES: Dict[str, EnergyCost] = {
    "mains_gas": EnergyCost(
        price_gbp_per_kwh=0.062,
        carbon_intensity_kg_per_kwh=0.216,
    ),
    "electricity": EnergyCost(
        price_gbp_per_kwh=0.245,
        carbon_intensity_kg_per_kwh=0.519,
    ),
    "heating_oil": EnergyCost(
        price_gbp_per_kwh=0.075,
        carbon_intensity_kg_per_kwh=0.298,
    ),
    "lpg": EnergyCost(
        price_gbp_per_kwh=0.090,
        carbon_intensity_kg_per_kwh=0.241,
    ),
}


@dataclass
class UpgradeCost:
    """Upgrade cost parameters."""
    cost_per_unit: float  # GBP per unit
    unit: str
    fixed_cost: float = 0
    lifetime_years: int = 30
    source: str = ""
    notes: str = ""


UPGRADE_COSTS: Dict[str, UpgradeCost] = {
    "wall_insulation": UpgradeCost(
        cost_per_unit=150,
        unit="m2 net wall",
        lifetime_years=36,
        source="Installer quotes",
        notes="External wall insulation, render finish. Internal lining "
              "is cheaper but loses floor area.",
    ),
    "roof_insulation": UpgradeCost(
        cost_per_unit=50,
        unit="m2 roof",
        lifetime_years=42,
        source="Installer quotes",
        notes="Top-up loft insulation to 300mm mineral wool.",
    ),
    "window_replacement": UpgradeCost(
        cost_per_unit=800,
        unit="m2 glazing",
        lifetime_years=30,
        source="Installer quotes",
        notes="Triple glazed units, PVC-U frames, fitted.",
    ),
}


def calculate_heating_cost(
    annual_kwh: float,
    fuel: str = "mains_gas",
    efficiency: Optional[float] = None,
) -> float:
    """
    Annual cost of delivering `annual_kwh` of useful heat.

    Args:
        annual_kwh: Heat demand (kWh/year)
        fuel: Key in ENERGY_PRICES
        efficiency: Heating system efficiency (defaults to settings)

    Returns:
        Cost in GBP/year
    """
    efficiency = efficiency or settings.boiler_efficiency
    price = ENERGY_PRICES.get(fuel, ENERGY_PRICES["mains_gas"])
    return annual_kwh / efficiency * price.price_gbp_per_kwh


class UKCosts:
    """
    Access UK cost database.

    Usage:
        costs = UKCosts()

        gas = costs.energy_price('mains_gas')
        wall_cost = costs.upgrade_cost('wall_insulation', quantity=47)
    """

    def __init__(
        self,
        energy_prices: Dict[str, EnergyCost] = None,
        upgrade_costs: Dict[str, UpgradeCost] = None
    ):
        self.energy_prices = energy_prices or ENERGY_PRICES
        self.upgrade_costs = upgrade_costs or UPGRADE_COSTS

    def energy_price(self, fuel: str) -> EnergyCost:
        """Get energy cost parameters (mains gas if unknown)."""
        return self.energy_prices.get(fuel, ENERGY_PRICES["mains_gas"])

    def upgrade_cost(self, measure_id: str, quantity: float = 1.0) -> float:
        """
        Total upgrade cost.

        Args:
            measure_id: Upgrade identifier
            quantity: Quantity in the measure's unit (m2)

        Returns:
            Total cost in GBP, 0 for unknown measures
        """
        cost_data = self.upgrade_costs.get(measure_id)
        if not cost_data:
            return 0.0
        return cost_data.fixed_cost + cost_data.cost_per_unit * quantity

    def annual_energy_cost(self, fuel: str, annual_kwh: float) -> float:
        """Annual cost of delivered energy."""
        return annual_kwh * self.energy_price(fuel).price_gbp_per_kwh
