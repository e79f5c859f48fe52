"""Upgrade costs, payback and ranking."""

from .calculator import Recommendation, RecommendationRanker, simple_payback
from .costs_uk import (
    ENERGY_PRICES,
    UPGRADE_COSTS,
    EnergyCost,
    UKCosts,
    UpgradeCost,
    calculate_heating_cost,
)

__all__ = [
    "Recommendation",
    "RecommendationRanker",
    "simple_payback",
    "ENERGY_PRICES",
    "UPGRADE_COSTS",
    "EnergyCost",
    "UKCosts",
    "UpgradeCost",
    "calculate_heating_cost",
]
