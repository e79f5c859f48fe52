"""
Space heating demand (SAP 2012 section 8).

Per month: losses = H x (Ti - Te), useful gains = gains x utilisation
factor, demand = max(0, losses - useful gains). Each month is floored at
zero on its own; surplus summer gains are not carried over.
"""

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

import numpy as np

from ..climate import UK_CLIMATE, ClimateDataset, MONTHS
from .utilisation import utilisation_factor


@dataclass(frozen=True)
class SpaceHeatingResult:
    """Monthly heat balance (W) and demand (kWh)."""
    heat_loss: Tuple[float, ...]
    total_gains: Tuple[float, ...]
    utilisation_factor: Tuple[float, ...]
    useful_gains: Tuple[float, ...]
    heat_demand: Tuple[float, ...]      # W
    heat_demand_kwh: Tuple[float, ...]
    annual_demand_kwh: float
    annual_demand_kwh_per_m2: float

    def to_dict(self) -> Dict:
        return {
            "heat_loss": list(self.heat_loss),
            "total_gains": list(self.total_gains),
            "utilisation_factor": list(self.utilisation_factor),
            "useful_gains": list(self.useful_gains),
            "heat_demand": list(self.heat_demand),
            "heat_demand_kwh": list(self.heat_demand_kwh),
            "annual_demand_kwh": self.annual_demand_kwh,
            "annual_demand_kwh_per_m2": self.annual_demand_kwh_per_m2,
        }


class SpaceHeatingDemandCalculator:
    """
    Monthly space heating demand.

    Usage:
        calc = SpaceHeatingDemandCalculator()
        result = calc.calculate(tmp, tfa, heat_transfer, internal, external, gains)
    """

    def __init__(self, climate: ClimateDataset = UK_CLIMATE):
        self.climate = climate

    def calculate(
        self,
        tmp: float,
        tfa: float,
        heat_transfer: Sequence[float],
        internal_temperature: Sequence[float],
        external_temperature: Sequence[float],
        gains: Sequence[float],
        use_utilisation_factor: bool = True,
    ) -> SpaceHeatingResult:
        """
        Calculate monthly and annual demand.

        Args:
            tmp: Thermal mass parameter (kJ/m2K)
            tfa: Total floor area (m2)
            heat_transfer: Monthly H (W/K)
            internal_temperature: Monthly mean internal temperature (C)
            external_temperature: Monthly external temperature (C)
            gains: Monthly solar + internal gains (W)
            use_utilisation_factor: Discount gains by the utilisation factor

        Returns:
            SpaceHeatingResult
        """
        h = np.asarray(heat_transfer, dtype=float)
        ti = np.asarray(internal_temperature, dtype=float)
        te = np.asarray(external_temperature, dtype=float)
        g = np.asarray(gains, dtype=float)
        days = np.array(self.climate.days_in_month, dtype=float)

        losses = h * (ti - te)
        eta = np.array([
            utilisation_factor(tmp, h[m] / tfa, h[m], ti[m], te[m], g[m])
            for m in range(MONTHS)
        ])
        useful = g * eta if use_utilisation_factor else g.copy()
        demand = np.maximum(losses - useful, 0.0)
        demand_kwh = 0.024 * demand * days
        annual = float(demand_kwh.sum())

        return SpaceHeatingResult(
            heat_loss=tuple(float(x) for x in losses),
            total_gains=tuple(float(x) for x in g),
            utilisation_factor=tuple(float(x) for x in eta),
            useful_gains=tuple(float(x) for x in useful),
            heat_demand=tuple(float(x) for x in demand),
            heat_demand_kwh=tuple(float(x) for x in demand_kwh),
            annual_demand_kwh=annual,
            annual_demand_kwh_per_m2=annual / tfa,
        )
