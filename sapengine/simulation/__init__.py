"""
Simulation module - run the monthly energy engine.

Features:
- EnergySimulationEngine: BuildingDescription -> EnergyDemandResult
- BatchRunner: many descriptions across a process pool
"""

from .engine import EnergySimulationEngine, calculate_energy_demand
from .results import EnergyDemandResult, EnergyRequirements
from .runner import BatchRunner, BatchItemResult

__all__ = [
    "EnergySimulationEngine",
    "calculate_energy_demand",
    "EnergyDemandResult",
    "EnergyRequirements",
    "BatchRunner",
    "BatchItemResult",
]
