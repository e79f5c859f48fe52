"""
sapengine - SAP-2012-style monthly dwelling energy engine.

- EnergySimulationEngine: building description -> space and water heating demand
- ParameterInferenceMapper: certificate record -> building description
- UpgradeComparator: baseline vs upgraded savings
- RecommendationRanker: costed upgrades sorted by payback
"""

__version__ = "0.1.0"

from .core.models import BuildingDescription
from .core.config import Settings, settings
from .simulation.engine import EnergySimulationEngine, calculate_energy_demand
from .simulation.results import EnergyDemandResult
from .simulation.runner import BatchRunner
from .ingest.epc_mapper import CertificateRecord, ParameterInferenceMapper
from .ecm.comparator import SavingsDelta, UpgradeComparator, UpgradeScenario
from .roi.calculator import Recommendation, RecommendationRanker
from .utils.validation import InvalidInputError

__all__ = [
    "__version__",
    "BuildingDescription",
    "Settings",
    "settings",
    "EnergySimulationEngine",
    "calculate_energy_demand",
    "EnergyDemandResult",
    "BatchRunner",
    "CertificateRecord",
    "ParameterInferenceMapper",
    "SavingsDelta",
    "UpgradeComparator",
    "UpgradeScenario",
    "Recommendation",
    "RecommendationRanker",
    "InvalidInputError",
]
