"""Fabric upgrade measures and baseline-vs-upgrade comparison."""

from .catalog import UK_UPGRADE_CATALOG, UpgradeCatalog, UpgradeMeasure, get_measure, list_measure_ids
from .comparator import SavingsDelta, UpgradeComparator, UpgradeScenario, savings_between

__all__ = [
    "UK_UPGRADE_CATALOG",
    "UpgradeCatalog",
    "UpgradeMeasure",
    "get_measure",
    "list_measure_ids",
    "SavingsDelta",
    "UpgradeComparator",
    "UpgradeScenario",
    "savings_between",
]
