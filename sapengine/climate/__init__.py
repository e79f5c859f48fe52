"""
Climate module - SAP 2012 monthly tables.

Immutable constants indexed by region and month, bundled as a
ClimateDataset for injection into the calculators.
"""

from .sap_tables import (
    ClimateDataset,
    UK_CLIMATE,
    MONTHS,
    DAYS_IN_MONTH,
    REGION_NAMES,
)

__all__ = [
    "ClimateDataset",
    "UK_CLIMATE",
    "MONTHS",
    "DAYS_IN_MONTH",
    "REGION_NAMES",
]
