"""Utility modules."""

from .logging_config import (
    ContextFormatter,
    ensure_logging,
    setup_logging,
)
from .validation import (
    InvalidInputError,
    coerce_building_description,
    validate_building_description,
)

__all__ = [
    # Logging
    "ContextFormatter",
    "ensure_logging",
    "setup_logging",
    # Validation
    "InvalidInputError",
    "coerce_building_description",
    "validate_building_description",
]
