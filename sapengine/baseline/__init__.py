"""U-value and thermal mass inference from construction descriptions."""

from .u_values import (
    UValueEstimate,
    UValueRule,
    UValueSource,
    WORST_CASE_U_VALUES,
    blend_window_u_value,
    lookup_u_value,
    parse_age_band,
    thermal_mass,
)

__all__ = [
    "UValueEstimate",
    "UValueRule",
    "UValueSource",
    "WORST_CASE_U_VALUES",
    "blend_window_u_value",
    "lookup_u_value",
    "parse_age_band",
    "thermal_mass",
]
