"""
Gain utilisation factor (SAP 2012 Table 9a).

The fraction of free gains that offsets heat loss, driven by the
gain/loss ratio and the dwelling's thermal time constant. Degenerate
inputs (no heat loss, no gains, gains against a reversed temperature
difference) resolve to 0 rather than raising or returning NaN.
"""

import math

# |y - 1| below this is treated as y == 1
UNITY_TOLERANCE = 1e-9


def time_constant(tmp: float, hlp: float) -> float:
    """Thermal time constant tau (hours). Zero if HLP is not positive."""
    if hlp <= 0:
        return 0.0
    return tmp / (3.6 * hlp)


def utilisation_factor(tmp: float, hlp: float, h: float, ti: float, te: float, g: float) -> float:
    """
    Gain utilisation factor.

    Args:
        tmp: Thermal mass parameter (kJ/m2K)
        hlp: Heat loss parameter (W/m2K)
        h: Heat transfer coefficient (W/K)
        ti: Internal temperature (C)
        te: External temperature (C)
        g: Total gains (W)

    Returns:
        Utilisation factor in [0, 1]
    """
    if h <= 0 or hlp <= 0:
        return 0.0

    a = 1.0 + time_constant(tmp, hlp) / 15.0
    loss = h * (ti - te)
    if loss == 0:
        return 0.0

    y = g / loss
    if not y > 0 or math.isinf(y):
        return 0.0

    if abs(y - 1.0) < UNITY_TOLERANCE:
        n = a / (a + 1.0)
    elif y < 1.0:
        n = (1.0 - y ** a) / (1.0 - y ** (a + 1.0))
    else:
        # Same expression divided through by y^(a+1); avoids overflow for large y
        r = y ** -(a + 1.0)
        n = (1.0 / y - r) / (1.0 - r)

    if math.isnan(n):
        return 0.0
    return min(max(n, 0.0), 1.0)
