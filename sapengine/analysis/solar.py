"""
Solar irradiance on inclined surfaces (SAP 2012 Appendix U3.2).

Converts horizontal monthly irradiance to a surface of given orientation
and tilt with the polynomial model:

    A = k1 sin^3(p) + k2 sin^2(p) + k3 sin(p)
    B = k4 sin^3(p) + k5 sin^2(p) + k6 sin(p)
    C = k7 sin^3(p) + k8 sin^2(p) + k9 sin(p) + 1
    Rh-inc = A cos^2(lat - decl) + B cos(lat - decl) + C

Usage:
    from sapengine.analysis.solar import solar_radiation

    s = solar_radiation(UK_CLIMATE, region=13, orientation=4, tilt=90, month=0)
"""

import math

from ..climate import ClimateDataset
from ..core.models import FabricElement, Orientation

# Window gains: soiling and non-perpendicular incidence
WINDOW_GAIN_FACTOR = 0.9


def solar_radiation(
    climate: ClimateDataset,
    region: int,
    orientation: int,
    tilt: float,
    month: int,
) -> float:
    """
    Mean irradiance on an inclined surface.

    Args:
        climate: Climate tables
        region: SAP region index
        orientation: 0-7, clockwise from north
        tilt: Surface tilt from horizontal (degrees)
        month: 0-11

    Returns:
        Irradiance in W/m2
    """
    column = Orientation(orientation).solar_column
    k = [row[column] for row in climate.solar_coefficients]

    sinp = math.sin(math.radians(tilt))
    sin2p = sinp * sinp
    sin3p = sin2p * sinp

    a = k[0] * sin3p + k[1] * sin2p + k[2] * sinp
    b = k[3] * sin3p + k[4] * sin2p + k[5] * sinp
    c = k[6] * sin3p + k[7] * sin2p + k[8] * sinp + 1.0

    cos1 = math.cos(math.radians(climate.latitude(region) - climate.solar_declination[month]))
    ratio = a * cos1 * cos1 + b * cos1 + c
    return climate.horizontal_solar(region, month) * ratio


def window_solar_gain(
    climate: ClimateDataset,
    region: int,
    window: FabricElement,
    month: int,
) -> float:
    """Mean solar gain through a vertical window for one month (W)."""
    access = climate.access_factor(int(window.overshading), month)
    flux = solar_radiation(climate, region, int(window.orientation), 90.0, month)
    return access * window.gross_area * flux * WINDOW_GAIN_FACTOR * window.g * window.ff


def light_access_gain(climate: ClimateDataset, window: FabricElement) -> float:
    """Daylight term of GL for one window (m2, before dividing by TFA)."""
    factor = climate.light_access_factor[int(window.overshading)]
    return WINDOW_GAIN_FACTOR * window.gross_area * window.g * window.ff * factor
