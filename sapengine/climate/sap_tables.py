"""
SAP 2012 climate and calculation tables.

Monthly constants used by every calculator:
- Table 1a/1c/1d: days per month, hot-water volume factors, temperature rise
- Appendix U1/U2/U3: external temperature, wind speed, horizontal solar flux
- Appendix U4: latitude per region, plus monthly solar declination
- Table U5: orientation coefficients for the tilted-surface irradiance model
- Table 6d: solar and light access factors per overshading class

Regions follow the SAP 2012 numbering (0 = UK average, 1 = Thames ...
21 = Northern Ireland). Months are indexed 0 (January) to 11 (December).

Usage:
    from sapengine.climate import UK_CLIMATE

    te = UK_CLIMATE.external_temperature(region=13, month=0)
"""

from dataclasses import dataclass
from typing import Tuple

MONTHS = 12

MonthlySeries = Tuple[float, ...]


REGION_NAMES: Tuple[str, ...] = (
    "UK average",
    "Thames",
    "South East England",
    "Southern England",
    "South West England",
    "Severn Valley",
    "Midlands",
    "West Pennines",
    "North West England / South West Scotland",
    "Borders",
    "North East England",
    "East Pennines",
    "East Anglia",
    "Wales",
    "West Scotland",
    "East Scotland",
    "North East Scotland",
    "Highland",
    "Western Isles",
    "Orkney",
    "Shetland",
    "Northern Ireland",
)


# =============================================================================
# APPENDIX U TABLES (one row per region, one column per month)
# =============================================================================

EXTERNAL_TEMPERATURE: Tuple[MonthlySeries, ...] = (
    (4.5, 5.0, 6.8, 8.7, 11.7, 14.6, 16.9, 16.9, 14.3, 10.8, 7.0, 4.9),
    (5.1, 5.6, 7.4, 9.9, 13.0, 16.0, 17.9, 17.8, 15.2, 11.6, 8.0, 5.1),
    (5.0, 5.4, 7.1, 9.5, 12.6, 15.4, 17.4, 17.5, 15.0, 11.7, 8.1, 5.2),
    (5.4, 5.7, 7.3, 9.6, 12.6, 15.4, 17.3, 17.3, 15.0, 11.8, 8.4, 5.5),
    (6.1, 6.4, 7.5, 9.3, 11.9, 14.5, 16.2, 16.3, 14.6, 11.8, 9.0, 6.4),
    (4.9, 5.3, 7.0, 9.3, 12.2, 15.0, 16.7, 16.7, 14.4, 11.1, 7.8, 4.9),
    (4.3, 4.8, 6.6, 9.0, 11.8, 14.8, 16.6, 16.5, 14.0, 10.5, 7.1, 4.2),
    (4.7, 5.2, 6.7, 9.1, 12.0, 14.7, 16.4, 16.3, 14.1, 10.7, 7.5, 4.6),
    (3.9, 4.3, 5.6, 7.9, 10.7, 13.2, 14.9, 14.8, 12.8, 9.7, 6.6, 3.7),
    (4.0, 4.5, 5.8, 7.9, 10.4, 13.3, 15.2, 15.1, 13.1, 9.7, 6.6, 3.7),
    (4.0, 4.6, 6.1, 8.3, 10.9, 13.8, 15.8, 15.6, 13.5, 10.1, 6.7, 3.8),
    (4.3, 4.9, 6.5, 8.9, 11.7, 14.6, 16.6, 16.4, 14.1, 10.6, 7.1, 4.2),
    (4.7, 5.2, 7.0, 9.5, 12.5, 15.4, 17.6, 17.6, 15.0, 11.4, 7.7, 4.7),
    (5.0, 5.3, 6.5, 8.5, 11.2, 13.7, 15.3, 15.3, 13.5, 10.7, 7.8, 5.2),
    (4.0, 4.4, 5.6, 7.9, 10.4, 13.0, 14.5, 14.4, 12.5, 9.3, 6.5, 3.8),
    (3.6, 4.0, 5.4, 7.7, 10.1, 12.9, 14.6, 14.5, 12.5, 9.2, 6.1, 3.2),
    (3.3, 3.6, 5.0, 7.1, 9.3, 12.2, 14.0, 13.9, 12.0, 8.8, 5.7, 2.9),
    (3.1, 3.2, 4.4, 6.6, 8.9, 11.4, 13.2, 13.1, 11.3, 8.2, 5.4, 2.7),
    (5.2, 5.0, 5.8, 7.6, 9.7, 11.8, 13.4, 13.6, 12.1, 9.6, 7.3, 5.2),
    (4.4, 4.2, 5.0, 7.0, 8.9, 11.2, 13.1, 13.2, 11.7, 9.1, 6.6, 4.3),
    (4.6, 4.1, 4.7, 6.5, 8.3, 10.5, 12.4, 12.8, 11.4, 8.8, 6.5, 4.6),
    (5.2, 5.4, 6.8, 8.3, 11.1, 13.4, 15.4, 15.2, 13.2, 10.2, 7.4, 5.5),
)

WIND_SPEED: Tuple[MonthlySeries, ...] = (
    (5.4, 5.1, 5.1, 4.5, 4.1, 3.9, 3.7, 3.7, 4.2, 4.5, 4.8, 5.1),
    (4.2, 4.0, 4.0, 3.7, 3.7, 3.3, 3.4, 3.2, 3.3, 3.5, 3.5, 3.8),
    (4.8, 4.5, 4.4, 3.9, 3.9, 3.6, 3.7, 3.5, 3.7, 4.0, 4.1, 4.4),
    (5.1, 4.7, 4.6, 4.3, 4.3, 4.0, 4.0, 3.9, 4.0, 4.5, 4.4, 4.7),
    (6.0, 5.6, 5.6, 5.0, 5.0, 4.4, 4.4, 4.3, 4.7, 5.4, 5.5, 5.9),
    (4.9, 4.6, 4.7, 4.3, 4.3, 3.8, 3.8, 3.7, 3.8, 4.3, 4.3, 4.6),
    (4.5, 4.5, 4.4, 3.9, 3.8, 3.4, 3.3, 3.3, 3.5, 3.8, 3.9, 4.1),
    (4.8, 4.7, 4.6, 4.2, 4.1, 3.7, 3.7, 3.7, 3.7, 4.2, 4.3, 4.5),
    (5.2, 5.2, 5.0, 4.4, 4.3, 3.9, 3.7, 3.7, 4.1, 4.6, 4.8, 4.9),
    (5.2, 5.2, 5.0, 4.4, 4.1, 3.8, 3.5, 3.5, 3.9, 4.4, 4.6, 4.7),
    (5.3, 5.2, 5.0, 4.3, 4.2, 3.9, 3.6, 3.6, 4.1, 4.6, 4.8, 4.8),
    (5.1, 5.0, 4.9, 4.4, 4.3, 3.8, 3.8, 3.7, 4.0, 4.3, 4.5, 4.7),
    (4.9, 4.8, 4.7, 4.2, 4.2, 3.7, 3.8, 3.8, 4.0, 4.2, 4.4, 4.6),
    (6.5, 6.2, 5.9, 5.2, 5.1, 4.7, 4.6, 4.6, 5.1, 5.6, 5.9, 6.2),
    (6.2, 6.2, 5.9, 5.2, 4.9, 4.7, 4.3, 4.3, 4.9, 5.4, 5.7, 5.4),
    (5.7, 5.8, 5.7, 5.0, 4.8, 4.6, 4.1, 4.1, 4.7, 5.2, 5.3, 5.1),
    (5.7, 5.8, 5.7, 5.0, 4.6, 4.4, 4.0, 4.1, 4.6, 5.2, 5.3, 5.1),
    (6.5, 6.8, 6.4, 5.7, 5.1, 5.1, 4.9, 5.0, 5.6, 6.3, 6.4, 6.1),
    (8.3, 8.4, 7.9, 6.6, 6.1, 6.1, 5.6, 5.9, 6.6, 7.6, 8.0, 7.7),
    (7.9, 8.3, 7.9, 7.1, 6.2, 6.1, 5.5, 5.8, 6.8, 7.4, 7.8, 7.3),
    (9.5, 9.4, 8.7, 7.5, 6.6, 6.4, 5.7, 6.0, 7.2, 8.5, 8.9, 8.5),
    (6.0, 5.7, 5.7, 5.0, 4.6, 4.4, 4.2, 4.2, 4.7, 5.1, 5.4, 5.7),
)

# Mean global solar irradiance on a horizontal plane (W/m2)
HORIZONTAL_SOLAR: Tuple[MonthlySeries, ...] = (
    (26, 54, 94, 150, 190, 201, 194, 164, 116, 68, 33, 21),
    (30, 56, 98, 157, 195, 217, 203, 173, 127, 73, 39, 24),
    (32, 59, 104, 170, 208, 231, 216, 182, 133, 77, 41, 25),
    (35, 62, 109, 172, 209, 235, 217, 185, 138, 80, 44, 27),
    (36, 63, 111, 174, 210, 233, 204, 182, 137, 83, 45, 29),
    (32, 59, 105, 167, 201, 226, 206, 175, 130, 76, 41, 26),
    (28, 55, 97, 153, 191, 208, 194, 163, 121, 69, 35, 23),
    (24, 51, 95, 152, 191, 203, 186, 152, 115, 65, 31, 20),
    (23, 51, 95, 157, 200, 203, 194, 156, 113, 62, 30, 19),
    (23, 50, 92, 151, 200, 196, 187, 153, 111, 61, 30, 18),
    (25, 51, 95, 152, 196, 198, 190, 156, 115, 64, 32, 20),
    (26, 54, 96, 150, 192, 200, 189, 157, 115, 66, 33, 21),
    (30, 58, 101, 165, 203, 220, 206, 173, 128, 74, 39, 24),
    (29, 57, 104, 164, 205, 220, 199, 167, 120, 68, 35, 22),
    (19, 46, 88, 148, 196, 193, 185, 150, 101, 55, 25, 15),
    (21, 46, 89, 146, 198, 191, 183, 150, 106, 57, 27, 15),
    (19, 45, 89, 143, 194, 188, 177, 144, 101, 54, 25, 14),
    (17, 43, 85, 145, 189, 185, 170, 139, 98, 51, 22, 12),
    (16, 41, 87, 155, 205, 206, 185, 148, 101, 51, 21, 11),
    (14, 39, 84, 143, 205, 201, 178, 145, 100, 50, 19, 9),
    (12, 34, 79, 135, 196, 190, 168, 144, 90, 46, 16, 7),
    (23, 49, 89, 139, 190, 188, 175, 152, 107, 61, 29, 17),
)

LATITUDE: Tuple[float, ...] = (
    53.4, 51.5, 51.0, 50.8, 50.6, 51.5, 52.7, 53.4, 54.8, 55.5, 54.5,
    53.4, 52.3, 52.5, 55.8, 56.4, 57.2, 57.5, 58.0, 59.0, 60.2, 54.7,
)

SOLAR_DECLINATION: MonthlySeries = (
    -20.7, -12.8, -1.8, 9.8, 18.8, 23.1, 21.2, 13.7, 2.9, -8.7, -18.4, -23.0,
)

# Table U5 constants k1..k9, columns: N, NE/NW, E/W, SE/SW, S
SOLAR_COEFFICIENTS: Tuple[Tuple[float, ...], ...] = (
    (0.056, -2.85, -0.241, 0.839, 2.35),
    (-5.79, 2.89, -0.024, -0.604, -2.97),
    (6.23, 0.298, 0.351, 0.989, 2.4),
    (3.32, 4.52, 0.604, -0.554, -3.04),
    (-0.159, -6.28, -0.494, 0.251, 3.88),
    (-3.74, 1.47, -0.502, -2.49, -4.97),
    (-2.7, -2.58, -1.79, -2.0, -1.31),
    (3.45, 3.96, 2.06, 2.28, 1.27),
    (-1.21, -1.88, -0.405, 0.807, 1.83),
)


# =============================================================================
# TABLE 1 AND TABLE 6d
# =============================================================================

DAYS_IN_MONTH: Tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

HOT_WATER_MONTHLY_FACTOR: MonthlySeries = (
    1.10, 1.06, 1.02, 0.98, 0.94, 0.90, 0.90, 0.94, 0.98, 1.02, 1.06, 1.10,
)

HOT_WATER_TEMPERATURE_RISE: MonthlySeries = (
    41.2, 41.4, 40.1, 37.6, 36.4, 33.9, 30.4, 33.4, 33.5, 36.3, 39.4, 39.9,
)

# (winter, summer) solar access factor per overshading class
SOLAR_ACCESS_FACTOR: Tuple[Tuple[float, float], ...] = (
    (0.30, 0.50),  # heavy
    (0.54, 0.70),  # more than average
    (0.77, 0.90),  # average or unknown
    (1.00, 1.00),  # very little
)

LIGHT_ACCESS_FACTOR: Tuple[float, ...] = (0.50, 0.67, 0.83, 1.00)

# Months (0-based) that use the summer access factor
SUMMER_MONTHS = range(5, 9)


@dataclass(frozen=True)
class ClimateDataset:
    """
    Read-only bundle of the monthly tables.

    Calculators take a ClimateDataset argument instead of reaching for
    module globals, so an alternative dataset can be injected in tests.
    """

    external_temperature_table: Tuple[MonthlySeries, ...] = EXTERNAL_TEMPERATURE
    wind_speed_table: Tuple[MonthlySeries, ...] = WIND_SPEED
    horizontal_solar_table: Tuple[MonthlySeries, ...] = HORIZONTAL_SOLAR
    latitude_table: Tuple[float, ...] = LATITUDE
    solar_declination: MonthlySeries = SOLAR_DECLINATION
    solar_coefficients: Tuple[Tuple[float, ...], ...] = SOLAR_COEFFICIENTS
    days_in_month: Tuple[int, ...] = DAYS_IN_MONTH
    hot_water_monthly_factor: MonthlySeries = HOT_WATER_MONTHLY_FACTOR
    hot_water_temperature_rise: MonthlySeries = HOT_WATER_TEMPERATURE_RISE
    solar_access_factor: Tuple[Tuple[float, float], ...] = SOLAR_ACCESS_FACTOR
    light_access_factor: Tuple[float, ...] = LIGHT_ACCESS_FACTOR
    region_names: Tuple[str, ...] = REGION_NAMES

    @property
    def region_count(self) -> int:
        return len(self.external_temperature_table)

    def has_region(self, region: int) -> bool:
        return 0 <= region < self.region_count

    def external_temperature(self, region: int, month: int) -> float:
        return self.external_temperature_table[region][month]

    def wind_speed(self, region: int, month: int) -> float:
        return self.wind_speed_table[region][month]

    def horizontal_solar(self, region: int, month: int) -> float:
        return self.horizontal_solar_table[region][month]

    def latitude(self, region: int) -> float:
        return self.latitude_table[region]

    def access_factor(self, overshading: int, month: int) -> float:
        """Solar access factor for an overshading class in a given month."""
        summer = 1 if month in SUMMER_MONTHS else 0
        return self.solar_access_factor[overshading][summer]


UK_CLIMATE = ClimateDataset()
