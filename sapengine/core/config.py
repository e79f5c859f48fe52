"""
Configuration management for sapengine.

Defaults used outside the pure engine: certificate inference fallbacks,
fuel prices for payback, discount rate for NPV, batch worker count.
"""

from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.

    Can be configured via environment variables (SAP_*) or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Inference defaults for missing certificate fields
    default_region: int = Field(default=0, ge=0, le=21, description="SAP climate region (0 = UK average)")
    default_altitude_m: float = Field(default=0.0, description="Site altitude (m)")
    default_floor_area_m2: float = Field(default=80.0, gt=0, description="Floor area when missing (m2)")
    default_floor_height_m: float = Field(default=2.5, gt=0, description="Storey height when missing (m)")
    default_habitable_rooms: int = Field(default=4, ge=1, description="Habitable rooms when missing")

    # Economics
    fuel_price_gbp_per_kwh: float = Field(default=0.10, gt=0, description="Effective delivered fuel price (GBP/kWh)")
    boiler_efficiency: float = Field(default=0.85, gt=0, le=1, description="Seasonal heating efficiency")
    discount_rate: float = Field(default=0.035, ge=0, description="Real discount rate for NPV")
    analysis_period_years: int = Field(default=25, ge=1, description="NPV horizon (years)")

    # Execution
    max_workers: int = Field(default=4, ge=1, description="Process pool size for batch runs")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_file: Optional[str] = Field(default=None, description="Also write logs to this file")


# Global settings instance
settings = Settings()
