import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Dashboard configuration loaded from environment variables."""

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    default_normalization: str = Field(
        default="minmax",
        alias="DEFAULT_NORMALIZATION",
        description="Normalization applied to the country detail chart: minmax or zscore",
    )

    # World Bank indicator codes
    gdp_per_capita_indicator: str = Field(default="NY.GDP.PCAP.CD", alias="GDP_PER_CAPITA_INDICATOR")
    co2_per_capita_indicator: str = Field(default="EN.GHG.CO2.PC.CE.AR5", alias="CO2_PER_CAPITA_INDICATOR")
    renewable_energy_indicator: str = Field(default="EG.FEC.RNEW.ZS", alias="RENEWABLE_ENERGY_INDICATOR")

    series_palette: List[str] = Field(
        default_factory=lambda: ["#3b82f6", "#10b981", "#ef4444"],
        alias="SERIES_PALETTE",
    )
    # Fallback max for the precipitation color scale when a year has no rain data
    precipitation_fallback_max: float = Field(default=50.0, alias="PRECIPITATION_FALLBACK_MAX")
    temperature_padding: float = Field(default=5.0, alias="TEMPERATURE_PADDING")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,  # Treat empty strings as not set
    )

    @field_validator("series_palette", mode="before")
    @classmethod
    def parse_palette(cls, v):
        """Parse SERIES_PALETTE from comma-separated string or list"""
        if isinstance(v, str):
            return [color.strip() for color in v.split(",") if color.strip()]
        return v or []

    @field_validator("default_normalization")
    @classmethod
    def check_normalization(cls, v: str) -> str:
        method = v.strip().lower()
        if method not in ("minmax", "zscore"):
            raise ValueError(
                f"DEFAULT_NORMALIZATION must be 'minmax' or 'zscore', got '{v}'"
            )
        return method

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got '{v}'")
        return level


@lru_cache
def get_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid econdash settings",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """Apply LOG_LEVEL to the ``econdash`` logger hierarchy and return its root logger."""
    settings = settings or get_settings()
    logger = logging.getLogger("econdash")
    logger.setLevel(settings.log_level)
    return logger
