"""
Configuration management for FacadeFlux.

Two layers:
- Settings: process defaults from environment variables or a .env file
- CalculationOptions: per-call overrides handed to the calculator
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IndexType(str, Enum):
    """Envelope thermal transfer index to compute."""

    ETTV = "ettv"  # Envelope Thermal Transfer Value (non-residential)
    RETV = "retv"  # Residential Envelope Transmittance Value


class Settings(BaseSettings):
    """
    Application settings.

    Can be configured via environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FACADEFLUX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Regulatory limits (W/m²)
    ettv_limit: float = Field(default=50.0, ge=0, description="ETTV limit for non-residential envelopes")
    retv_limit: float = Field(default=25.0, ge=0, description="RETV limit for residential envelopes")
    climate_label: str = Field(default="Tropical", description="Climate label carried into results")
    default_index: IndexType = Field(default=IndexType.ETTV, description="Index computed when none is requested")

    # Surface air films (m²K/W)
    inside_film_resistance: float = Field(default=0.12, ge=0, description="Internal surface film Rsi")
    outside_film_resistance: float = Field(default=0.04, ge=0, description="External surface film Rse")

    # Processing
    parallel_workers: int = Field(default=1, ge=1, description="Worker processes for orientation groups")
    log_level: str = Field(default="WARNING", description="Log level for the CLI")

    def limit_for(self, index: IndexType) -> float:
        """Default regulatory limit for an index."""
        return self.retv_limit if index == IndexType.RETV else self.ettv_limit


class CalculationOptions(BaseModel):
    """
    Per-calculation overrides.

    Every field is optional; unset fields fall back to Settings and to the
    standard coefficients of the selected index. Overrides only ever change
    formula constants, never the calculation path.
    """

    model_config = ConfigDict(frozen=True)

    index: Optional[IndexType] = None
    wall_conductance_coefficient: Optional[float] = Field(default=None, ge=0)
    fenestration_conductance_coefficient: Optional[float] = Field(default=None, ge=0)
    solar_gain_coefficient: Optional[float] = Field(default=None, ge=0)
    regulatory_limit: Optional[float] = Field(default=None, ge=0)
    climate_label: Optional[str] = None

    def resolved_index(self, config: Settings | None = None) -> IndexType:
        config = config or settings
        return self.index or config.default_index

    def resolved_limit(self, config: Settings | None = None) -> float:
        config = config or settings
        if self.regulatory_limit is not None:
            return self.regulatory_limit
        return config.limit_for(self.resolved_index(config))

    def resolved_climate(self, config: Settings | None = None) -> str:
        config = config or settings
        return self.climate_label or config.climate_label


# Global settings instance
settings = Settings()
