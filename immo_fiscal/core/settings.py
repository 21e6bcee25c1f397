"""Application settings with environment variable support.

Uses pydantic-settings for typed configuration validation.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class AppSettings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    # Simulation
    simulation_cache_size: int = Field(
        default=256, ge=0, description="Memoized simulation runs (0 disables caching)"
    )

    # Sweeps
    sweep_max_workers: int = Field(
        default=1, ge=1, le=64, description="Worker processes for what-if sweeps"
    )

    # Export
    export_dir: str = Field(default="results", description="Directory for exported reports")

    model_config = {
        "env_prefix": "IMMOFISCAL_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
