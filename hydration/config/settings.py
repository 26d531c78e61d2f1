"""
Configuration Management for Hydration Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The daily goal stored with the ledger always wins over the default
goal configured here; the default only applies on first run or when
the stored goal is missing or invalid.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="HYDRATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage
    storage_path: str = Field(
        default="hydration_state.json",
        description="Path of the JSON file holding goal and history"
    )

    # Tracking defaults
    default_goal_ml: int = Field(
        default=2000,
        gt=0,
        description="Daily goal used when no valid goal is stored"
    )
    history_window_days: int = Field(
        default=7,
        ge=1,
        le=366,
        description="Number of days shown in the trailing chart"
    )
    quick_options: str = Field(
        default="150,200,250,500",
        description="Comma-separated list of quick-add portions in ml"
    )
    removal_step_ml: int = Field(
        default=250,
        gt=0,
        description="Amount removed by the 'remove a glass' action"
    )

    # Environment
    log_level: str = Field(
        default="INFO",
        description="Log level for the structured logger"
    )

    @field_validator('quick_options')
    @classmethod
    def validate_quick_options(cls, v: str) -> str:
        """Every quick option must be a positive whole number of milliliters."""
        for part in v.split(","):
            part = part.strip()
            if not part:
                continue
            if not part.isdigit() or int(part) <= 0:
                raise ValueError(f"Invalid quick option: {part!r}")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def quick_options_list(self) -> list[int]:
        """Get quick options as a list of ints."""
        return [int(part) for part in self.quick_options.split(",") if part.strip()]


@lru_cache()
def get_settings() -> TrackerSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return TrackerSettings()
