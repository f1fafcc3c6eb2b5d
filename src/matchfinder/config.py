"""
Configuration management for MatchFinder.

Uses Pydantic Settings to load configuration from environment variables
with sensible defaults for development. Variables are prefixed with
MATCHFINDER_ and can also be set in a .env file.

The rating engine itself never reads settings; its tunables live in
matchfinder.elo.constants. Settings cover what surrounds it: logging and
the defaults callers use when preparing engine inputs.

Usage:
    from matchfinder.config import settings
    print(settings.log_level)
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can be set directly or via a .env file
    in the project root directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="MATCHFINDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Rating Inputs
    # ==========================================================================

    default_rating: int = Field(
        default=1200,
        ge=100,
        le=3000,
        description="Rating assigned to a player before their first match",
    )
    history_window_days: int = Field(
        default=60,
        ge=30,
        description=(
            "How many days of match history callers load for modifier lookups. "
            "Must cover the 30-day repetition window."
        ),
    )

    # ==========================================================================
    # Logging Configuration
    # ==========================================================================

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: str = Field(
        default="console",
        description="Log format: 'json' for production, 'console' for dev",
    )

    # ==========================================================================
    # Validators
    # ==========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        lower_v = v.lower()
        if lower_v not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return lower_v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures we only load settings once,
    which is important because loading from .env can be slow.
    """
    return Settings()


# Convenience alias for importing
settings = get_settings()
