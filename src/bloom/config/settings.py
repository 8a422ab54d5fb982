"""
Bloom Application Settings

Configuration management using Pydantic Settings.
All values can be overridden from environment variables.

SECURITY: Never log or expose settings containing secrets.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CheckInSettings(BaseSettings):
    """
    Check-in policy configuration.

    CLINICAL_REVIEW_REQUIRED: Alert thresholds and the rolling
    window should be reviewed with the care team before changes.
    """

    model_config = SettingsConfigDict(env_prefix="BLOOM_CHECKIN_")

    min_age: int = Field(default=4, ge=1, le=18, description="Youngest supported age")
    max_age: int = Field(default=16, ge=1, le=18, description="Oldest supported age")
    alert_window_days: int = Field(default=7, ge=1, le=90, description="Rolling alert window")
    low_intensity_threshold: int = Field(default=3, ge=1, le=10)
    low_intensity_alert_count: int = Field(default=3, ge=1)
    concerning_mood_alert_count: int = Field(default=4, ge=1)
    trend_threshold: float = Field(default=0.5, ge=0.0, le=9.0)
    report_period_days: int = Field(default=7, ge=1, le=365)

    @model_validator(mode="after")
    def validate_age_bounds(self) -> "CheckInSettings":
        """Ensure the supported age range is not inverted."""
        if self.min_age > self.max_age:
            raise ValueError(
                f"min_age ({self.min_age}) must not exceed max_age ({self.max_age})"
            )
        return self


class SentrySettings(BaseSettings):
    """Sentry error tracking configuration."""

    model_config = SettingsConfigDict(env_prefix="BLOOM_SENTRY_")

    dsn: SecretStr = Field(default=SecretStr(""), description="Sentry DSN (empty disables)")
    traces_sample_rate: float = Field(default=0.1, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with BLOOM_ prefix.

    Usage:
        settings = get_settings()
        window = settings.checkin.alert_window_days
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOOM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode - NEVER enable in production")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    api_version: str = Field(default="v1", description="API version prefix")
    cors_origins: list[str] = Field(
        default=["http://localhost:8081", "http://localhost:19006"],
        description="Allowed CORS origins (Expo dev servers by default)"
    )

    # Nested settings
    checkin: CheckInSettings = Field(default_factory=CheckInSettings)
    sentry: SentrySettings = Field(default_factory=SentrySettings)

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, construct Settings directly or clear the cache.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
