"""
Configuration Management for LifeOS Engine

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All tunable constants that are not part of a scoring
table live here. Scoring tables themselves are versioned data in
lifeos.scoring.tables, not environment configuration.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExchangeRateSettings(BaseSettings):
    """USD/TRY exchange rate source configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXCHANGE_RATE_",
        extra="ignore"
    )

    api_url: str = Field(
        default="https://cdn.moneyconvert.net/api/latest.json",
        description="JSON endpoint returning rates relative to USD"
    )
    cache_ttl_minutes: int = Field(
        default=15,
        ge=15,
        le=60,
        description="How long a fetched rate is served from cache"
    )
    fallback_rate: float = Field(
        default=36.5,
        gt=0,
        description="TRY per USD used when no rate was ever fetched"
    )
    timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        le=60,
        description="Upper bound for a single refresh"
    )
    max_attempts: int = Field(
        default=2,
        ge=1,
        le=5,
        description="HTTP attempts per refresh"
    )

    @property
    def cache_ttl_seconds(self) -> int:
        return self.cache_ttl_minutes * 60


class ScoringSettings(BaseSettings):
    """Health score extension configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        extra="ignore"
    )

    activity_scheme: str = Field(
        default="linear",
        description="Activity scoring scheme: 'linear' or 'sustainable_optimum'"
    )
    history_adjustments_enabled: bool = Field(
        default=True,
        description="Apply overtraining penalty / active recovery bonus"
    )
    overtraining_window_days: int = Field(
        default=3,
        ge=1,
        le=14,
        description="Trailing days at max activity that count as overtraining"
    )
    overtraining_penalty: int = Field(
        default=15,
        ge=0,
        le=50,
        description="Points subtracted for overtraining"
    )
    active_recovery_bonus: int = Field(
        default=5,
        ge=0,
        le=20,
        description="Points added for a moderate day after a heavy day"
    )

    @field_validator('activity_scheme')
    @classmethod
    def validate_activity_scheme(cls, v: str) -> str:
        """Only documented schemes are accepted."""
        allowed = {"linear", "sustainable_optimum"}
        if v.lower() not in allowed:
            raise ValueError(f"Unknown activity scheme: {v}. Allowed: {allowed}")
        return v.lower()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level for structured logs"
    )

    # Aggregation
    aggregation_window_days: int = Field(
        default=30,
        ge=1,
        le=366,
        description="Trailing window used for dashboard metrics"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unknown log level: {v}")
        return v.upper()


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def exchange_rate(self) -> ExchangeRateSettings:
        return ExchangeRateSettings()

    @property
    def scoring(self) -> ScoringSettings:
        return ScoringSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an
    additional "<name>_error" entry for each failure.
    """
    results = {}
    settings = get_settings()

    for name in ("exchange_rate", "scoring", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
