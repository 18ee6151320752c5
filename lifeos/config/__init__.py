"""Configuration package."""

from lifeos.config.settings import (
    AppSettings,
    ExchangeRateSettings,
    ScoringSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "ExchangeRateSettings",
    "ScoringSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
