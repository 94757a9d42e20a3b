"""Configuration management using pydantic-settings."""

from .coercion import DEFAULT_ATTEMPTS, coerce_attempts
from .settings import (
    DonmaiSettings,
    LoggingSettings,
    RetrySettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "DEFAULT_ATTEMPTS",
    "DonmaiSettings",
    "LoggingSettings",
    "RetrySettings",
    "clear_settings_cache",
    "coerce_attempts",
    "get_settings",
]
