"""Environment-based configuration using pydantic-settings.

Example:
    >>> from donmai.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.retry.attempts
    3

    # Or with environment variables:
    # DONMAI_RETRY_ATTEMPTS=5
    # DONMAI_RETRY_DELAY_MS=250
    # DONMAI_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .coercion import attempts_before, positive_or_none


class RetrySettings(BaseSettings):
    """Default retry configuration used by ``Retry.from_settings``."""

    model_config = SettingsConfigDict(
        env_prefix="DONMAI_RETRY_",
        extra="ignore",
    )

    attempts: int = Field(default=3, ge=1, description="Total attempts per run (coerced like RetryConfig)")
    delay_ms: float | None = Field(default=None, description="Pause between attempts (async only, positive or unset)")

    @field_validator("attempts", mode="before")
    @classmethod
    def _coerce_attempts(cls, v: object) -> object:
        return attempts_before(v)

    @field_validator("delay_ms", mode="after")
    @classmethod
    def _positive_delay(cls, v: float | None) -> float | None:
        return positive_or_none(v)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="DONMAI_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["text", "json", "none"] = "text"

    @field_validator("level", "format", mode="before")
    @classmethod
    def _normalize_case(cls, v: object) -> object:
        if not isinstance(v, str):
            return v
        return v.lower() if v.lower() in ("text", "json", "none") else v.upper()


class DonmaiSettings(BaseSettings):
    """Root settings for donmai.

    Example environment variables:
        DONMAI_DEBUG=true
        DONMAI_RETRY_ATTEMPTS=5
        DONMAI_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="DONMAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Force DEBUG logging in configure_from_settings()")

    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> DonmaiSettings:
    """Get the global settings instance (cached)."""
    return DonmaiSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
