"""Retry configuration models.

Attempt counts are coerced rather than rejected, and the async delay is only
kept when positive (see ``donmai.foundation.config.coercion``).
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from donmai.foundation.config.coercion import DEFAULT_ATTEMPTS, attempts_before, coerce_attempts, positive_or_none

__all__ = ["DEFAULT_ATTEMPTS", "RetryAsyncConfig", "RetryConfig", "coerce_attempts"]


class RetryConfig(BaseModel):
    """Configuration for the blocking Retry engine.

    Attributes:
        attempts: Total attempts per run (coerced to a positive integer)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        revalidate_instances="never",
        json_schema_extra={
            "title": "Retry Config",
            "examples": [{"attempts": 5}],
        },
    )

    attempts: Annotated[int, Field(ge=1)] = DEFAULT_ATTEMPTS

    @field_validator("attempts", mode="before")
    @classmethod
    def _coerce_attempts(cls, v: object) -> object:
        return attempts_before(v)


class RetryAsyncConfig(RetryConfig):
    """Configuration for the asyncio RetryAsync engine.

    Attributes:
        attempts: Total attempts per run (coerced to a positive integer)
        delay_ms: Pause in milliseconds between failed attempts, or None
    """

    model_config = ConfigDict(
        json_schema_extra={
            "title": "Retry Async Config",
            "examples": [{"attempts": 5, "delay_ms": 200}],
        },
    )

    delay_ms: float | None = None

    @field_validator("delay_ms", mode="after")
    @classmethod
    def _positive_delay(cls, v: float | None) -> float | None:
        return positive_or_none(v)

    @property
    def delay_seconds(self) -> float | None:
        return self.delay_ms / 1000 if self.delay_ms else None
