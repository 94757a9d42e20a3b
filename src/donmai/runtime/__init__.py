"""Runtime layer: retry engines and logging setup."""

from .observability import JsonFormatter, configure_from_settings, configure_logging
from .retry import (
    OnErrorContext,
    Retry,
    RetryAsync,
    RetryAsyncConfig,
    RetryConfig,
    RunAsyncContext,
    RunContext,
)

__all__ = [
    "Retry", "RetryAsync", "RetryConfig", "RetryAsyncConfig",
    "RunContext", "RunAsyncContext", "OnErrorContext",
    "configure_logging", "configure_from_settings", "JsonFormatter",
]
