"""donmai - retry a fallible unit of work and get one definitive result.

The unit of work receives a context on every attempt and answers with a
signal: ``ctx.ok(value)`` when done, ``ctx.retry()`` to go again. Exceptions
can be routed to a fault handler that either swallows them (``ctx.retry()``)
or ends the run (``ctx.stop(value)``).

Quick Start:
    >>> from donmai import Retry, RunOk
    >>>
    >>> retry = Retry(attempts=5)
    >>> result = retry.run(lambda ctx: ctx.ok(ctx.attempt) if ctx.attempt == 3 else ctx.retry())
    >>> RunOk.unwrap(result)
    3

Async with a pause between attempts:
    >>> from donmai import RetryAsync
    >>>
    >>> retry = (
    ...     RetryAsync(attempts=5, delay_ms=200)
    ...     .on_error(lambda ctx: ctx.retry() if isinstance(ctx.error, TimeoutError) else ctx.stop())
    ...     .fallback("gave up")
    ... )
    >>> result = await retry.run(fetch)

Results are a two-variant union, best consumed with pattern matching:
    >>> match result:
    ...     case RunOk(value):
    ...         ...
    ...     case RunError(error):
    ...         ...
"""

from .foundation import (
    DonmaiError,
    DonmaiSettings,
    ErrorCode,
    InvalidSignalError,
    LoggingSettings,
    RetrySettings,
    RunError,
    RunOk,
    RunResult,
    UnwrapError,
    clear_settings_cache,
    get_settings,
    is_run_result,
)
from .runtime import (
    JsonFormatter,
    OnErrorContext,
    Retry,
    RetryAsync,
    RetryAsyncConfig,
    RetryConfig,
    RunAsyncContext,
    RunContext,
    configure_from_settings,
    configure_logging,
)

__version__ = "0.1.0"

__all__ = [
    # Engines
    "Retry", "RetryAsync", "RetryConfig", "RetryAsyncConfig",
    # Contexts
    "RunContext", "RunAsyncContext", "OnErrorContext",
    # Results
    "RunOk", "RunError", "RunResult", "is_run_result",
    # Errors
    "ErrorCode", "DonmaiError", "UnwrapError", "InvalidSignalError",
    # Settings
    "DonmaiSettings", "RetrySettings", "LoggingSettings", "get_settings", "clear_settings_cache",
    # Logging
    "configure_logging", "configure_from_settings", "JsonFormatter",
]
