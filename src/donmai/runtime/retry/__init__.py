"""Retry engines with an explicit result/context protocol.

Example:
    >>> from donmai.runtime.retry import Retry
    >>>
    >>> retry = Retry(attempts=5).fallback("attempts exhausted")
    >>> retry.run(lambda ctx: ctx.retry())
    RunError(error='attempts exhausted')
"""

from .config import DEFAULT_ATTEMPTS, RetryAsyncConfig, RetryConfig, coerce_attempts
from .context import OnErrorContext, RunAsyncContext, RunContext
from .retry import OnErrorAsyncFn, OnErrorFn, Retry, RetryAsync, RunAsyncFn, RunFn

__all__ = [
    # Engines
    "Retry",
    "RetryAsync",
    # Contexts
    "RunContext",
    "RunAsyncContext",
    "OnErrorContext",
    # Configuration
    "RetryConfig",
    "RetryAsyncConfig",
    "DEFAULT_ATTEMPTS",
    "coerce_attempts",
    # Callable aliases
    "RunFn",
    "RunAsyncFn",
    "OnErrorFn",
    "OnErrorAsyncFn",
]
