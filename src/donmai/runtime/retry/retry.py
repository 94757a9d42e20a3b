"""Retry engines driving a unit of work through bounded attempts.

Two engines share one protocol:
- Retry: blocking, every attempt runs to completion before the next
- RetryAsync: asyncio, accepts sync or async callables and pauses between
  failed attempts when ``delay_ms`` is configured

The unit of work receives a context and answers with a signal
(``ctx.ok(value)`` or ``ctx.retry()``), or raises. Raised exceptions go to the
fault handler installed with ``on_error``; without one they propagate out of
``run``. When attempts run out, ``run`` returns ``RunError(fallback)``.

Engines are persistent builders: ``on_error`` and ``fallback`` return new
engines and never touch the receiver, so a configured engine can be shared.

Example:
    >>> retry = (
    ...     RetryAsync(attempts=5, delay_ms=200)
    ...     .on_error(lambda ctx: ctx.stop(str(ctx.error)))
    ...     .fallback("attempts exhausted")
    ... )
    >>> result = await retry.run(fetch_page)
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Generic, TypeVar, Union

from donmai.foundation.errors import InvalidSignalError, RunError, RunOk, RunResult, is_run_result

from .config import DEFAULT_ATTEMPTS, RetryAsyncConfig, RetryConfig
from .context import OnErrorContext, RunAsyncContext, RunContext

if TYPE_CHECKING:
    from donmai.foundation.config import RetrySettings


logger = logging.getLogger("donmai.retry")

T = TypeVar("T")
E = TypeVar("E")  # Error type produced by the fault handler
F = TypeVar("F")  # Fallback type
E2 = TypeVar("E2")

RunFn = Callable[[RunContext], RunResult[T, Any]]
RunAsyncFn = Callable[[RunAsyncContext], Union[RunResult[T, Any], Awaitable[RunResult[T, Any]]]]
OnErrorFn = Callable[[OnErrorContext[Any]], RunResult[None, E]]
OnErrorAsyncFn = Callable[[OnErrorContext[Any]], Union[RunResult[None, E], Awaitable[RunResult[None, E]]]]


def _signal(source: str, value: object) -> RunResult[Any, Any]:
    """Validate that a callback answered with a result variant."""
    if is_run_result(value):
        return value  # type: ignore[return-value]
    if inspect.iscoroutine(value):
        value.close()  # Never awaited; silence the warning
        raise InvalidSignalError(f"{source} returned a coroutine; use RetryAsync for async callables")
    raise InvalidSignalError.for_value(source, value)


async def _resolve(value: object) -> object:
    return await value if inspect.isawaitable(value) else value


class _RetryBase(Generic[E, F]):
    """Immutable configuration shared by both engines."""

    __slots__ = ("_config", "_on_error", "_fallback", "_name")

    _config_type: ClassVar[type[RetryConfig]] = RetryConfig

    _config: RetryConfig
    _on_error: Callable[[OnErrorContext[Any]], Any] | None
    _fallback: Any
    _name: str

    @classmethod
    def from_config(cls, config: RetryConfig, *, name: str = "retry") -> Any:
        """Build an engine from an already validated config model."""
        engine = object.__new__(cls)
        engine._config = cls._config_type.model_validate(config.model_dump(include=set(cls._config_type.model_fields)))
        engine._on_error = None
        engine._fallback = None
        engine._name = name
        return engine

    def _replace(self, **changes: Any) -> Any:
        clone = object.__new__(type(self))
        for slot in _RetryBase.__slots__:
            object.__setattr__(clone, slot, changes.get(slot.lstrip("_"), getattr(self, slot)))
        return clone

    @property
    def attempts(self) -> int:
        """Total amount of attempts."""
        return self._config.attempts

    @property
    def config(self) -> RetryConfig:
        return self._config

    @property
    def name(self) -> str:
        return self._name

    @property
    def fallback_value(self) -> F:
        return self._fallback

    @property
    def error_handler(self) -> Callable[[OnErrorContext[Any]], Any] | None:
        return self._on_error

    def __repr__(self) -> str:
        parts = [f"attempts={self.attempts}"]
        if delay := getattr(self._config, "delay_ms", None):
            parts.append(f"delay_ms={delay:g}")
        if self._on_error is not None:
            parts.append(f"on_error={getattr(self._on_error, '__name__', type(self._on_error).__name__)}")
        if self._fallback is not None:
            parts.append(f"fallback={self._fallback!r}")
        return f"{type(self).__name__}({', '.join(parts)})"

    def _log_fault(self, index: int, exc: Exception) -> None:
        logger.info(f"[{self._name}] Attempt {index + 1}/{self.attempts} raised {type(exc).__name__}: {exc}")

    def _log_stop(self, index: int, stop: RunError[Any]) -> None:
        logger.info(f"[{self._name}] Stopped by error handler at attempt {index + 1}/{self.attempts}: {stop.error!r}")

    def _exhausted(self) -> RunError[F]:
        logger.info(f"[{self._name}] Exhausted {self.attempts} attempt(s), returning fallback")
        return RunError(self._fallback)


class Retry(_RetryBase[E, F]):
    """Blocking retry engine.

    Example:
        >>> retry = Retry(attempts=5)
        >>> result = retry.run(lambda ctx: ctx.ok(ctx.attempt) if ctx.attempt == 5 else ctx.retry())
        >>> result
        RunOk(value=5)

        >>> retry = Retry(attempts=5).on_error(lambda ctx: ctx.stop(str(ctx.error)))
        >>> def flaky(ctx):
        ...     if ctx.attempt % 2 == 0:
        ...         raise ValueError("Invalid attempt value!")
        ...     return ctx.retry()
        >>> retry.run(flaky)
        RunError(error='Invalid attempt value!')
    """

    __slots__ = ()

    def __init__(self, attempts: float = DEFAULT_ATTEMPTS, *, name: str = "retry") -> None:
        self._config = RetryConfig(attempts=attempts)
        self._on_error = None
        self._fallback = None
        self._name = name

    @classmethod
    def from_settings(cls, settings: RetrySettings | None = None, *, name: str = "retry") -> Retry[Any, None]:
        """Build from RetrySettings (defaults to DONMAI_RETRY_* environment)."""
        if settings is None:
            from donmai.foundation.config import get_settings
            settings = get_settings().retry
        return cls(settings.attempts, name=name)

    def on_error(self, fn: OnErrorFn[E2]) -> Retry[E2, F]:
        """Return a copy that routes raised exceptions to ``fn``.

        ``fn`` receives an OnErrorContext and answers ``ctx.retry()`` to carry
        on or ``ctx.stop(value)`` to end the run with ``RunError(value)``.
        """
        return self._replace(on_error=fn)

    def fallback(self, value: E) -> Retry[E, E]:
        """Return a copy whose exhausted runs end with ``RunError(value)``."""
        return self._replace(fallback=value)

    def run(self, fn: RunFn[T]) -> RunResult[T, E | F]:
        """Run ``fn`` until it signals success, the handler stops, or attempts run out."""
        attempts = self.attempts
        for i in range(attempts):
            ctx = RunContext(i + 1)
            try:
                result = fn(ctx)
            except Exception as exc:
                if self._on_error is None:
                    raise
                self._log_fault(i, exc)
                match _signal("on_error handler", self._on_error(OnErrorContext(i, exc))):
                    case RunError() as stop:
                        self._log_stop(i, stop)
                        return stop
                continue

            match _signal("run callable", result):
                case RunOk() as done:
                    return done
            logger.debug(f"[{self._name}] Attempt {i + 1}/{attempts} requested retry")

        return self._exhausted()


class RetryAsync(_RetryBase[E, F]):
    """Asyncio retry engine, mainly for IO-bound units of work.

    The unit of work and the fault handler may be plain functions or
    coroutine functions. After a retry signal that is not the final attempt,
    the engine sleeps ``delay_ms`` before the next attempt. Exceptions answered
    with ``ctx.retry()`` by the fault handler move on without the pause.

    Example:
        >>> retry = RetryAsync(attempts=5, delay_ms=200)
        >>> async def work(ctx: RunAsyncContext):
        ...     if ctx.attempt == 5:
        ...         return ctx.ok(ctx.attempt)
        ...     return ctx.retry()
        >>> await retry.run(work)
        RunOk(value=5)
    """

    __slots__ = ()

    _config_type = RetryAsyncConfig
    _config: RetryAsyncConfig

    def __init__(
        self, attempts: float = DEFAULT_ATTEMPTS, delay_ms: float | None = None, *, name: str = "retry",
    ) -> None:
        self._config = RetryAsyncConfig(attempts=attempts, delay_ms=delay_ms)
        self._on_error = None
        self._fallback = None
        self._name = name

    @classmethod
    def from_settings(cls, settings: RetrySettings | None = None, *, name: str = "retry") -> RetryAsync[Any, None]:
        """Build from RetrySettings (defaults to DONMAI_RETRY_* environment)."""
        if settings is None:
            from donmai.foundation.config import get_settings
            settings = get_settings().retry
        return cls(settings.attempts, settings.delay_ms, name=name)

    @property
    def delay_ms(self) -> float | None:
        """Milliseconds between failed attempts, None when disabled."""
        return self._config.delay_ms

    def on_error(self, fn: OnErrorAsyncFn[E2]) -> RetryAsync[E2, F]:
        """Return a copy that routes raised exceptions to ``fn`` (sync or async)."""
        return self._replace(on_error=fn)

    def fallback(self, value: E) -> RetryAsync[E, E]:
        """Return a copy whose exhausted runs end with ``RunError(value)``."""
        return self._replace(fallback=value)

    async def run(self, fn: RunAsyncFn[T]) -> RunResult[T, E | F]:
        """Run ``fn`` until it signals success, the handler stops, or attempts run out."""
        attempts, delay = self.attempts, self._config.delay_seconds
        for i in range(attempts):
            ctx = RunAsyncContext(i + 1)
            try:
                result = await _resolve(fn(ctx))
            except Exception as exc:
                if self._on_error is None:
                    raise
                self._log_fault(i, exc)
                signal = await _resolve(self._on_error(OnErrorContext(i, exc)))
                match _signal("on_error handler", signal):
                    case RunError() as stop:
                        self._log_stop(i, stop)
                        return stop
                continue

            match _signal("run callable", result):
                case RunOk() as done:
                    return done
            logger.debug(f"[{self._name}] Attempt {i + 1}/{attempts} requested retry")

            if delay and i < attempts - 1:
                logger.debug(f"[{self._name}] Waiting {self._config.delay_ms:g}ms before attempt {i + 2}")
                await asyncio.sleep(delay)

        return self._exhausted()
