"""Contexts handed to the unit of work and to the fault handler.

Each context is created fresh by the engine and exposes signal constructors.
The signals are plain results, interpreted by the engine:

    RunContext.retry()      -> RunError(None)  "try again"
    RunContext.ok(value)    -> RunOk(value)    "done"
    OnErrorContext.retry()  -> RunOk(None)     "swallow the exception, try again"
    OnErrorContext.stop(e)  -> RunError(e)     "give up with e"
"""

from __future__ import annotations

import asyncio
from typing import Generic, TypeVar, overload

from donmai.foundation.errors import RunError, RunOk

T = TypeVar("T")
E = TypeVar("E")


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<missing>"


_MISSING = _Missing()


class RunContext:
    """Context for a single attempt of the unit of work.

    Example:
        >>> retry = Retry(attempts=5)
        >>> result = retry.run(lambda ctx: ctx.ok(ctx.attempt) if ctx.attempt == 2 else ctx.retry())
        >>> RunOk.unwrap(result)
        2
    """

    __slots__ = ("_attempt",)

    def __init__(self, attempt: int) -> None:
        self._attempt = attempt

    @property
    def attempt(self) -> int:
        """Number of the current attempt, starting at 1."""
        return self._attempt

    def retry(self) -> RunError[None]:
        """Signal that this attempt failed and the next one should run."""
        return RunError.empty()

    @overload
    def ok(self) -> RunOk[None]: ...
    @overload
    def ok(self, value: T) -> RunOk[T]: ...

    def ok(self, value: object = None) -> RunOk[object]:
        """Signal success, optionally with the value the run should return."""
        return RunOk(value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(attempt={self._attempt})"


class RunAsyncContext(RunContext):
    """Attempt context for RetryAsync, with a cooperative pause helper."""

    __slots__ = ()

    async def delay(self, ms: float) -> None:
        """Pause the current attempt for ``ms`` milliseconds (negative means zero)."""
        await asyncio.sleep(max(ms, 0) / 1000)


class OnErrorContext(Generic[E]):
    """Context for the fault handler, built when the unit of work raises.

    ``attempt`` is the engine's raw loop index at the time of the failure,
    so it starts at 0 and trails RunContext.attempt by one.

    Example:
        >>> def handle(ctx: OnErrorContext) -> RunResult:
        ...     if isinstance(ctx.error, ConnectionError):
        ...         return ctx.retry()
        ...     return ctx.stop(str(ctx.error))
    """

    __slots__ = ("_attempt", "_error")

    def __init__(self, attempt: int, error: E) -> None:
        self._attempt = attempt
        self._error = error

    @property
    def attempt(self) -> int:
        return self._attempt

    @property
    def error(self) -> E:
        """The exception raised by the unit of work."""
        return self._error

    def retry(self) -> RunOk[None]:
        """Swallow the exception and continue with the next attempt."""
        return RunOk.empty()

    @overload
    def stop(self) -> RunError[E]: ...
    @overload
    def stop(self, error: T) -> RunError[T]: ...

    def stop(self, error: object = _MISSING) -> RunError[object]:
        """Abort the run with ``error``, or with the raised exception if omitted."""
        if error is _MISSING:
            return RunError(self._error)
        return RunError(error)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(attempt={self._attempt}, error={self._error!r})"
