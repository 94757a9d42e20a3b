"""Run result variants used as both outcomes and control signals.

A RunResult is a discriminated union of two frozen variants:
- RunOk: success, carries ``value``
- RunError: failure, carries ``error``

The class-level ``ok`` flag is the discriminant. Prefer structural pattern
matching when branching on a result:

    >>> match retry.run(work):
    ...     case RunOk(value):
    ...         print("done", value)
    ...     case RunError(error):
    ...         print("gave up", error)

Empty variants (``RunOk.empty()``, ``RunError.empty()``) carry ``None`` and are
used purely as signals by the retry contexts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Generic, Literal, TypeVar, Union

from .errors import UnwrapError

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped type


@dataclass(frozen=True, slots=True)
class RunOk(Generic[T]):
    """Success variant.

    Example:
        >>> RunOk.unwrap(RunOk(42))
        42
        >>> RunOk(2).map(lambda x: x * 2)
        RunOk(value=4)
    """

    value: T
    ok: ClassVar[Literal[True]] = True

    @staticmethod
    def empty() -> RunOk[None]:
        """Unit success, used as the fault handler's retry signal."""
        return RunOk(None)

    @staticmethod
    def unwrap(result: RunResult[U, E]) -> U:
        """Extract the success payload.

        Raises:
            UnwrapError: If result is a RunError
        """
        match result:
            case RunOk(value):
                return value
            case _:
                raise UnwrapError(f"RunOk cannot unwrap error variant: {result!r}")

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> RunOk[U]:
        return RunOk(f(self.value))

    def map_err(self, f: Callable[[object], object]) -> RunOk[T]:
        return self

    def match(self, *, ok: Callable[[T], U], err: Callable[[object], U]) -> U:
        return ok(self.value)


@dataclass(frozen=True, slots=True)
class RunError(Generic[E]):
    """Failure variant.

    Example:
        >>> RunError.unwrap(RunError("attempts exhausted"))
        'attempts exhausted'
        >>> RunError("x").unwrap_or(0)
        0
    """

    error: E
    ok: ClassVar[Literal[False]] = False

    @staticmethod
    def empty() -> RunError[None]:
        """Unit failure, used as the attempt context's retry signal."""
        return RunError(None)

    @staticmethod
    def unwrap(result: RunResult[T, U]) -> U:
        """Extract the error payload.

        Raises:
            UnwrapError: If result is a RunOk
        """
        match result:
            case RunError(error):
                return error
            case _:
                raise UnwrapError(f"RunError cannot unwrap ok variant: {result!r}")

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap_or(self, default: U) -> U:
        return default

    def map(self, f: Callable[[object], object]) -> RunError[E]:
        return self

    def map_err(self, f: Callable[[E], U]) -> RunError[U]:
        return RunError(f(self.error))

    def match(self, *, ok: Callable[[object], U], err: Callable[[E], U]) -> U:
        return err(self.error)


RunResult = Union[RunOk[T], RunError[E]]


def is_run_result(value: object) -> bool:
    """Check whether value is one of the two result variants."""
    return isinstance(value, (RunOk, RunError))
