"""Error codes and exceptions for programmer-misuse paths.

Domain failures travel as data in RunError. The exceptions here are reserved
for misuse of the protocol itself (unwrapping the wrong variant, returning
something that is not a signal).
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    """Machine-readable classification for donmai exceptions."""
    UNWRAP_MISMATCH = "UNWRAP_MISMATCH"
    INVALID_SIGNAL = "INVALID_SIGNAL"
    UNKNOWN = "UNKNOWN"


class DonmaiError(Exception):
    """Base exception carrying a message and an ErrorCode."""

    code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: ErrorCode | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code.value})"


class UnwrapError(DonmaiError, RuntimeError):
    """Raised when unwrapping the variant a result does not hold."""

    code = ErrorCode.UNWRAP_MISMATCH


class InvalidSignalError(DonmaiError, TypeError):
    """Raised when a work callable or fault handler returns a non-result."""

    code = ErrorCode.INVALID_SIGNAL

    @classmethod
    def for_value(cls, source: str, value: object) -> InvalidSignalError:
        return cls(f"{source} must return RunOk or RunError, got {type(value).__name__}: {value!r}")
