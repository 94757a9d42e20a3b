"""Numeric coercion shared by retry settings and retry config models.

Attempt counts are coerced rather than rejected: anything below one (and NaN)
becomes one, fractional counts are floored, and a floor of zero becomes one.
Delays are only kept when positive. Inputs go through pydantic's float
validation first, so numeric strings and Decimals follow the same rules.
"""

from __future__ import annotations

import math

from pydantic import TypeAdapter

DEFAULT_ATTEMPTS = 1

_FLOAT = TypeAdapter(float)


def coerce_attempts(value: float) -> int:
    """Normalize an attempt count to a positive integer.

    Raises:
        ValueError: If value is infinite

    Example:
        >>> [coerce_attempts(v) for v in (0, 2.9, -5, 0.4, 3, float("nan"))]
        [1, 2, 1, 1, 3, 1]
    """
    if math.isnan(value) or value <= 0:
        return DEFAULT_ATTEMPTS
    if math.isinf(value):
        raise ValueError("attempts must be a finite number")
    return math.floor(value) or DEFAULT_ATTEMPTS


def attempts_before(value: object) -> object:
    """``mode="before"`` hook: parse any numeric input as float, then coerce."""
    if isinstance(value, bool):
        return value  # Left to pydantic int validation
    return coerce_attempts(_FLOAT.validate_python(value))


def positive_or_none(value: float | None) -> float | None:
    """``mode="after"`` hook: zero, negative and NaN delays mean "no delay"."""
    if value is not None and not value > 0:
        return None
    return value
