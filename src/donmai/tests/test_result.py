"""Tests for the RunOk/RunError result union.

Validates:
- Variant construction and discriminant
- Strict unwrap in both directions
- Empty signal variants
- Combinators and pattern matching
"""

from __future__ import annotations

import pytest

from donmai.foundation.errors import (
    DonmaiError,
    ErrorCode,
    InvalidSignalError,
    RunError,
    RunOk,
    RunResult,
    UnwrapError,
    is_run_result,
)


# ═════════════════════════════════════════════════════════════════════════════
# Construction
# ═════════════════════════════════════════════════════════════════════════════


def test_ok_construction() -> None:
    """Test RunOk variant construction and discriminant."""
    result: RunResult[int, str] = RunOk(42)

    assert result.ok is True
    assert result.is_ok()
    assert not result.is_err()
    assert result.value == 42


def test_error_construction() -> None:
    """Test RunError variant construction and discriminant."""
    result: RunResult[int, str] = RunError("failed")

    assert result.ok is False
    assert result.is_err()
    assert not result.is_ok()
    assert result.error == "failed"


def test_variants_hold_a_single_payload() -> None:
    assert not hasattr(RunOk(1), "error")
    assert not hasattr(RunError(1), "value")


def test_empty_variants_carry_none() -> None:
    assert RunOk.empty() == RunOk(None)
    assert RunError.empty() == RunError(None)
    assert RunOk.empty().ok
    assert not RunError.empty().ok


def test_results_are_immutable() -> None:
    result = RunOk(1)
    with pytest.raises(AttributeError):
        result.value = 2  # type: ignore[misc]


# ═════════════════════════════════════════════════════════════════════════════
# Unwrap
# ═════════════════════════════════════════════════════════════════════════════


def test_unwrap_matching_variant_returns_payload() -> None:
    payload = {"rows": [1, 2, 3]}

    assert RunOk.unwrap(RunOk(payload)) is payload
    assert RunError.unwrap(RunError(payload)) is payload


def test_ok_unwrap_on_error_raises() -> None:
    with pytest.raises(UnwrapError) as info:
        RunOk.unwrap(RunError("boom"))

    assert info.value.code == ErrorCode.UNWRAP_MISMATCH
    assert isinstance(info.value, RuntimeError)


def test_error_unwrap_on_ok_raises() -> None:
    with pytest.raises(UnwrapError, match="cannot unwrap ok variant"):
        RunError.unwrap(RunOk(1))


def test_unwrap_empty_variants() -> None:
    assert RunOk.unwrap(RunOk.empty()) is None
    assert RunError.unwrap(RunError.empty()) is None


def test_error_codes() -> None:
    """Base errors default to UNKNOWN; subclasses carry their own code."""
    assert DonmaiError("x").code == ErrorCode.UNKNOWN
    assert DonmaiError("x", ErrorCode.INVALID_SIGNAL).code == ErrorCode.INVALID_SIGNAL
    assert UnwrapError("x").code == ErrorCode.UNWRAP_MISMATCH
    assert InvalidSignalError.for_value("work", 42).code == ErrorCode.INVALID_SIGNAL
    assert set(ErrorCode) == {ErrorCode.UNWRAP_MISMATCH, ErrorCode.INVALID_SIGNAL, ErrorCode.UNKNOWN}


# ═════════════════════════════════════════════════════════════════════════════
# Combinators
# ═════════════════════════════════════════════════════════════════════════════


def test_unwrap_or() -> None:
    assert RunOk(5).unwrap_or(0) == 5
    assert RunError("x").unwrap_or(0) == 0


def test_map_and_map_err() -> None:
    assert RunOk(5).map(lambda x: x * 2) == RunOk(10)
    assert RunOk(5).map_err(lambda e: f"E: {e}") == RunOk(5)
    assert RunError("fail").map(lambda x: x * 2) == RunError("fail")
    assert RunError("fail").map_err(lambda e: f"E: {e}") == RunError("E: fail")


def test_match() -> None:
    def describe(result: RunResult[int, str]) -> str:
        return result.match(ok=lambda v: f"success: {v}", err=lambda e: f"failed: {e}")

    assert describe(RunOk(42)) == "success: 42"
    assert describe(RunError("nope")) == "failed: nope"


def test_structural_pattern_matching() -> None:
    def describe(result: RunResult[int, str]) -> str:
        match result:
            case RunOk(value):
                return f"ok {value}"
            case RunError(error):
                return f"error {error}"
        return "unreachable"

    assert describe(RunOk(1)) == "ok 1"
    assert describe(RunError("x")) == "error x"


def test_equality_distinguishes_variants() -> None:
    assert RunOk(1) == RunOk(1)
    assert RunOk(1) != RunError(1)
    assert hash(RunError("a")) == hash(RunError("a"))


def test_is_run_result() -> None:
    assert is_run_result(RunOk(1))
    assert is_run_result(RunError(None))
    assert not is_run_result(None)
    assert not is_run_result(("ok", 1))
