# [TESTER] v1

from __future__ import annotations

import pytest

from cpswap.errors import CalculationFailure, ErrorCode
from cpswap.kernels.python.checked_u128 import (
    U64_MAX,
    U128_MAX,
    checked_add,
    checked_ceil_div,
    checked_div,
    checked_mul,
    checked_rem,
    checked_sub,
    require_u64,
    require_u128,
)


def test_add_overflows_exactly_past_u128_max() -> None:
    assert checked_add(U128_MAX - 1, 1) == U128_MAX
    with pytest.raises(CalculationFailure):
        checked_add(U128_MAX, 1)


def test_sub_underflow_fails() -> None:
    assert checked_sub(5, 5) == 0
    with pytest.raises(CalculationFailure) as exc_info:
        checked_sub(0, 1)
    assert exc_info.value.code is ErrorCode.CALCULATION_FAILURE


def test_mul_overflow_fails() -> None:
    assert checked_mul(U64_MAX, U64_MAX) < U128_MAX
    with pytest.raises(CalculationFailure):
        checked_mul(1 << 64, 1 << 64)


def test_division_by_zero_fails() -> None:
    with pytest.raises(CalculationFailure):
        checked_div(1, 0)
    with pytest.raises(CalculationFailure):
        checked_rem(1, 0)
    with pytest.raises(CalculationFailure):
        checked_ceil_div(0, 0)


def test_ceil_div_rounds_up_only_on_remainder() -> None:
    assert checked_ceil_div(6, 2) == 3
    assert checked_ceil_div(7, 2) == 4
    assert checked_ceil_div(0, 5) == 0
    assert checked_ceil_div(1, 5) == 1
    # No `a + b - 1` intermediate, so the top of the range still works.
    assert checked_ceil_div(U128_MAX, 1) == U128_MAX
    assert checked_ceil_div(U128_MAX, 2) == 1 << 127


def test_range_guards() -> None:
    assert require_u128("x", U128_MAX) == U128_MAX
    with pytest.raises(CalculationFailure):
        require_u128("x", U128_MAX + 1)
    with pytest.raises(CalculationFailure):
        require_u128("x", -1)
    with pytest.raises(CalculationFailure):
        require_u64("rate", U64_MAX + 1)
    with pytest.raises(TypeError):
        require_u128("x", True)
    with pytest.raises(TypeError):
        require_u64("rate", 1.5)  # type: ignore[arg-type]
