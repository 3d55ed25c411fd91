# [TESTER] v1

from __future__ import annotations

import pytest

from cpswap.core.fees import (
    FEE_RATE_DENOMINATOR_VALUE,
    calculate_pre_fee_amount,
    fund_fee,
    protocol_fee,
    trading_fee,
)
from cpswap.errors import CalculationFailure
from cpswap.kernels.python.checked_u128 import U128_MAX


def test_trading_fee_rounds_fractional_fee_up() -> None:
    # ceil(3 * 2500 / 1_000_000) = ceil(0.0075) = 1
    assert trading_fee(3, 2500) == 1
    assert trading_fee(1_000_000, 2500) == 2500
    assert trading_fee(1_000_001, 2500) == 2501
    assert trading_fee(0, 2500) == 0
    assert trading_fee(123_456, 0) == 0


def test_protocol_and_fund_fees_round_down() -> None:
    assert protocol_fee(2501, 120_000) == 300
    assert fund_fee(2501, 40_000) == 100
    assert protocol_fee(1, 999_999) == 0
    assert fund_fee(7, FEE_RATE_DENOMINATOR_VALUE) == 7


def test_pre_fee_amount_zero_rate_is_identity() -> None:
    assert calculate_pre_fee_amount(0, 0) == 0
    assert calculate_pre_fee_amount(12_345, 0) == 12_345


def test_pre_fee_amount_inverts_trade_fee() -> None:
    assert calculate_pre_fee_amount(997_500, 2500) == 1_000_000
    # ceil(1 * 1e6 / 997_500) = 2
    assert calculate_pre_fee_amount(1, 2500) == 2


@pytest.mark.parametrize("post_fee_amount", [0, 1, 997_500, 10**18])
def test_pre_fee_amount_fails_for_full_fee(post_fee_amount: int) -> None:
    with pytest.raises(CalculationFailure):
        calculate_pre_fee_amount(post_fee_amount, FEE_RATE_DENOMINATOR_VALUE)


def test_pre_fee_amount_fails_for_rate_above_denominator() -> None:
    with pytest.raises(CalculationFailure):
        calculate_pre_fee_amount(100, FEE_RATE_DENOMINATOR_VALUE + 1)


def test_fee_overflow_fails_instead_of_wrapping() -> None:
    with pytest.raises(CalculationFailure):
        trading_fee(U128_MAX, 2)
    with pytest.raises(CalculationFailure):
        protocol_fee(U128_MAX, 2)
    with pytest.raises(CalculationFailure):
        calculate_pre_fee_amount(U128_MAX, 1)
    # The ceil step itself can overflow even when the product fits.
    with pytest.raises(CalculationFailure):
        trading_fee(U128_MAX, 1)


def test_negative_inputs_are_rejected() -> None:
    with pytest.raises(CalculationFailure):
        trading_fee(-1, 2500)
    with pytest.raises(CalculationFailure):
        fund_fee(10, -1)
