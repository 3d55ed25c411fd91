"""
Fee kernels (deterministic, integer-only).

Rates are numerators over `FEE_RATE_DENOMINATOR_VALUE`, so the finest rate
step is 0.0001%. Rounding always favours the pool:
- the trade fee is rounded up, so the pool never under-collects;
- protocol and fund fees are floor-divided sub-splits of the trade fee, so
  together they never exceed it.
"""

from __future__ import annotations

from ..kernels.python.checked_u128 import (
    checked_add,
    checked_div,
    checked_mul,
    checked_sub,
    require_u64,
    require_u128,
)


FEE_RATE_DENOMINATOR_VALUE = 1_000_000


def ceil_div(token_amount: int, fee_numerator: int, fee_denominator: int) -> int:
    """`ceil(token_amount * fee_numerator / fee_denominator)` via `(x + d - 1) // d`."""
    numerator = checked_mul(token_amount, fee_numerator)
    numerator = checked_add(numerator, fee_denominator)
    numerator = checked_sub(numerator, 1)
    return checked_div(numerator, fee_denominator)


def floor_div(token_amount: int, fee_numerator: int, fee_denominator: int) -> int:
    return checked_div(checked_mul(token_amount, fee_numerator), fee_denominator)


def trading_fee(amount: int, trade_fee_rate: int) -> int:
    """
    Compute `trade_fee = ceil(amount * trade_fee_rate / 1_000_000)`.
    """
    require_u128("amount", amount)
    require_u64("trade_fee_rate", trade_fee_rate)
    return ceil_div(amount, trade_fee_rate, FEE_RATE_DENOMINATOR_VALUE)


def protocol_fee(trade_fee: int, protocol_fee_rate: int) -> int:
    """
    Compute `protocol_fee = floor(trade_fee * protocol_fee_rate / 1_000_000)`.
    """
    require_u128("trade_fee", trade_fee)
    require_u64("protocol_fee_rate", protocol_fee_rate)
    return floor_div(trade_fee, protocol_fee_rate, FEE_RATE_DENOMINATOR_VALUE)


def fund_fee(trade_fee: int, fund_fee_rate: int) -> int:
    """
    Compute `fund_fee = floor(trade_fee * fund_fee_rate / 1_000_000)`.
    """
    require_u128("trade_fee", trade_fee)
    require_u64("fund_fee_rate", fund_fee_rate)
    return floor_div(trade_fee, fund_fee_rate, FEE_RATE_DENOMINATOR_VALUE)


def calculate_pre_fee_amount(post_fee_amount: int, trade_fee_rate: int) -> int:
    """
    Recover the gross amount a payer must supply so that `post_fee_amount`
    remains after the trade fee is taken.

        gross = ceil(post_fee_amount * 1_000_000 / (1_000_000 - trade_fee_rate))

    A zero rate returns the amount unchanged. A 100% rate divides by zero and
    raises `CalculationFailure`.
    """
    require_u128("post_fee_amount", post_fee_amount)
    require_u64("trade_fee_rate", trade_fee_rate)
    if trade_fee_rate == 0:
        return post_fee_amount

    numerator = checked_mul(post_fee_amount, FEE_RATE_DENOMINATOR_VALUE)
    denominator = checked_sub(FEE_RATE_DENOMINATOR_VALUE, trade_fee_rate)
    numerator = checked_add(numerator, denominator)
    numerator = checked_sub(numerator, 1)
    return checked_div(numerator, denominator)
