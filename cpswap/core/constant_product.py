"""
Constant Product Market Maker (CPMM) curve, fees excluded.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per call
- Invariant: (x + dx) * (y - dy) >= x * y for every quote produced here

Rounding always favours the pool: outputs are floored, required inputs are
ceiled, and share conversions round the way the caller's `RoundDirection`
asks.
"""

from __future__ import annotations

from ..kernels.python.checked_u128 import (
    checked_add,
    checked_ceil_div,
    checked_div,
    checked_mul,
    checked_rem,
    checked_sub,
    require_u128,
)
from .types import RoundDirection, TradingTokenResult


def swap_output_without_fees(input_amount: int, reserve_in: int, reserve_out: int) -> int:
    """
    Output for an exact input, ignoring fees.

        (x + dx) * (y - dy) = x * y
        dy = floor(dx * y / (x + dx))
    """
    for name, v in (
        ("input_amount", input_amount),
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
    ):
        require_u128(name, v)

    numerator = checked_mul(input_amount, reserve_out)
    denominator = checked_add(reserve_in, input_amount)
    return checked_div(numerator, denominator)


def swap_input_without_fees(output_amount: int, reserve_in: int, reserve_out: int) -> int:
    """
    Input required for an exact output, ignoring fees.

        dx = ceil(x * dy / (y - dy))

    Raises `CalculationFailure` when `output_amount >= reserve_out`.
    """
    for name, v in (
        ("output_amount", output_amount),
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
    ):
        require_u128(name, v)

    numerator = checked_mul(reserve_in, output_amount)
    denominator = checked_sub(reserve_out, output_amount)
    return checked_ceil_div(numerator, denominator)


def _share_of(share_amount: int, share_supply: int, reserve: int, round_direction: RoundDirection) -> int:
    product = checked_mul(share_amount, reserve)
    amount = checked_div(product, share_supply)
    if round_direction is RoundDirection.CEILING:
        # A zero floor stays zero: a share worth a fraction of one token must
        # not be charged a whole token.
        if checked_rem(product, share_supply) > 0 and amount > 0:
            amount = checked_add(amount, 1)
    return amount


def shares_to_reserves(
    share_amount: int,
    share_supply: int,
    reserve_0: int,
    reserve_1: int,
    round_direction: RoundDirection,
) -> TradingTokenResult:
    """
    Reserve-token amounts backing `share_amount` LP shares.

        amount_i = floor(share_amount * reserve_i / share_supply)

    With `RoundDirection.CEILING` a nonzero floored amount with a nonzero
    remainder is bumped by one.
    """
    for name, v in (
        ("share_amount", share_amount),
        ("share_supply", share_supply),
        ("reserve_0", reserve_0),
        ("reserve_1", reserve_1),
    ):
        require_u128(name, v)
    if not isinstance(round_direction, RoundDirection):
        raise TypeError("round_direction must be a RoundDirection")

    return TradingTokenResult(
        reserve_0_amount=_share_of(share_amount, share_supply, reserve_0, round_direction),
        reserve_1_amount=_share_of(share_amount, share_supply, reserve_1, round_direction),
    )
