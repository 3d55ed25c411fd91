"""Property tests: rounding never lets value leave the pool.

Python ints stand in for a 256-bit oracle, so products of u128 quantities are
compared without re-overflowing.
"""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import assume, given

from cpswap.core import calculator
from cpswap.core.constant_product import shares_to_reserves, swap_output_without_fees
from cpswap.core.fees import FEE_RATE_DENOMINATOR_VALUE, fund_fee, protocol_fee, trading_fee
from cpswap.core.types import RoundDirection, TradeDirection

U64_MAX = (1 << 64) - 1

positive_u64 = st.integers(min_value=1, max_value=U64_MAX)
# Exact-output grosses the input up by up to 1e6x; keep products inside u128.
positive_u40 = st.integers(min_value=1, max_value=(1 << 40) - 1)
rate = st.integers(min_value=0, max_value=FEE_RATE_DENOMINATOR_VALUE)
trade_rate = st.integers(min_value=0, max_value=FEE_RATE_DENOMINATOR_VALUE - 1)


@st.composite
def total_and_intermediate(draw):
    total = draw(st.integers(min_value=2, max_value=U64_MAX))
    intermediate = draw(st.integers(min_value=1, max_value=total - 1))
    return total, intermediate


@given(input_amount=positive_u64, reserve_in=positive_u64, reserve_out=positive_u64, direction=st.sampled_from(TradeDirection))
def test_curve_value_does_not_decrease_from_swap(
    input_amount: int, reserve_in: int, reserve_out: int, direction: TradeDirection
) -> None:
    output = swap_output_without_fees(input_amount, reserve_in, reserve_out)
    new_in = reserve_in + input_amount
    new_out = reserve_out - output

    if direction is TradeDirection.ZERO_FOR_ONE:
        before, after = (reserve_in, reserve_out), (new_in, new_out)
    else:
        before, after = (reserve_out, reserve_in), (new_out, new_in)
    assert after[0] * after[1] >= before[0] * before[1]


@given(amount=positive_u64, trade=rate, protocol=rate, fund=rate)
def test_fee_sub_splits_never_exceed_trade_fee(amount: int, trade: int, protocol: int, fund: int) -> None:
    assume(protocol + fund <= FEE_RATE_DENOMINATOR_VALUE)
    fee = trading_fee(amount, trade)
    assert protocol_fee(fee, protocol) + fund_fee(fee, fund) <= fee
    assert fee <= amount


@given(shares=positive_u64, supply=positive_u64, reserve_0=positive_u64, reserve_1=positive_u64)
def test_curve_value_does_not_decrease_from_deposit(shares: int, supply: int, reserve_0: int, reserve_1: int) -> None:
    # At least one token per side, otherwise the deposit is rejected upstream.
    assume(shares * reserve_0 // supply >= 1)
    assume(shares * reserve_1 // supply >= 1)
    owed = shares_to_reserves(shares, supply, reserve_0, reserve_1, RoundDirection.CEILING)
    new_supply = supply + shares
    new_0 = reserve_0 + owed.reserve_0_amount
    new_1 = reserve_1 + owed.reserve_1_amount
    assert new_0 * supply >= reserve_0 * new_supply
    assert new_1 * supply >= reserve_1 * new_supply


@given(pair=total_and_intermediate(), reserve_0=positive_u64, reserve_1=positive_u64)
def test_curve_value_does_not_decrease_from_withdraw(pair: tuple, reserve_0: int, reserve_1: int) -> None:
    supply, shares = pair
    assume(shares * reserve_0 // supply >= 1)
    assume(shares * reserve_1 // supply >= 1)
    paid = shares_to_reserves(shares, supply, reserve_0, reserve_1, RoundDirection.FLOOR)
    new_supply = supply - shares
    new_0 = reserve_0 - paid.reserve_0_amount
    new_1 = reserve_1 - paid.reserve_1_amount
    assert new_0 * supply >= reserve_0 * new_supply
    assert new_1 * supply >= reserve_1 * new_supply


@given(supply=positive_u64, reserve_0=positive_u64, reserve_1=positive_u64)
def test_zero_shares_never_round_up(supply: int, reserve_0: int, reserve_1: int) -> None:
    owed = shares_to_reserves(0, supply, reserve_0, reserve_1, RoundDirection.CEILING)
    assert (owed.reserve_0_amount, owed.reserve_1_amount) == (0, 0)


@given(
    reserve_in=positive_u40,
    reserve_out=st.integers(min_value=2, max_value=(1 << 40) - 1),
    data=st.data(),
    trade=trade_rate,
)
def test_exact_output_input_buys_at_least_requested_output(
    reserve_in: int, reserve_out: int, data: st.DataObject, trade: int
) -> None:
    output = data.draw(st.integers(min_value=1, max_value=reserve_out - 1))
    result = calculator.swap_exact_output(output, reserve_in, reserve_out, trade, 0, 0)
    net_input = result.gross_input_amount - result.trade_fee
    assert swap_output_without_fees(net_input, reserve_in, reserve_out) >= output
    calculator.check_invariant(reserve_in, reserve_out, result)


@given(input_amount=positive_u64, reserve_in=positive_u64, reserve_out=positive_u64, trade=rate)
def test_exact_input_swap_keeps_invariant(input_amount: int, reserve_in: int, reserve_out: int, trade: int) -> None:
    result = calculator.swap_exact_input(input_amount, reserve_in, reserve_out, trade, 0, 0)
    assert result.new_reserve_in * result.new_reserve_out >= reserve_in * reserve_out
    assert result.output_amount < reserve_out
