"""
Swap calculator: composes the fee kernels and the constant-product curve.

Exact-input swaps take the fee first and price the remainder. Exact-output
swaps price first, then gross the required input up for the fee and recompute
the fee from that gross amount. The recomputation is kept as a separate step
so fees always follow the same ceiling rule as exact-input swaps.

Every step is checked; the first failure raises and no partial result is
returned.
"""

from __future__ import annotations

import logging

from ..errors import CalculationFailure, EmptySupply
from ..kernels.python.checked_u128 import checked_add, checked_sub, require_u64
from . import constant_product, fees
from .types import RoundDirection, SwapResult, TradingTokenResult

logger = logging.getLogger(__name__)


def validate_supply(reserve_0: int, reserve_1: int) -> None:
    """Reject pool creation with an empty side."""
    require_u64("reserve_0", reserve_0)
    require_u64("reserve_1", reserve_1)
    if reserve_0 == 0:
        raise EmptySupply("reserve_0 is zero")
    if reserve_1 == 0:
        raise EmptySupply("reserve_1 is zero")


def swap_exact_input(
    input_amount: int,
    reserve_in: int,
    reserve_out: int,
    trade_fee_rate: int,
    protocol_fee_rate: int,
    fund_fee_rate: int,
) -> SwapResult:
    """
    Output for an exact input, fees included.

        trade_fee = ceil(input * trade_rate / 1e6)
        output = floor((input - trade_fee) * y / (x + input - trade_fee))
        new_reserve_in = x + input   (trade fee stays in the pool)
        new_reserve_out = y - output
    """
    trade_fee = fees.trading_fee(input_amount, trade_fee_rate)
    protocol_fee = fees.protocol_fee(trade_fee, protocol_fee_rate)
    fund_fee = fees.fund_fee(trade_fee, fund_fee_rate)

    input_less_fees = checked_sub(input_amount, trade_fee)
    output_amount = constant_product.swap_output_without_fees(input_less_fees, reserve_in, reserve_out)

    result = SwapResult(
        new_reserve_in=checked_add(reserve_in, input_amount),
        new_reserve_out=checked_sub(reserve_out, output_amount),
        gross_input_amount=input_amount,
        output_amount=output_amount,
        trade_fee=trade_fee,
        protocol_fee=protocol_fee,
        fund_fee=fund_fee,
    )
    logger.debug("swap_exact_input %s", result)
    return result


def swap_exact_output(
    output_amount: int,
    reserve_in: int,
    reserve_out: int,
    trade_fee_rate: int,
    protocol_fee_rate: int,
    fund_fee_rate: int,
) -> SwapResult:
    """
    Input required for an exact output, fees included.

        net_input = ceil(x * output / (y - output))
        gross_input = ceil(net_input * 1e6 / (1e6 - trade_rate))
        trade_fee = ceil(gross_input * trade_rate / 1e6)
    """
    net_input = constant_product.swap_input_without_fees(output_amount, reserve_in, reserve_out)
    gross_input = fees.calculate_pre_fee_amount(net_input, trade_fee_rate)
    trade_fee = fees.trading_fee(gross_input, trade_fee_rate)
    protocol_fee = fees.protocol_fee(trade_fee, protocol_fee_rate)
    fund_fee = fees.fund_fee(trade_fee, fund_fee_rate)

    result = SwapResult(
        new_reserve_in=checked_add(reserve_in, gross_input),
        new_reserve_out=checked_sub(reserve_out, output_amount),
        gross_input_amount=gross_input,
        output_amount=output_amount,
        trade_fee=trade_fee,
        protocol_fee=protocol_fee,
        fund_fee=fund_fee,
    )
    logger.debug("swap_exact_output %s", result)
    return result


def shares_to_reserves(
    share_amount: int,
    share_supply: int,
    reserve_0: int,
    reserve_1: int,
    round_direction: RoundDirection,
) -> TradingTokenResult:
    """Ceiling for deposit sizing, floor for withdrawal sizing."""
    return constant_product.shares_to_reserves(
        share_amount,
        share_supply,
        reserve_0,
        reserve_1,
        round_direction,
    )


def check_invariant(reserve_in: int, reserve_out: int, result: SwapResult) -> None:
    """Raise if `result` would shrink `reserve_in * reserve_out`."""
    k_before = reserve_in * reserve_out
    k_after = result.new_reserve_in * result.new_reserve_out
    if k_after < k_before:
        logger.debug("invariant violation: k_before=%d k_after=%d", k_before, k_after)
        raise CalculationFailure(f"invariant violation: new_k ({k_after}) < old_k ({k_before})")
