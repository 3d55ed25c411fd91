"""
Pool state snapshots and their pure transitions.

`PoolState` holds vault balances, the LP supply, and protocol/fund fees that
have accrued inside the vaults but are owed to outside claimants. Pricing
always runs on the tradable reserves (vault minus accrued fees), so fees that
are waiting to be collected never back a swap or an LP share.

Every transition returns a new snapshot; nothing is mutated in place. The
caller is responsible for committing one transition per pool at a time.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from ..core import calculator
from ..core.config import AmmConfig
from ..core.types import RoundDirection, SwapResult, TradeDirection, TradingTokenResult
from ..errors import CalculationFailure, ExceededSlippage, NotApproved, ZeroTradingTokens
from ..kernels.python.checked_u128 import checked_add, checked_sub, require_u128

logger = logging.getLogger(__name__)

# LP shares minted at creation and never redeemable; keeps lp_supply > 0.
LOCK_LP_AMOUNT = 100


@dataclass(frozen=True)
class PoolState:
    """
    Attributes:
        reserve_0: Vault balance of token 0 (includes accrued fees)
        reserve_1: Vault balance of token 1 (includes accrued fees)
        lp_supply: Total LP share supply, locked shares included
        protocol_fees_token_0: Protocol fees owed in token 0
        protocol_fees_token_1: Protocol fees owed in token 1
        fund_fees_token_0: Fund fees owed in token 0
        fund_fees_token_1: Fund fees owed in token 1
    """

    reserve_0: int
    reserve_1: int
    lp_supply: int
    protocol_fees_token_0: int = 0
    protocol_fees_token_1: int = 0
    fund_fees_token_0: int = 0
    fund_fees_token_1: int = 0

    def __post_init__(self) -> None:
        for name, v in (
            ("reserve_0", self.reserve_0),
            ("reserve_1", self.reserve_1),
            ("lp_supply", self.lp_supply),
            ("protocol_fees_token_0", self.protocol_fees_token_0),
            ("protocol_fees_token_1", self.protocol_fees_token_1),
            ("fund_fees_token_0", self.fund_fees_token_0),
            ("fund_fees_token_1", self.fund_fees_token_1),
        ):
            require_u128(name, v)
        if self.protocol_fees_token_0 + self.fund_fees_token_0 > self.reserve_0:
            raise ValueError("accrued token_0 fees exceed reserve_0")
        if self.protocol_fees_token_1 + self.fund_fees_token_1 > self.reserve_1:
            raise ValueError("accrued token_1 fees exceed reserve_1")

    def vault_amount_without_fee(self) -> Tuple[int, int]:
        """Tradable reserves: vault balances minus fees owed to claimants."""
        owed_0 = checked_add(self.protocol_fees_token_0, self.fund_fees_token_0)
        owed_1 = checked_add(self.protocol_fees_token_1, self.fund_fees_token_1)
        return checked_sub(self.reserve_0, owed_0), checked_sub(self.reserve_1, owed_1)

    def _oriented(self, direction: TradeDirection) -> Tuple[int, int]:
        token_0, token_1 = self.vault_amount_without_fee()
        if direction is TradeDirection.ZERO_FOR_ONE:
            return token_0, token_1
        return token_1, token_0

    def _apply_swap(self, direction: TradeDirection, result: SwapResult) -> "PoolState":
        gross_in = result.gross_input_amount
        out = result.output_amount
        if direction is TradeDirection.ZERO_FOR_ONE:
            return replace(
                self,
                reserve_0=checked_add(self.reserve_0, gross_in),
                reserve_1=checked_sub(self.reserve_1, out),
                protocol_fees_token_0=checked_add(self.protocol_fees_token_0, result.protocol_fee),
                fund_fees_token_0=checked_add(self.fund_fees_token_0, result.fund_fee),
            )
        return replace(
            self,
            reserve_1=checked_add(self.reserve_1, gross_in),
            reserve_0=checked_sub(self.reserve_0, out),
            protocol_fees_token_1=checked_add(self.protocol_fees_token_1, result.protocol_fee),
            fund_fees_token_1=checked_add(self.fund_fees_token_1, result.fund_fee),
        )

    def swap_base_input(
        self,
        direction: TradeDirection,
        amount_in: int,
        config: AmmConfig,
        minimum_amount_out: int = 0,
    ) -> Tuple["PoolState", SwapResult]:
        """Exact-input swap against the tradable reserves."""
        reserve_in, reserve_out = self._oriented(direction)
        result = calculator.swap_exact_input(
            amount_in,
            reserve_in,
            reserve_out,
            config.trade_fee_rate,
            config.protocol_fee_rate,
            config.fund_fee_rate,
        )
        calculator.check_invariant(reserve_in, reserve_out, result)
        if result.output_amount == 0:
            raise ZeroTradingTokens("swap output is zero (trade too small)")
        if result.output_amount < minimum_amount_out:
            raise ExceededSlippage(
                f"output_amount ({result.output_amount}) < minimum_amount_out ({minimum_amount_out})"
            )
        logger.debug("swap_base_input %s in=%d out=%d", direction.value, amount_in, result.output_amount)
        return self._apply_swap(direction, result), result

    def swap_base_output(
        self,
        direction: TradeDirection,
        amount_out: int,
        config: AmmConfig,
        maximum_amount_in: Optional[int] = None,
    ) -> Tuple["PoolState", SwapResult]:
        """Exact-output swap against the tradable reserves."""
        reserve_in, reserve_out = self._oriented(direction)
        result = calculator.swap_exact_output(
            amount_out,
            reserve_in,
            reserve_out,
            config.trade_fee_rate,
            config.protocol_fee_rate,
            config.fund_fee_rate,
        )
        calculator.check_invariant(reserve_in, reserve_out, result)
        if maximum_amount_in is not None and result.gross_input_amount > maximum_amount_in:
            raise ExceededSlippage(
                f"gross_input_amount ({result.gross_input_amount}) > maximum_amount_in ({maximum_amount_in})"
            )
        logger.debug("swap_base_output %s in=%d out=%d", direction.value, result.gross_input_amount, amount_out)
        return self._apply_swap(direction, result), result

    def deposit(
        self,
        lp_amount: int,
        maximum_token_0: Optional[int] = None,
        maximum_token_1: Optional[int] = None,
    ) -> Tuple["PoolState", TradingTokenResult]:
        """
        Mint `lp_amount` shares. Amounts owed are rounded up so existing
        holders are never diluted.
        """
        token_0, token_1 = self.vault_amount_without_fee()
        owed = calculator.shares_to_reserves(lp_amount, self.lp_supply, token_0, token_1, RoundDirection.CEILING)
        if owed.reserve_0_amount == 0 or owed.reserve_1_amount == 0:
            raise ZeroTradingTokens(f"deposit of {lp_amount} shares rounds to zero tokens")
        if maximum_token_0 is not None and owed.reserve_0_amount > maximum_token_0:
            raise ExceededSlippage(f"token_0 owed ({owed.reserve_0_amount}) > maximum ({maximum_token_0})")
        if maximum_token_1 is not None and owed.reserve_1_amount > maximum_token_1:
            raise ExceededSlippage(f"token_1 owed ({owed.reserve_1_amount}) > maximum ({maximum_token_1})")

        next_state = replace(
            self,
            reserve_0=checked_add(self.reserve_0, owed.reserve_0_amount),
            reserve_1=checked_add(self.reserve_1, owed.reserve_1_amount),
            lp_supply=checked_add(self.lp_supply, lp_amount),
        )
        return next_state, owed

    def withdraw(
        self,
        lp_amount: int,
        minimum_token_0: int = 0,
        minimum_token_1: int = 0,
    ) -> Tuple["PoolState", TradingTokenResult]:
        """
        Burn `lp_amount` shares. Amounts paid are rounded down so the pool is
        never over-drawn. The locked shares can never be burned.
        """
        require_u128("lp_amount", lp_amount)
        redeemable = checked_sub(self.lp_supply, LOCK_LP_AMOUNT)
        if lp_amount > redeemable:
            raise CalculationFailure(f"cannot burn more LP than redeemable supply: {lp_amount} > {redeemable}")
        token_0, token_1 = self.vault_amount_without_fee()
        paid = calculator.shares_to_reserves(lp_amount, self.lp_supply, token_0, token_1, RoundDirection.FLOOR)
        if paid.reserve_0_amount == 0 or paid.reserve_1_amount == 0:
            raise ZeroTradingTokens(f"withdrawal of {lp_amount} shares rounds to zero tokens")
        if paid.reserve_0_amount < minimum_token_0:
            raise ExceededSlippage(f"token_0 paid ({paid.reserve_0_amount}) < minimum ({minimum_token_0})")
        if paid.reserve_1_amount < minimum_token_1:
            raise ExceededSlippage(f"token_1 paid ({paid.reserve_1_amount}) < minimum ({minimum_token_1})")

        next_state = replace(
            self,
            reserve_0=checked_sub(self.reserve_0, paid.reserve_0_amount),
            reserve_1=checked_sub(self.reserve_1, paid.reserve_1_amount),
            lp_supply=checked_sub(self.lp_supply, lp_amount),
        )
        return next_state, paid

    def collect_protocol_fee(self, amount_0_requested: int, amount_1_requested: int) -> Tuple["PoolState", int, int]:
        """Pay out up to the accrued protocol fees; returns (state, amount_0, amount_1)."""
        amount_0 = min(require_u128("amount_0_requested", amount_0_requested), self.protocol_fees_token_0)
        amount_1 = min(require_u128("amount_1_requested", amount_1_requested), self.protocol_fees_token_1)
        next_state = replace(
            self,
            reserve_0=checked_sub(self.reserve_0, amount_0),
            reserve_1=checked_sub(self.reserve_1, amount_1),
            protocol_fees_token_0=checked_sub(self.protocol_fees_token_0, amount_0),
            protocol_fees_token_1=checked_sub(self.protocol_fees_token_1, amount_1),
        )
        return next_state, amount_0, amount_1

    def collect_fund_fee(self, amount_0_requested: int, amount_1_requested: int) -> Tuple["PoolState", int, int]:
        """Pay out up to the accrued fund fees; returns (state, amount_0, amount_1)."""
        amount_0 = min(require_u128("amount_0_requested", amount_0_requested), self.fund_fees_token_0)
        amount_1 = min(require_u128("amount_1_requested", amount_1_requested), self.fund_fees_token_1)
        next_state = replace(
            self,
            reserve_0=checked_sub(self.reserve_0, amount_0),
            reserve_1=checked_sub(self.reserve_1, amount_1),
            fund_fees_token_0=checked_sub(self.fund_fees_token_0, amount_0),
            fund_fees_token_1=checked_sub(self.fund_fees_token_1, amount_1),
        )
        return next_state, amount_0, amount_1


def initialize_pool(amount_0: int, amount_1: int, config: AmmConfig) -> Tuple[PoolState, int]:
    """
    Create a pool from its first deposit.

        liquidity = floor(sqrt(amount_0 * amount_1))
        lp_minted = liquidity - LOCK_LP_AMOUNT

    Returns (PoolState, lp_minted). The locked shares stay in `lp_supply`.
    """
    if config.disable_create_pool:
        raise NotApproved(f"pool creation disabled for amm config {config.index}")
    calculator.validate_supply(amount_0, amount_1)

    liquidity = math.isqrt(amount_0 * amount_1)
    if liquidity <= LOCK_LP_AMOUNT:
        raise CalculationFailure(
            f"initial liquidity {liquidity} does not exceed locked amount {LOCK_LP_AMOUNT}"
        )
    state = PoolState(reserve_0=amount_0, reserve_1=amount_1, lp_supply=liquidity)
    logger.debug("initialize_pool reserves=(%d, %d) liquidity=%d", amount_0, amount_1, liquidity)
    return state, liquidity - LOCK_LP_AMOUNT
