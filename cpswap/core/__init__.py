"""
Core swap math: fees, the constant-product curve, and the calculator.
"""

from .calculator import (
    check_invariant,
    shares_to_reserves,
    swap_exact_input,
    swap_exact_output,
    validate_supply,
)
from .config import AmmConfig, load_amm_config
from .constant_product import swap_input_without_fees, swap_output_without_fees
from .fees import (
    FEE_RATE_DENOMINATOR_VALUE,
    calculate_pre_fee_amount,
    fund_fee,
    protocol_fee,
    trading_fee,
)
from .types import RoundDirection, SwapResult, TradeDirection, TradingTokenResult

__all__ = [
    "check_invariant",
    "shares_to_reserves",
    "swap_exact_input",
    "swap_exact_output",
    "validate_supply",
    "AmmConfig",
    "load_amm_config",
    "swap_input_without_fees",
    "swap_output_without_fees",
    "FEE_RATE_DENOMINATOR_VALUE",
    "calculate_pre_fee_amount",
    "fund_fee",
    "protocol_fee",
    "trading_fee",
    "RoundDirection",
    "SwapResult",
    "TradeDirection",
    "TradingTokenResult",
]
