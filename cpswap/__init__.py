"""`cpswap`: integer-only constant-product swap math.

Public API:
- `swap_exact_input(...) -> SwapResult`
- `swap_exact_output(...) -> SwapResult`
- `shares_to_reserves(...) -> TradingTokenResult`
- `validate_supply(reserve_0, reserve_1)`
- `PoolState` / `initialize_pool` for pool-level bookkeeping

Calculation, pool and config failures are `CurveError` subclasses carrying an
`ErrorCode`. Malformed records (negative or non-int fields) raise plain
`TypeError`/`ValueError` from `__post_init__`.
"""

from .core import (
    FEE_RATE_DENOMINATOR_VALUE,
    AmmConfig,
    RoundDirection,
    SwapResult,
    TradeDirection,
    TradingTokenResult,
    load_amm_config,
    shares_to_reserves,
    swap_exact_input,
    swap_exact_output,
    validate_supply,
)
from .errors import (
    CalculationFailure,
    CurveError,
    EmptySupply,
    ErrorCode,
    ExceededSlippage,
    InvalidFeeRate,
    NotApproved,
    ZeroTradingTokens,
)
from .state import LOCK_LP_AMOUNT, PoolState, initialize_pool

__version__ = "0.1.0"

__all__ = [
    "FEE_RATE_DENOMINATOR_VALUE",
    "AmmConfig",
    "RoundDirection",
    "SwapResult",
    "TradeDirection",
    "TradingTokenResult",
    "load_amm_config",
    "shares_to_reserves",
    "swap_exact_input",
    "swap_exact_output",
    "validate_supply",
    "CalculationFailure",
    "CurveError",
    "EmptySupply",
    "ErrorCode",
    "ExceededSlippage",
    "InvalidFeeRate",
    "NotApproved",
    "ZeroTradingTokens",
    "LOCK_LP_AMOUNT",
    "PoolState",
    "initialize_pool",
]
