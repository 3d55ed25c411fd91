"""Value records shared by the curve, the calculator and pool transitions.

All records are frozen dataclasses built fresh on each call. Amount fields are
non-negative ints in the u128 domain.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique


@unique
class TradeDirection(Enum):
    """Which reserve receives the input token."""

    ZERO_FOR_ONE = "zero_for_one"
    ONE_FOR_ZERO = "one_for_zero"

    def opposite(self) -> "TradeDirection":
        if self is TradeDirection.ZERO_FOR_ONE:
            return TradeDirection.ONE_FOR_ZERO
        return TradeDirection.ZERO_FOR_ONE


@unique
class RoundDirection(Enum):
    """Rounding policy for share-to-reserve conversion.

    FLOOR: 1.9 => 1, 1.1 => 1 (withdrawals).
    CEILING: 1.9 => 2, 1.1 => 2 (deposits).
    """

    FLOOR = "floor"
    CEILING = "ceiling"


def _require_non_negative(obj: object) -> None:
    for name, v in vars(obj).items():
        if not isinstance(v, int) or isinstance(v, bool):
            raise TypeError(f"{name} must be an int")
        if v < 0:
            raise ValueError(f"{name} must be non-negative: {v}")


@dataclass(frozen=True)
class SwapResult:
    new_reserve_in: int
    new_reserve_out: int
    # Input amount including the trade fee.
    gross_input_amount: int
    output_amount: int
    trade_fee: int
    protocol_fee: int
    fund_fee: int

    def __post_init__(self) -> None:
        _require_non_negative(self)


@dataclass(frozen=True)
class TradingTokenResult:
    reserve_0_amount: int
    reserve_1_amount: int

    def __post_init__(self) -> None:
        _require_non_negative(self)
