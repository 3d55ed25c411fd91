"""Exception types for the swap curve and pool transitions.

Every failure carries an ``ErrorCode`` so callers that abort an enclosing
transaction can report a stable reason without parsing messages.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class ErrorCode(Enum):
    CALCULATION_FAILURE = "CalculationFailure"
    EMPTY_SUPPLY = "EmptySupply"
    INVALID_FEE_RATE = "InvalidFeeRate"
    EXCEEDED_SLIPPAGE = "ExceededSlippage"
    ZERO_TRADING_TOKENS = "ZeroTradingTokens"
    NOT_APPROVED = "NotApproved"


class CurveError(Exception):
    """Base class for all typed failures raised by this package."""

    code: ErrorCode = ErrorCode.CALCULATION_FAILURE

    def __init__(self, message: str = "") -> None:
        self.message = message or self.code.value
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class CalculationFailure(CurveError):
    """A checked arithmetic step overflowed, underflowed or divided by zero."""

    code = ErrorCode.CALCULATION_FAILURE


class EmptySupply(CurveError):
    """A reserve was zero when a pool was being created."""

    code = ErrorCode.EMPTY_SUPPLY


class InvalidFeeRate(CurveError, ValueError):
    """A fee configuration value is outside its allowed range."""

    code = ErrorCode.INVALID_FEE_RATE


class ExceededSlippage(CurveError):
    """A computed amount crossed the caller's slippage bound."""

    code = ErrorCode.EXCEEDED_SLIPPAGE


class ZeroTradingTokens(CurveError):
    """A share conversion produced zero of one of the reserve tokens."""

    code = ErrorCode.ZERO_TRADING_TOKENS


class NotApproved(CurveError):
    """Pool creation is disabled by the active configuration."""

    code = ErrorCode.NOT_APPROVED
