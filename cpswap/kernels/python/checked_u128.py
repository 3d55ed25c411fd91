"""
Checked unsigned 128-bit arithmetic.

Python ints never overflow, so the u128 domain is enforced explicitly: every
operation rejects results above `U128_MAX`, below zero, or a zero divisor by
raising `CalculationFailure`. Results therefore match a fixed-width u128
implementation bit-for-bit, including where it fails.
"""

from __future__ import annotations

from ...errors import CalculationFailure


U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1


def require_u128(name: str, value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if not (0 <= value <= U128_MAX):
        raise CalculationFailure(f"{name} outside u128 range: {value}")
    return value


def require_u64(name: str, value: int) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if not (0 <= value <= U64_MAX):
        raise CalculationFailure(f"{name} outside u64 range: {value}")
    return value


def checked_add(a: int, b: int) -> int:
    out = a + b
    if out > U128_MAX:
        raise CalculationFailure(f"add overflow: {a} + {b}")
    return out


def checked_sub(a: int, b: int) -> int:
    if b > a:
        raise CalculationFailure(f"sub underflow: {a} - {b}")
    return a - b


def checked_mul(a: int, b: int) -> int:
    out = a * b
    if out > U128_MAX:
        raise CalculationFailure(f"mul overflow: {a} * {b}")
    return out


def checked_div(a: int, b: int) -> int:
    if b == 0:
        raise CalculationFailure(f"division by zero: {a} / 0")
    return a // b


def checked_rem(a: int, b: int) -> int:
    if b == 0:
        raise CalculationFailure(f"remainder by zero: {a} % 0")
    return a % b


def checked_ceil_div(a: int, b: int) -> int:
    """
    `ceil(a / b)` without the `a + b - 1` intermediate.

    Used where the numerator may already sit near `U128_MAX`.
    """
    quotient = checked_div(a, b)
    if checked_rem(a, b) > 0:
        quotient = checked_add(quotient, 1)
    return quotient
