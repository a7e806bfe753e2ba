"""Rounding-aware fixed-point primitives for the liquidity book.

This module implements the unsigned integer helpers the on-chain program uses
for every pool-affecting computation: multiply-then-divide, multiply-then-shift
and shift-then-divide, each with an explicit rounding direction, plus Q64.64
exponentiation for the bin price ladder.

All inputs and results are unsigned and must fit in u128. Intermediate
products are computed at full width (Python integers) so nothing wraps; a
result that would not fit the on-chain width raises Overflow instead.
"""

from __future__ import annotations

from enum import Enum

from dlmm.constants import MAX_EXPONENTIAL, ONE, SCALE_OFFSET, U128_MAX
from dlmm.errors import DivisionByZero, InvalidParameter, InvalidRoundingMode, Overflow

__all__ = [
    # Types
    "Rounding",
    # Functions
    "div_rem",
    "mul_div",
    "mul_shift_right",
    "shift_left_div",
    "pow_q64",
]


# =============================================================================
# Rounding
# =============================================================================


class Rounding(str, Enum):
    """Rounding direction for integer division.

    UP computes ceil(num / den) = floor((num + den - 1) / den);
    DOWN truncates.
    """

    UP = "up"
    DOWN = "down"


def _rounding(rounding: Rounding | str) -> Rounding:
    """Coerce a rounding argument, rejecting anything but up/down."""
    try:
        return Rounding(rounding)
    except ValueError as err:
        raise InvalidRoundingMode(f"Invalid rounding mode: {rounding!r}") from err


def _check_u128(value: int, name: str) -> int:
    if value < 0:
        raise Overflow(f"{name} cannot be negative: {value}")
    if value > U128_MAX:
        raise Overflow(f"{name} exceeds u128 max: {value}")
    return value


def _check_offset(offset: int) -> int:
    if offset < 0:
        raise InvalidParameter(f"Shift offset cannot be negative: {offset}")
    return offset


# =============================================================================
# Core operations
# =============================================================================


def div_rem(numerator: int, denominator: int) -> tuple[int, int]:
    """Integer division returning (quotient, remainder).

    Args:
        numerator: Non-negative dividend
        denominator: Positive divisor

    Returns:
        Tuple of (numerator // denominator, numerator % denominator)

    Raises:
        DivisionByZero: If denominator is zero
    """
    if denominator == 0:
        raise DivisionByZero(f"Division by zero: {numerator} / 0")
    return divmod(numerator, denominator)


def _div_rounding(numerator: int, denominator: int, rounding: Rounding) -> int:
    quotient, remainder = div_rem(numerator, denominator)
    if rounding is Rounding.UP and remainder > 0:
        quotient += 1
    return quotient


def mul_div(x: int, y: int, denominator: int, rounding: Rounding | str) -> int:
    """Compute x * y / denominator with the given rounding.

    The product is taken at full width, so only the final result is
    bounded to u128.

    Raises:
        DivisionByZero: If denominator is zero
        InvalidRoundingMode: If rounding is not up/down
        Overflow: If an input or the result does not fit in u128
    """
    mode = _rounding(rounding)
    _check_u128(x, "x")
    _check_u128(y, "y")
    if denominator == 0:
        raise DivisionByZero(f"Division by zero: {x} * {y} / 0")
    return _check_u128(_div_rounding(x * y, denominator, mode), "mul_div result")


def mul_shift_right(x: int, y: int, offset: int, rounding: Rounding | str) -> int:
    """Compute (x * y) >> offset with the given rounding.

    Used to multiply an amount by a Q64.64 price (offset = SCALE_OFFSET).

    Raises:
        InvalidParameter: If offset is negative
        InvalidRoundingMode: If rounding is not up/down
        Overflow: If an input or the result does not fit in u128
    """
    mode = _rounding(rounding)
    _check_offset(offset)
    _check_u128(x, "x")
    _check_u128(y, "y")
    product = x * y
    result = product >> offset
    if mode is Rounding.UP and product & ((1 << offset) - 1):
        result += 1
    return _check_u128(result, "mul_shift_right result")


def shift_left_div(x: int, y: int, offset: int, rounding: Rounding | str) -> int:
    """Compute (x << offset) / y with the given rounding.

    Used to divide an amount by a Q64.64 price (offset = SCALE_OFFSET).

    Raises:
        DivisionByZero: If y is zero
        InvalidParameter: If offset is negative
        InvalidRoundingMode: If rounding is not up/down
        Overflow: If an input or the result does not fit in u128
    """
    mode = _rounding(rounding)
    _check_offset(offset)
    _check_u128(x, "x")
    _check_u128(y, "y")
    if y == 0:
        raise DivisionByZero(f"Division by zero: ({x} << {offset}) / 0")
    return _check_u128(_div_rounding(x << offset, y, mode), "shift_left_div result")


def pow_q64(base: int, exp: int) -> int:
    """Raise a Q64.64 number to a signed integer power.

    Binary exponentiation over the inverted base (2^128 / base) keeps every
    squared term below ONE, so each product fits in u128, exactly as the
    on-chain program computes the bin price ladder.

    Args:
        base: Q64.64 base (e.g. ONE + bin_step / 10000)
        exp: Signed exponent, |exp| < 2^19

    Returns:
        base^exp as Q64.64

    Raises:
        Overflow: If |exp| is too large or the result underflows to zero
    """
    _check_u128(base, "base")
    if exp == 0:
        return ONE

    invert = exp < 0
    exp = abs(exp)
    if exp >= MAX_EXPONENTIAL:
        raise Overflow(f"Exponent out of range: {exp} >= {MAX_EXPONENTIAL}")

    squared_base = base
    result = ONE
    if squared_base >= result:
        squared_base = U128_MAX // squared_base
        invert = not invert

    bit = 1
    while bit < MAX_EXPONENTIAL:
        if exp & bit:
            result = _check_u128(result * squared_base, "pow_q64 product") >> SCALE_OFFSET
        squared_base = _check_u128(squared_base * squared_base, "pow_q64 square") >> SCALE_OFFSET
        bit <<= 1

    if result == 0:
        raise Overflow(f"pow_q64 underflowed to zero for exponent {exp}")

    if invert:
        result = U128_MAX // result

    return _check_u128(result, "pow_q64 result")
