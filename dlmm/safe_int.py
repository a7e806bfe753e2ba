"""Checked integer wrapper for pool amounts and fees.

Python integers never wrap, but the on-chain program keeps token amounts in
u64 and fee/price intermediates in u128, and aborts when a value leaves those
ranges. SafeInt makes the off-chain arithmetic fail at the same points:
- Division by zero raises DivisionByZero
- Subtraction below zero raises Underflow
- Unwrapping a value outside u64/u128 raises Overflow

Usage pattern:
    from dlmm.safe_int import S

    def fee_amount(amount: int, fee: int) -> int:
        # Amounts owed to the pool round up
        return (S(amount) * S(fee)).ceiling_div(PRECISION).to_u128()
"""

from __future__ import annotations

from dlmm.constants import U64_MAX, U128_MAX
from dlmm.errors import DivisionByZero, Overflow, Underflow

WIDTHS = {"u64": U64_MAX, "u128": U128_MAX}


def _raw(operand: SafeInt | int) -> int:
    return operand._value if isinstance(operand, SafeInt) else operand


def _nonzero_divisor(dividend: int, divisor: SafeInt | int, op: str) -> int:
    value = _raw(divisor)
    if value == 0:
        raise DivisionByZero(f"Division by zero: {dividend} {op} 0")
    return value


class SafeInt:
    """Integer whose subtraction and division are checked.

    Products and sums are exact (Python ints); width is enforced only when the
    result leaves the wrapper through to_u64() / to_u128(), mirroring where the
    on-chain program casts.
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            value = value._value
        if type(value) is not int:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")
        self._value = value

    @property
    def value(self) -> int:
        """The wrapped integer, unchecked."""
        return self._value

    def __repr__(self) -> str:
        return f"S({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    __index__ = __int__

    def __bool__(self) -> bool:
        return self._value != 0

    # Arithmetic

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _raw(other))

    __radd__ = __add__

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _raw(other))

    __rmul__ = __mul__

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract, refusing to go below zero.

        Raises:
            Underflow: If other is larger than self
        """
        return _checked_difference(self._value, _raw(other))

    def __rsub__(self, other: int) -> SafeInt:
        return _checked_difference(other, self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Division rounding down (amounts paid out by the pool)."""
        return SafeInt(self._value // _nonzero_divisor(self._value, other, "//"))

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Division rounding up (amounts owed to the pool).

        Raises:
            DivisionByZero: If other is zero
        """
        divisor = _nonzero_divisor(self._value, other, "ceil/")
        return SafeInt(-(-self._value // divisor))

    # Comparison

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (SafeInt, int)):
            return self._value == _raw(other)
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _raw(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _raw(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _raw(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _raw(other)

    # Width-checked exits

    def fits(self, width: str) -> bool:
        """Whether the value is representable as `width` ("u64" or "u128")."""
        return 0 <= self._value <= WIDTHS[width]

    def to_u64(self) -> int:
        """Unwrap as a token amount.

        Raises:
            Overflow: If the value is negative or exceeds 2^64-1
        """
        return self._unwrap("u64")

    def to_u128(self) -> int:
        """Unwrap as a fee, price or intermediate product.

        Raises:
            Overflow: If the value is negative or exceeds 2^128-1
        """
        return self._unwrap("u128")

    def _unwrap(self, width: str) -> int:
        if self._value < 0:
            raise Overflow(f"Negative value cannot be {width}: {self._value}")
        if self._value > WIDTHS[width]:
            raise Overflow(f"Value exceeds {width} max: {self._value}")
        return self._value


def _checked_difference(minuend: int, subtrahend: int) -> SafeInt:
    if subtrahend > minuend:
        raise Underflow(f"Underflow: {minuend} - {subtrahend} = {minuend - subtrahend}")
    return SafeInt(minuend - subtrahend)


S = SafeInt
