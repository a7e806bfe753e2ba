"""Tests for SafeInt checked arithmetic wrapper."""

import pytest

from dlmm.constants import U64_MAX, U128_MAX
from dlmm.errors import DivisionByZero, DLMMMathError, Overflow, Underflow
from dlmm.safe_int import S, SafeInt


class TestSafeIntConstruction:
    """Tests for SafeInt construction."""

    def test_from_int(self):
        """SafeInt can be constructed from int."""
        assert SafeInt(42).value == 42

    def test_from_safeint(self):
        """SafeInt can be constructed from another SafeInt."""
        assert SafeInt(SafeInt(42)).value == 42

    def test_rejects_bool(self):
        """Booleans are not amounts."""
        with pytest.raises(TypeError):
            SafeInt(True)  # type: ignore[arg-type]

    def test_rejects_str_and_float(self):
        """SafeInt rejects non-integer types."""
        with pytest.raises(TypeError):
            SafeInt("42")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            SafeInt(3.14)  # type: ignore[arg-type]

    def test_alias_s(self):
        """S is an alias for SafeInt."""
        assert S is SafeInt


class TestSafeIntArithmetic:
    """Tests for SafeInt arithmetic operations."""

    def test_add(self):
        """Addition works with SafeInt and int on either side."""
        assert (S(10) + S(5)).value == 15
        assert (S(10) + 5).value == 15
        assert (5 + S(10)).value == 15

    def test_sub(self):
        """Subtraction with non-negative result works."""
        assert (S(10) - S(3)).value == 7
        assert (10 - S(3)).value == 7
        assert (S(5) - 5).value == 0

    def test_sub_underflow_raises(self):
        """Subtraction below zero raises Underflow."""
        with pytest.raises(Underflow) as exc_info:
            S(5) - S(10)
        assert "5 - 10" in str(exc_info.value)

    def test_rsub_underflow_raises(self):
        """Reverse subtraction below zero raises Underflow."""
        with pytest.raises(Underflow):
            5 - S(10)

    def test_mul_large(self):
        """Multiplication never wraps."""
        assert (S(U128_MAX) * S(U128_MAX)).value == U128_MAX * U128_MAX

    def test_floordiv(self):
        """Floor division rounds down."""
        assert (S(10) // S(3)).value == 3
        assert (S(10) // 3).value == 3

    def test_floordiv_by_zero_raises(self):
        """Division by zero raises DivisionByZero."""
        with pytest.raises(DivisionByZero):
            S(10) // S(0)

    def test_division_by_zero_message(self):
        """The dividend is named in the error."""
        with pytest.raises(DivisionByZero) as exc_info:
            S(10) // 0
        assert "10 // 0" in str(exc_info.value)


class TestSafeIntComparison:
    """Tests for SafeInt comparison operations."""

    def test_eq(self):
        """Equality with SafeInt and int."""
        assert S(5) == S(5)
        assert S(5) == 5
        assert S(5) != 6

    def test_ordering(self):
        """Ordering comparisons accept ints."""
        assert S(5) < 6
        assert S(5) <= S(5)
        assert S(6) > 5
        assert S(6) >= S(6)

    def test_hash_and_index(self):
        """SafeInt is hashable and usable as an index."""
        assert {S(42): "v"}[S(42)] == "v"
        assert [0, 1, 2][S(2)] == 2

    def test_bool(self):
        """bool() is False only for zero."""
        assert bool(S(0)) is False
        assert bool(S(1)) is True


class TestSafeIntNamedOps:
    """Tests for SafeInt named operations."""

    def test_ceiling_div(self):
        """Ceiling division rounds up."""
        assert S(10).ceiling_div(3).value == 4
        assert S(9).ceiling_div(3).value == 3
        assert S(0).ceiling_div(7).value == 0

    def test_ceiling_div_by_zero_raises(self):
        """Ceiling division by zero raises."""
        with pytest.raises(DivisionByZero):
            S(10).ceiling_div(0)

    def test_ceiling_div_matches_fee_rounding(self):
        """A fee of 0.5% on 1 unit still charges 1."""
        assert (S(1) * 5_000_000).ceiling_div(10**9).value == 1


class TestSafeIntWidths:
    """Tests for u64/u128 conversion."""

    def test_to_u64_bounds(self):
        """to_u64 accepts [0, 2^64-1]."""
        assert S(0).to_u64() == 0
        assert S(U64_MAX).to_u64() == U64_MAX
        with pytest.raises(Overflow):
            S(U64_MAX + 1).to_u64()

    def test_to_u128_bounds(self):
        """to_u128 accepts [0, 2^128-1]."""
        assert S(U128_MAX).to_u128() == U128_MAX
        with pytest.raises(Overflow):
            S(U128_MAX + 1).to_u128()

    def test_negative_is_overflow(self):
        """A negative value cannot be converted."""
        with pytest.raises(Overflow) as exc_info:
            S(-1).to_u128()
        assert "Negative" in str(exc_info.value)

    def test_fits(self):
        """fits() checks a width without raising."""
        assert S(U128_MAX).fits("u128") is True
        assert S(U128_MAX).fits("u64") is False
        assert S(U128_MAX + 1).fits("u128") is False
        assert S(-1).fits("u64") is False


class TestSafeIntExceptionHierarchy:
    """Tests for exception class hierarchy."""

    @pytest.mark.parametrize("error", [DivisionByZero, Underflow, Overflow])
    def test_math_errors_share_base(self, error):
        """All SafeInt errors are DLMMMathError and ArithmeticError."""
        assert issubclass(error, DLMMMathError)
        assert issubclass(error, ArithmeticError)
