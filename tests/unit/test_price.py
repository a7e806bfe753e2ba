"""Tests for bin id <-> price conversion."""

from decimal import Decimal

import pytest

from dlmm.constants import ACTIVE_ID, MAX_BIN_ID, ONE
from dlmm.errors import InvalidParameter
from dlmm.price import (
    bin_array_index,
    bin_array_indices,
    get_price_q64,
    id_from_price,
    price_from_id,
)


class TestPriceFromId:
    """Tests for price_from_id."""

    def test_active_id_is_one(self):
        """ACTIVE_ID prices at exactly 1 with equal decimals."""
        assert price_from_id(25, ACTIVE_ID, 6, 6) == 1

    def test_one_bin_up(self):
        """One bin above ACTIVE_ID is 1 + bin_step / 10000."""
        assert price_from_id(100, ACTIVE_ID + 1, 6, 6) == Decimal("1.01")
        assert price_from_id(25, ACTIVE_ID + 1, 9, 9) == Decimal("1.0025")

    def test_one_bin_down(self):
        """One bin below ACTIVE_ID is the reciprocal."""
        price = price_from_id(100, ACTIVE_ID - 1, 6, 6)
        assert abs(price * Decimal("1.01") - 1) < Decimal("1e-40")

    def test_decimal_adjustment(self):
        """Base decimals above quote decimals scale the price up."""
        assert price_from_id(25, ACTIVE_ID, 9, 6) == 1000
        assert price_from_id(25, ACTIVE_ID, 6, 9) == Decimal("0.001")

    def test_zero_bin_step_is_flat(self):
        """bin_step=0 prices every bin at 1."""
        assert price_from_id(0, ACTIVE_ID + 500, 6, 6) == 1

    @pytest.mark.parametrize("bin_step", [-1, 10_001])
    def test_invalid_bin_step_raises(self, bin_step):
        """bin_step outside [0, 10000] is rejected."""
        with pytest.raises(InvalidParameter):
            price_from_id(bin_step, ACTIVE_ID, 6, 6)

    @pytest.mark.parametrize(
        ("bin_step", "bin_id"),
        [(100, ACTIVE_ID + 10**9), (10_000, MAX_BIN_ID), (10_000, 0)],
    )
    def test_price_outside_decimal_range_raises(self, bin_step, bin_id):
        """Ladder prices too large or too small for Decimal are rejected."""
        with pytest.raises(InvalidParameter) as exc_info:
            price_from_id(bin_step, bin_id, 6, 6)
        assert isinstance(exc_info.value.__cause__, ArithmeticError)

    def test_small_bin_step_spans_full_id_range(self):
        """At 1 bps the highest bin id still has a finite price."""
        assert price_from_id(1, MAX_BIN_ID, 6, 6) > 10**300


class TestIdFromPrice:
    """Tests for id_from_price."""

    def test_price_one_is_active_id(self):
        """A price of 1.0 maps exactly to ACTIVE_ID."""
        assert id_from_price(1.0, 25, 6, 6) == ACTIVE_ID
        assert id_from_price("1", 100, 9, 9) == ACTIVE_ID

    def test_decimal_adjusted_price(self):
        """1000 quote per base with 9/6 decimals is price 1 on the ladder."""
        assert id_from_price(1000, 25, 9, 6) == ACTIVE_ID

    def test_rounds_to_nearest_bin(self):
        """A price just off a bin snaps to it."""
        assert id_from_price(Decimal("1.0101"), 100, 6, 6) == ACTIVE_ID + 1
        assert id_from_price(Decimal("0.9901"), 100, 6, 6) == ACTIVE_ID - 1

    @pytest.mark.parametrize("price", [0, -1, "0", Decimal("-0.5")])
    def test_non_positive_price_raises(self, price):
        """Price must be strictly positive."""
        with pytest.raises(InvalidParameter):
            id_from_price(price, 25, 6, 6)

    def test_non_numeric_price_raises(self):
        """Garbage input is an InvalidParameter, not a decimal error."""
        with pytest.raises(InvalidParameter):
            id_from_price("abc", 25, 6, 6)

    def test_price_outside_decimal_range_raises(self):
        """A price beyond the Decimal exponent range is an InvalidParameter."""
        with pytest.raises(InvalidParameter):
            id_from_price("1e1000000", 25, 6, 6)

    @pytest.mark.parametrize("bin_step", [0, -5, 10_001])
    def test_invalid_bin_step_raises(self, bin_step):
        """bin_step must be in [1, 10000] to take a logarithm."""
        with pytest.raises(InvalidParameter):
            id_from_price(1, bin_step, 6, 6)


class TestPriceRoundTrip:
    """id_from_price inverts price_from_id."""

    @pytest.mark.parametrize("bin_step", [1, 10, 25, 100])
    @pytest.mark.parametrize("offset", [-1000, -37, -1, 0, 1, 42, 1000])
    @pytest.mark.parametrize("decimals", [(6, 6), (9, 6), (6, 9)])
    def test_round_trip(self, bin_step, offset, decimals):
        """idFromPrice(priceFromId(id)) == id."""
        base_decimals, quote_decimals = decimals
        bin_id = ACTIVE_ID + offset
        price = price_from_id(bin_step, bin_id, base_decimals, quote_decimals)
        assert id_from_price(price, bin_step, base_decimals, quote_decimals) == bin_id

    def test_round_trip_with_custom_precision(self):
        """Lower precision still round-trips near ACTIVE_ID."""
        price = price_from_id(10, ACTIVE_ID + 3, 6, 6, precision=28)
        assert id_from_price(price, 10, 6, 6, precision=28) == ACTIVE_ID + 3


class TestPriceQ64:
    """Tests for the integer Q64.64 bin price."""

    def test_active_id_is_one(self):
        """ACTIVE_ID is exactly ONE for any bin step."""
        assert get_price_q64(ACTIVE_ID, 100) == ONE
        assert get_price_q64(ACTIVE_ID, 1) == ONE

    def test_agrees_with_decimal_price(self):
        """Q64.64 and Decimal prices agree closely."""
        for offset in (-50, -1, 1, 50):
            q64 = Decimal(get_price_q64(ACTIVE_ID + offset, 25)) / ONE
            expected = price_from_id(25, ACTIVE_ID + offset, 6, 6)
            assert abs(q64 - expected) / expected < Decimal("1e-15")

    def test_increases_with_bin_id(self):
        """Higher bins are more expensive."""
        assert get_price_q64(ACTIVE_ID + 1, 10) > get_price_q64(ACTIVE_ID, 10)
        assert get_price_q64(ACTIVE_ID - 1, 10) < get_price_q64(ACTIVE_ID, 10)


class TestBinArrayIndex:
    """Tests for bin array index helpers."""

    @pytest.mark.parametrize(
        ("bin_id", "expected"),
        [(0, 0), (255, 0), (256, 1), (-1, -1), (-256, -1), (-257, -2), (ACTIVE_ID, 32768)],
    )
    def test_floor_division(self, bin_id, expected):
        """Index is floor(bin_id / 256), including negative ids."""
        assert bin_array_index(bin_id) == expected

    def test_window_of_three(self):
        """Default window is previous, current and next."""
        assert bin_array_indices(ACTIVE_ID) == [32767, 32768, 32769]

    def test_window_of_one(self):
        """A window of one is just the active array."""
        assert bin_array_indices(ACTIVE_ID + 300, window=1) == [32769]

    def test_even_window_extends_below(self):
        """An even window returns exactly that many arrays, the extra one below."""
        assert bin_array_indices(ACTIVE_ID, window=2) == [32767, 32768]
        assert len(bin_array_indices(ACTIVE_ID, window=4)) == 4

    def test_invalid_window_raises(self):
        """Window must be positive."""
        with pytest.raises(InvalidParameter):
            bin_array_indices(ACTIVE_ID, window=0)
