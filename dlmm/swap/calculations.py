"""Amount conversion at a bin price, slippage bounds and price impact.

Prices are Q64.64 and quote Y per X:
- swap_for_y (selling X for Y): amount_out = amount_in * price
- otherwise (selling Y for X):  amount_out = amount_in / price
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from dlmm.constants import BASIS_POINT_MAX, PRECISION, SCALE_OFFSET
from dlmm.errors import InvalidSlippage
from dlmm.math.fixed_point import Rounding, mul_div, mul_shift_right, shift_left_div


def get_amount_in_by_price(
    amount_out: int, price: int, swap_for_y: bool, rounding: Rounding | str
) -> int:
    """Input needed at `price` to receive `amount_out` (fees excluded)."""
    if swap_for_y:
        return shift_left_div(amount_out, price, SCALE_OFFSET, rounding)
    return mul_shift_right(amount_out, price, SCALE_OFFSET, rounding)


def get_amount_out_by_price(
    amount_in: int, price: int, swap_for_y: bool, rounding: Rounding | str
) -> int:
    """Output received at `price` for `amount_in` (fees already removed)."""
    if swap_for_y:
        return mul_shift_right(amount_in, price, SCALE_OFFSET, rounding)
    return shift_left_div(amount_in, price, SCALE_OFFSET, rounding)


def slippage_to_precision(slippage: Decimal | int | float | str) -> int:
    """Convert a slippage percent (e.g. 0.5 for 0.5%) to PRECISION units.

    Raises:
        InvalidSlippage: If slippage is not a number in [0, 100)
    """
    try:
        value = Decimal(str(slippage)) if isinstance(slippage, float) else Decimal(slippage)
    except (InvalidOperation, TypeError, ValueError) as err:
        raise InvalidSlippage(f"Slippage is not a number: {slippage!r}") from err

    if not value.is_finite() or value < 0 or value >= 100:
        raise InvalidSlippage(f"Slippage must be in range [0, 100), got {slippage}")

    scaled = int((value * PRECISION / 100).to_integral_value(rounding=ROUND_HALF_UP))
    if scaled >= PRECISION:
        raise InvalidSlippage(f"Slippage {slippage}% rounds to 100%")
    return scaled


def get_min_output_with_slippage(amount_out: int, slippage: Decimal | int | float | str) -> int:
    """Minimum acceptable output for an exact-input swap: floor(out * (1 - s))."""
    slippage_scaled = slippage_to_precision(slippage)
    return mul_div(amount_out, PRECISION - slippage_scaled, PRECISION, Rounding.DOWN)


def get_max_input_with_slippage(amount_in: int, slippage: Decimal | int | float | str) -> int:
    """Maximum acceptable input for an exact-output swap: ceil(in / (1 - s))."""
    slippage_scaled = slippage_to_precision(slippage)
    return mul_div(amount_in, PRECISION, PRECISION - slippage_scaled, Rounding.UP)


def get_price_impact(amount_out: int, best_case_amount_out: int) -> Decimal:
    """Deviation of the realized output from the single-bin output, in percent.

    Computed in hundredths of a basis point, truncating toward zero, so the
    result has at most four decimal places. Returns 0 when there is no
    reference output.
    """
    if best_case_amount_out == 0:
        return Decimal(0)

    numerator = (amount_out - best_case_amount_out) * BASIS_POINT_MAX * 100
    impact = abs(numerator) // best_case_amount_out
    if numerator < 0:
        impact = -impact
    return Decimal(impact) / BASIS_POINT_MAX


__all__ = [
    "get_amount_in_by_price",
    "get_amount_out_by_price",
    "slippage_to_precision",
    "get_min_output_with_slippage",
    "get_max_input_with_slippage",
    "get_price_impact",
]
