"""Bin id <-> price conversion.

Prices form a geometric ladder: every bin is `1 + bin_step / 10000` times the
price of the bin below it, with ACTIVE_ID pinned at 1.0 before decimal
adjustment.

Two representations are provided:
- Decimal prices (price_from_id / id_from_price) for display and for turning
  a human price into a bin id. The Decimal context precision is fixed per call,
  so results are identical on every platform.
- Q64.64 integer prices (get_price_q64) matching the on-chain program. Swap
  simulation only ever uses these.
"""

from __future__ import annotations

from decimal import (
    ROUND_HALF_UP,
    Decimal,
    DecimalException,
    InvalidOperation,
    Underflow as DecimalUnderflow,
    localcontext,
)

from dlmm.config import DEFAULT_QUOTER_CONFIG
from dlmm.constants import (
    ACTIVE_ID,
    BASIS_POINT_MAX,
    BIN_ARRAY_SIZE,
    MAX_BIN_STEP,
    MIN_BIN_STEP,
    ONE,
    SCALE_OFFSET,
)
from dlmm.errors import InvalidParameter
from dlmm.math.fixed_point import pow_q64

__all__ = [
    "price_from_id",
    "id_from_price",
    "get_price_q64",
    "bin_array_index",
    "bin_array_indices",
]


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a caller price to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() gives the shortest repr, so 0.1 becomes Decimal("0.1")
        return Decimal(str(value))
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as err:
        raise InvalidParameter(f"Price is not a number: {value!r}") from err


def _validate_bin_step(bin_step: int, *, allow_zero: bool) -> None:
    lower = 0 if allow_zero else MIN_BIN_STEP
    if not lower <= bin_step <= MAX_BIN_STEP:
        raise InvalidParameter(
            f"Bin step invalid: {bin_step} (expected {lower} <= bin_step <= {MAX_BIN_STEP})"
        )


def price_from_id(
    bin_step: int,
    bin_id: int,
    base_decimals: int,
    quote_decimals: int,
    *,
    precision: int | None = None,
) -> Decimal:
    """Price of a bin in quote units per base unit.

    Formula:
        price = (1 + bin_step / 10000)^(bin_id - ACTIVE_ID) * 10^(base_decimals - quote_decimals)

    Args:
        bin_step: Price increment between bins in basis points (0 is a flat ladder)
        bin_id: Bin id (offset from ACTIVE_ID)
        base_decimals: Decimals of the base (X) token
        quote_decimals: Decimals of the quote (Y) token
        precision: Decimal digits to compute with (default from QuoterConfig)

    Returns:
        Price as Decimal

    Raises:
        InvalidParameter: If bin_step is outside [0, 10000], or the price
            leaves the Decimal exponent range
    """
    _validate_bin_step(bin_step, allow_zero=True)
    digits = precision or DEFAULT_QUOTER_CONFIG.price_precision

    with localcontext() as ctx:
        ctx.prec = digits
        ctx.traps[DecimalUnderflow] = True
        base = 1 + Decimal(bin_step) / BASIS_POINT_MAX
        try:
            return base ** (bin_id - ACTIVE_ID) * Decimal(10) ** (base_decimals - quote_decimals)
        except DecimalException as err:
            raise InvalidParameter(
                f"Price of bin {bin_id} at bin step {bin_step} is out of range"
            ) from err


def id_from_price(
    price: Decimal | int | float | str,
    bin_step: int,
    base_decimals: int,
    quote_decimals: int,
    *,
    precision: int | None = None,
) -> int:
    """Bin id whose price is closest to `price` on a logarithmic scale.

    Formula:
        id = round(ln(price * 10^(quote_decimals - base_decimals)) / ln(1 + bin_step / 10000)) + ACTIVE_ID

    Args:
        price: Quote units per base unit, must be positive
        bin_step: Price increment between bins in basis points (1..10000)
        base_decimals: Decimals of the base (X) token
        quote_decimals: Decimals of the quote (Y) token
        precision: Decimal digits to compute with (default from QuoterConfig)

    Returns:
        Bin id (rounded half up)

    Raises:
        InvalidParameter: If price <= 0 or bin_step is outside (0, 10000], or the price
            leaves the Decimal exponent range
    """
    value = _to_decimal(price)
    if not value.is_finite() or value <= 0:
        raise InvalidParameter(f"Price must be greater than 0, got {price}")
    _validate_bin_step(bin_step, allow_zero=False)
    digits = precision or DEFAULT_QUOTER_CONFIG.price_precision

    with localcontext() as ctx:
        ctx.prec = digits
        base = 1 + Decimal(bin_step) / BASIS_POINT_MAX
        try:
            adjusted = value.scaleb(quote_decimals - base_decimals)
            exponent = adjusted.ln() / base.ln()
            return int(exponent.to_integral_value(rounding=ROUND_HALF_UP)) + ACTIVE_ID
        except (DecimalException, OverflowError) as err:
            raise InvalidParameter(f"Price out of range: {price}") from err


def get_price_q64(bin_id: int, bin_step: int) -> int:
    """Q64.64 price of a bin as computed on-chain.

    price = (ONE + (bin_step << 64) / 10000)^(bin_id - ACTIVE_ID)

    Raises:
        Overflow: If the bin is too far from ACTIVE_ID for the ladder
    """
    base = ONE + (bin_step << SCALE_OFFSET) // BASIS_POINT_MAX
    return pow_q64(base, bin_id - ACTIVE_ID)


def bin_array_index(bin_id: int) -> int:
    """Index of the bin array holding `bin_id` (floor division by 256)."""
    return bin_id // BIN_ARRAY_SIZE


def bin_array_indices(active_id: int, window: int = 3) -> list[int]:
    """`window` consecutive bin array indices around the array holding `active_id`.

    `window` is the number of arrays returned, not a radius, so it maps
    directly onto the 1-3 arrays a BinArrayRange holds. A window of 3 gives
    [i - 1, i, i + 1] and a window of 1 gives [i]. An even window cannot be
    centred and takes the extra array from below: a window of 2 gives [i - 1, i].
    """
    if window <= 0:
        raise InvalidParameter(f"Window must be positive, got {window}")
    center = bin_array_index(active_id)
    start = center - window // 2
    return list(range(start, start + window))
