"""Two-tier fee model: static base fee plus volatility-driven variable fee.

Fees are expressed in PRECISION units (1e9 = 100%). Rounding always favours
the pool: amounts owed to the pool round up, amounts taken out of it
(the protocol's cut of a fee) round down.

Uses SafeInt so a negative intermediate or a fee at or above 100% fails
loudly instead of producing a nonsensical amount.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dlmm.constants import BASIS_POINT_MAX, PRECISION, VARIABLE_FEE_PRECISION
from dlmm.errors import InvalidParameter
from dlmm.safe_int import S

if TYPE_CHECKING:
    from dlmm.pair import PairState


def get_base_fee(bin_step: int, base_factor: int) -> int:
    """Static fee: bin_step * base_factor * 10.

    Example: bin_step=100, base_factor=5000 gives 5_000_000 (0.5%).
    """
    return (S(bin_step) * S(base_factor) * S(10)).to_u128()


def get_variable_fee(volatility_accumulator: int, bin_step: int, variable_fee_control: int) -> int:
    """Volatility fee: ceil((volatility_accumulator * bin_step)^2 * control / 1e11).

    Returns 0 when variable_fee_control is 0.
    """
    if variable_fee_control <= 0:
        return 0
    prod = S(volatility_accumulator) * S(bin_step)
    return (prod * prod * S(variable_fee_control)).ceiling_div(VARIABLE_FEE_PRECISION).to_u128()


def get_total_fee(pair: PairState, volatility_accumulator: int) -> int:
    """Base fee plus variable fee for a pair at the given volatility."""
    params = pair.static_fee_parameters
    base_fee = get_base_fee(pair.bin_step, params.base_factor)
    variable_fee = get_variable_fee(
        volatility_accumulator, pair.bin_step, params.variable_fee_control
    )
    return base_fee + variable_fee


def get_fee_amount(amount: int, fee: int) -> int:
    """Fee taken out of a gross amount: ceil(amount * fee / PRECISION)."""
    return (S(amount) * S(fee)).ceiling_div(PRECISION).to_u128()


def get_fee_for_amount(amount: int, fee: int) -> int:
    """Fee to add on top of a net amount: ceil(amount * fee / (PRECISION - fee)).

    Used when solving for the gross input that nets `amount` after fees.

    Raises:
        InvalidParameter: If fee >= PRECISION (100% or more)
    """
    if fee >= PRECISION:
        raise InvalidParameter(f"Fee must be below {PRECISION}, got {fee}")
    denominator = S(PRECISION) - S(fee)
    return (S(amount) * S(fee)).ceiling_div(denominator).to_u128()


def get_protocol_fee(fee: int, protocol_share: int) -> int:
    """Protocol's share of a fee amount: floor(fee * protocol_share / 10000)."""
    return (S(fee) * S(protocol_share) // BASIS_POINT_MAX).to_u128()


__all__ = [
    "get_base_fee",
    "get_variable_fee",
    "get_total_fee",
    "get_fee_amount",
    "get_fee_for_amount",
    "get_protocol_fee",
]
