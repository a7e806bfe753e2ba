"""Human-readable fee summary for a pair."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from dlmm.constants import PRECISION
from dlmm.fees.calculator import get_base_fee, get_protocol_fee, get_variable_fee
from dlmm.pair import PairState


@dataclass(frozen=True)
class FeeMetadata:
    """Fees of a pair as percentages (e.g. Decimal("0.5") for 0.5%).

    Attributes:
        base_fee: Static base fee
        dynamic_fee: Larger of the base fee and the stored variable fee
        protocol_fee: Protocol's cut of the dynamic fee
    """

    base_fee: Decimal
    dynamic_fee: Decimal
    protocol_fee: Decimal


def _to_percent(fee: int) -> Decimal:
    return Decimal(fee) * 100 / PRECISION


def get_fee_metadata(pair: PairState) -> FeeMetadata:
    """Summarize a pair's fees from its stored (not simulated) volatility."""
    params = pair.static_fee_parameters
    base_fee = get_base_fee(pair.bin_step, params.base_factor)
    variable_fee = get_variable_fee(
        pair.dynamic_fee_parameters.volatility_accumulator,
        pair.bin_step,
        params.variable_fee_control,
    )
    dynamic_fee = max(base_fee, variable_fee)
    protocol_fee = get_protocol_fee(dynamic_fee, params.protocol_share)

    return FeeMetadata(
        base_fee=_to_percent(base_fee),
        dynamic_fee=_to_percent(dynamic_fee),
        protocol_fee=_to_percent(protocol_fee),
    )


__all__ = ["FeeMetadata", "get_fee_metadata"]
