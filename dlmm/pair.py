"""Pair state snapshot for a liquidity book pool."""

from __future__ import annotations

from dataclasses import dataclass, field

from dlmm.constants import ACTIVE_ID, BASIS_POINT_MAX
from dlmm.errors import InvalidParameter
from dlmm.price import bin_array_index


@dataclass(frozen=True)
class StaticFeeParameters:
    """Fee parameters fixed at pair creation.

    Attributes:
        base_factor: Multiplier for the base fee (base fee = bin_step * base_factor * 10)
        protocol_share: Protocol's share of collected fees in basis points
        variable_fee_control: Scale of the volatility-driven fee (0 disables it)
        reduction_factor: Basis points of the accumulator kept as the new reference
        max_volatility_accumulator: Cap on the volatility accumulator
        filter_period: Seconds within which trades do not move the reference id
        decay_period: Seconds after which the volatility reference resets to zero
    """

    base_factor: int
    protocol_share: int = 0
    variable_fee_control: int = 0
    reduction_factor: int = 0
    max_volatility_accumulator: int = 0
    filter_period: int = 0
    decay_period: int = 0

    def __post_init__(self) -> None:
        for name in (
            "base_factor",
            "protocol_share",
            "variable_fee_control",
            "reduction_factor",
            "max_volatility_accumulator",
            "filter_period",
            "decay_period",
        ):
            if getattr(self, name) < 0:
                raise InvalidParameter(f"{name} cannot be negative: {getattr(self, name)}")
        if self.protocol_share > BASIS_POINT_MAX:
            raise InvalidParameter(
                f"protocol_share must be <= {BASIS_POINT_MAX} bps, got {self.protocol_share}"
            )
        if self.reduction_factor > BASIS_POINT_MAX:
            raise InvalidParameter(
                f"reduction_factor must be <= {BASIS_POINT_MAX} bps, got {self.reduction_factor}"
            )


@dataclass(frozen=True)
class DynamicFeeParameters:
    """Volatility state as last written by the on-chain program."""

    volatility_accumulator: int = 0
    volatility_reference: int = 0
    id_reference: int = ACTIVE_ID
    time_last_updated: int = 0


@dataclass(frozen=True)
class PairState:
    """Read-only snapshot of a pair's pricing and fee parameters.

    The quoter never writes changes back; volatility updates during a
    simulation live on a per-call VolatilityTracker.
    """

    bin_step: int
    active_id: int
    static_fee_parameters: StaticFeeParameters
    dynamic_fee_parameters: DynamicFeeParameters = field(default_factory=DynamicFeeParameters)

    def __post_init__(self) -> None:
        if not 0 <= self.bin_step <= BASIS_POINT_MAX:
            raise InvalidParameter(f"Bin step invalid: {self.bin_step}")

    @property
    def active_bin_array_index(self) -> int:
        """Index of the bin array holding the active bin."""
        return bin_array_index(self.active_id)


__all__ = ["StaticFeeParameters", "DynamicFeeParameters", "PairState"]
