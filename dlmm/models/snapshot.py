"""Pydantic models for pair and bin array snapshots.

Snapshots are what an indexer or RPC reader hands the quoter: the pair's
fee parameters and active bin, plus the bin arrays around it. Each model
converts to the immutable domain type with `to_domain()`.

Example:
    {
        "pairId": "pair-usdc-sol",
        "pair": {
            "binStep": 25,
            "activeId": 8388608,
            "staticFeeParameters": {"baseFactor": 10000, "protocolShare": 500},
            "dynamicFeeParameters": {"volatilityAccumulator": 0}
        },
        "binArrays": [
            {"index": 32768, "bins": [{"binId": 8388608, "reserveX": "1000", ...}]}
        ],
        "timestamp": 1700000000
    }
"""

from pydantic import BaseModel, Field

from dlmm.bins import Bin, BinArray
from dlmm.constants import ACTIVE_ID, BASIS_POINT_MAX
from dlmm.models.types import U64, U128, PairId
from dlmm.pair import DynamicFeeParameters, PairState, StaticFeeParameters
from dlmm.service import InMemorySnapshotSource


class StaticFeeParametersModel(BaseModel):
    """Fee parameters fixed at pair creation."""

    base_factor: int = Field(alias="baseFactor", ge=0, le=65535)
    protocol_share: int = Field(default=0, alias="protocolShare", ge=0, le=BASIS_POINT_MAX)
    variable_fee_control: int = Field(default=0, alias="variableFeeControl", ge=0)
    reduction_factor: int = Field(default=0, alias="reductionFactor", ge=0, le=BASIS_POINT_MAX)
    max_volatility_accumulator: int = Field(default=0, alias="maxVolatilityAccumulator", ge=0)
    filter_period: int = Field(default=0, alias="filterPeriod", ge=0)
    decay_period: int = Field(default=0, alias="decayPeriod", ge=0)

    model_config = {"populate_by_name": True}

    def to_domain(self) -> StaticFeeParameters:
        return StaticFeeParameters(
            base_factor=self.base_factor,
            protocol_share=self.protocol_share,
            variable_fee_control=self.variable_fee_control,
            reduction_factor=self.reduction_factor,
            max_volatility_accumulator=self.max_volatility_accumulator,
            filter_period=self.filter_period,
            decay_period=self.decay_period,
        )


class DynamicFeeParametersModel(BaseModel):
    """Volatility state last written on-chain."""

    volatility_accumulator: int = Field(default=0, alias="volatilityAccumulator", ge=0)
    volatility_reference: int = Field(default=0, alias="volatilityReference", ge=0)
    id_reference: int = Field(default=ACTIVE_ID, alias="idReference")
    time_last_updated: int = Field(default=0, alias="timeLastUpdated", ge=0)

    model_config = {"populate_by_name": True}

    def to_domain(self) -> DynamicFeeParameters:
        return DynamicFeeParameters(
            volatility_accumulator=self.volatility_accumulator,
            volatility_reference=self.volatility_reference,
            id_reference=self.id_reference,
            time_last_updated=self.time_last_updated,
        )


class PairStateModel(BaseModel):
    """Pair pricing and fee state."""

    bin_step: int = Field(alias="binStep", ge=0, le=BASIS_POINT_MAX)
    active_id: int = Field(alias="activeId")
    static_fee_parameters: StaticFeeParametersModel = Field(alias="staticFeeParameters")
    dynamic_fee_parameters: DynamicFeeParametersModel = Field(
        default_factory=DynamicFeeParametersModel, alias="dynamicFeeParameters"
    )

    model_config = {"populate_by_name": True}

    def to_domain(self) -> PairState:
        return PairState(
            bin_step=self.bin_step,
            active_id=self.active_id,
            static_fee_parameters=self.static_fee_parameters.to_domain(),
            dynamic_fee_parameters=self.dynamic_fee_parameters.to_domain(),
        )


class BinModel(BaseModel):
    """Liquidity in a single bin."""

    bin_id: int = Field(alias="binId")
    reserve_x: U64 = Field(default="0", alias="reserveX")
    reserve_y: U64 = Field(default="0", alias="reserveY")
    total_supply: U128 = Field(default="0", alias="totalSupply")

    model_config = {"populate_by_name": True}

    def to_domain(self) -> Bin:
        return Bin(
            reserve_x=int(self.reserve_x),
            reserve_y=int(self.reserve_y),
            total_supply=int(self.total_supply),
        )


class BinArrayModel(BaseModel):
    """Bin array with only its non-empty bins listed."""

    index: int
    bins: list[BinModel] = Field(default_factory=list)

    def to_domain(self) -> BinArray:
        """Build the full 256-bin array.

        Raises:
            BinArrayIndexMismatch: If a listed bin does not belong to this array
        """
        return BinArray.from_mapping(
            self.index, {bin_.bin_id: bin_.to_domain() for bin_ in self.bins}
        )


class PairSnapshot(BaseModel):
    """A pair with its surrounding bin arrays at one point in time."""

    pair_id: PairId = Field(alias="pairId")
    pair: PairStateModel
    bin_arrays: list[BinArrayModel] = Field(default_factory=list, alias="binArrays")
    timestamp: int | None = Field(
        default=None,
        ge=0,
        description="Unix time the snapshot was taken. Null skips the volatility reference update.",
    )

    model_config = {"populate_by_name": True}

    def to_source(self) -> InMemorySnapshotSource:
        """Snapshot source serving only this pair."""
        return InMemorySnapshotSource(
            pairs={self.pair_id: self.pair.to_domain()},
            bin_arrays={self.pair_id: [array.to_domain() for array in self.bin_arrays]},
            timestamp=self.timestamp,
        )


__all__ = [
    "StaticFeeParametersModel",
    "DynamicFeeParametersModel",
    "PairStateModel",
    "BinModel",
    "BinArrayModel",
    "PairSnapshot",
]
