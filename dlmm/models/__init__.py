"""Pydantic models for DLMM snapshots and API payloads."""

from dlmm.models.quote import (
    PriceFromIdRequest,
    PriceFromIdResponse,
    PriceToIdRequest,
    PriceToIdResponse,
    QuoteRequest,
    QuoteResponse,
)
from dlmm.models.snapshot import (
    BinArrayModel,
    BinModel,
    DynamicFeeParametersModel,
    PairSnapshot,
    PairStateModel,
    StaticFeeParametersModel,
)
from dlmm.models.types import U64, U128, PairId

__all__ = [
    # Types
    "U64",
    "U128",
    "PairId",
    # Snapshot models
    "PairSnapshot",
    "PairStateModel",
    "StaticFeeParametersModel",
    "DynamicFeeParametersModel",
    "BinArrayModel",
    "BinModel",
    # API models
    "QuoteRequest",
    "QuoteResponse",
    "PriceFromIdRequest",
    "PriceFromIdResponse",
    "PriceToIdRequest",
    "PriceToIdResponse",
]
