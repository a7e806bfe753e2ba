"""Request and response models for the quote and price endpoints."""

from decimal import Decimal

from pydantic import BaseModel, Field

from dlmm.constants import BASIS_POINT_MAX, MAX_BIN_ID, MIN_BIN_ID
from dlmm.models.snapshot import PairSnapshot
from dlmm.models.types import U64, U128
from dlmm.swap.quote import Quote

# Token decimals are a u8 on-chain
MAX_TOKEN_DECIMALS = 255


class QuoteRequest(BaseModel):
    """Swap to quote against the pair snapshot sent with the request."""

    snapshot: PairSnapshot
    amount: U64 = Field(
        description="Input amount for exact-input swaps, desired output for exact-output swaps.",
    )
    swap_for_y: bool = Field(alias="swapForY", description="True to sell X for Y.")
    is_exact_input: bool = Field(default=True, alias="isExactInput")
    slippage: Decimal = Field(
        default=Decimal("0.5"),
        description="Tolerated slippage in percent, in [0, 100).",
    )
    model_config = {"populate_by_name": True}

    @property
    def amount_int(self) -> int:
        """Amount as integer for calculations."""
        return int(self.amount)


class QuoteResponse(BaseModel):
    """Quote with the limits to submit on-chain."""

    amount_in: U128 = Field(alias="amountIn")
    amount_out: U128 = Field(alias="amountOut")
    amount: U128
    other_amount_offset: U128 = Field(
        alias="otherAmountOffset",
        description="Minimum output (exact-input) or maximum input (exact-output).",
    )
    price_impact: str = Field(alias="priceImpact", description="Percent, as a decimal string.")
    fee_amount: U128 = Field(alias="feeAmount")
    protocol_fee_amount: U128 = Field(alias="protocolFeeAmount")
    bins_crossed: int = Field(alias="binsCrossed", ge=0)

    model_config = {"populate_by_name": True}

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteResponse":
        return cls(
            amount_in=quote.amount_in,
            amount_out=quote.amount_out,
            amount=quote.amount,
            other_amount_offset=quote.other_amount_offset,
            price_impact=str(quote.price_impact),
            fee_amount=quote.fee_amount,
            protocol_fee_amount=quote.protocol_fee_amount,
            bins_crossed=quote.bins_crossed,
        )


class PriceFromIdRequest(BaseModel):
    """Bin id to convert to a price."""

    bin_step: int = Field(alias="binStep", ge=0, le=BASIS_POINT_MAX)
    bin_id: int = Field(alias="binId", ge=MIN_BIN_ID, le=MAX_BIN_ID)
    base_decimals: int = Field(alias="baseDecimals", ge=0, le=MAX_TOKEN_DECIMALS)
    quote_decimals: int = Field(alias="quoteDecimals", ge=0, le=MAX_TOKEN_DECIMALS)

    model_config = {"populate_by_name": True}


class PriceFromIdResponse(BaseModel):
    price: str = Field(description="Quote units per base unit, as a decimal string.")


class PriceToIdRequest(BaseModel):
    """Price to convert to the nearest bin id."""

    price: Decimal
    bin_step: int = Field(alias="binStep")
    base_decimals: int = Field(alias="baseDecimals", ge=0, le=MAX_TOKEN_DECIMALS)
    quote_decimals: int = Field(alias="quoteDecimals", ge=0, le=MAX_TOKEN_DECIMALS)

    model_config = {"populate_by_name": True}


class PriceToIdResponse(BaseModel):
    bin_id: int = Field(alias="binId")

    model_config = {"populate_by_name": True}


__all__ = [
    "QuoteRequest",
    "QuoteResponse",
    "PriceFromIdRequest",
    "PriceFromIdResponse",
    "PriceToIdRequest",
    "PriceToIdResponse",
]
