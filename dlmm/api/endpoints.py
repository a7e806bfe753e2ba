"""API endpoints for the DLMM quoter."""

from collections.abc import Callable

import structlog
from fastapi import APIRouter, Depends

from dlmm.config import DEFAULT_QUOTER_CONFIG, QuoterConfig
from dlmm.models.quote import (
    PriceFromIdRequest,
    PriceFromIdResponse,
    PriceToIdRequest,
    PriceToIdResponse,
    QuoteRequest,
    QuoteResponse,
)
from dlmm.models.snapshot import PairSnapshot
from dlmm.price import id_from_price, price_from_id
from dlmm.service import QuoteService

logger = structlog.get_logger()

router = APIRouter()

ServiceFactory = Callable[[PairSnapshot], QuoteService]


def get_config() -> QuoterConfig:
    """Dependency provider for the quoter configuration.

    Override this in tests to change limits:
        app.dependency_overrides[get_config] = lambda: QuoterConfig(max_bin_crossings=5)
    """
    return DEFAULT_QUOTER_CONFIG


def get_service_factory(config: QuoterConfig = Depends(get_config)) -> ServiceFactory:
    """Dependency provider building a QuoteService over a request snapshot.

    Returns:
        Callable turning a snapshot into a service backed by it
    """

    def build(snapshot: PairSnapshot) -> QuoteService:
        source = snapshot.to_source()
        return QuoteService(source, source, source.current_time, config)

    return build


@router.post("/quote")
async def quote(
    request: QuoteRequest,
    service_factory: ServiceFactory = Depends(get_service_factory),
) -> QuoteResponse:
    """Quote a swap against the pair snapshot in the request.

    Error Handling:
        - Invalid request schema: 422 Validation Error (Pydantic)
        - Domain errors: mapped to a status code by the DLMMError handler in main
    """
    snapshot = request.snapshot
    logger.info(
        "received_quote_request",
        pair_id=snapshot.pair_id,
        bin_arrays=len(snapshot.bin_arrays),
        swap_for_y=request.swap_for_y,
        is_exact_input=request.is_exact_input,
    )

    service = service_factory(snapshot)

    result = await service.get_quote(
        snapshot.pair_id,
        request.amount_int,
        request.swap_for_y,
        request.is_exact_input,
        request.slippage,
    )
    return QuoteResponse.from_quote(result)


@router.post("/price/from-id")
async def price_from_bin_id(
    request: PriceFromIdRequest,
    config: QuoterConfig = Depends(get_config),
) -> PriceFromIdResponse:
    """Convert a bin id to a price in quote units per base unit."""
    price = price_from_id(
        request.bin_step,
        request.bin_id,
        request.base_decimals,
        request.quote_decimals,
        precision=config.price_precision,
    )
    return PriceFromIdResponse(price=str(price))


@router.post("/price/to-id")
async def price_to_bin_id(
    request: PriceToIdRequest,
    config: QuoterConfig = Depends(get_config),
) -> PriceToIdResponse:
    """Convert a price to the nearest bin id."""
    bin_id = id_from_price(
        request.price,
        request.bin_step,
        request.base_decimals,
        request.quote_decimals,
        precision=config.price_precision,
    )
    return PriceToIdResponse(bin_id=bin_id)
