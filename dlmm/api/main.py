"""FastAPI application for the DLMM quoter.

Note: Rate limiting and authentication are not implemented at the application
level. They belong in the infrastructure layer (reverse proxy / load balancer).
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dlmm import __version__
from dlmm.api.endpoints import router
from dlmm.errors import (
    BinArrayIndexMismatch,
    BinNotFound,
    DLMMError,
    InvalidParameter,
    PairNotFound,
    SwapCrossesTooManyBins,
)

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("DLMM_HOST", "0.0.0.0")
PORT = int(os.environ.get("DLMM_PORT", "8000"))
DEBUG = os.environ.get("DLMM_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MiB, about three fully populated bin arrays)
MAX_REQUEST_SIZE = int(os.environ.get("DLMM_MAX_REQUEST_SIZE", str(1024 * 1024)))

# First matching class wins, so subclasses must precede their bases
ERROR_STATUS_CODES: list[tuple[type[DLMMError], int]] = [
    (InvalidParameter, 400),
    (BinArrayIndexMismatch, 400),
    (PairNotFound, 404),
    (BinNotFound, 422),
    (SwapCrossesTooManyBins, 422),
]

app = FastAPI(
    title="DLMM Quoter",
    description="Off-chain swap quotes and fee simulation for discretized-liquidity pools",
    version=__version__,
)


def status_code_for(error: DLMMError) -> int:
    """HTTP status for a domain error; unexpected (math) errors map to 500."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(error, error_type):
            return status_code
    return 500


@app.exception_handler(DLMMError)
async def handle_dlmm_error(request: Request, exc: DLMMError) -> JSONResponse:
    """Translate domain errors into a JSON error body."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(
            "unexpected_quoter_error",
            path=request.url.path,
            error=type(exc).__name__,
            detail=str(exc),
        )
    else:
        logger.warning(
            "quote_rejected",
            path=request.url.path,
            error=type(exc).__name__,
            detail=str(exc),
        )
    return JSONResponse(
        status_code=status_code,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the quoter API server.

    Configuration via environment variables:
    - DLMM_HOST: Host to bind to (default: 0.0.0.0)
    - DLMM_PORT: Port to bind to (default: 8000)
    - DLMM_DEBUG: Enable debug/reload mode (default: false)
    - DLMM_MAX_REQUEST_SIZE: Maximum request body in bytes (default: 1 MiB)
    """
    uvicorn.run(
        "dlmm.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
