#!/usr/bin/env python3
"""Quote a swap against a saved pair snapshot.

Usage:
    # Sell 1_000_000 X for Y with 0.5% slippage
    python scripts/quote_snapshot.py tests/fixtures/snapshots/flat_pair.json \\
        --amount 1000000 --swap-for-y --slippage 0.5

    # Buy exactly 500_000 X, rolling volatility references to a given time
    python scripts/quote_snapshot.py snapshot.json --amount 500000 --exact-output --now 1700000000

The snapshot uses the PairSnapshot schema (pairId, pair, binArrays, timestamp).
The quote is printed to stdout as JSON; logs go to stderr.
"""

import argparse
import asyncio
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path

import structlog

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dlmm.errors import DLMMError  # noqa: E402
from dlmm.models.quote import QuoteResponse  # noqa: E402
from dlmm.models.snapshot import PairSnapshot  # noqa: E402
from dlmm.service import QuoteService  # noqa: E402

logger = structlog.get_logger()


def load_snapshot(path: Path) -> PairSnapshot:
    """Load and validate a snapshot file."""
    with open(path) as f:
        data = json.load(f)
    return PairSnapshot.model_validate(data)


async def quote_snapshot(
    snapshot: PairSnapshot,
    amount: int,
    swap_for_y: bool,
    is_exact_input: bool,
    slippage: Decimal,
) -> QuoteResponse:
    """Quote one swap against the snapshot."""
    source = snapshot.to_source()
    service = QuoteService(source, source, source.current_time)
    quote = await service.get_quote(
        snapshot.pair_id, amount, swap_for_y, is_exact_input, slippage
    )
    return QuoteResponse.from_quote(quote)


def main() -> int:
    parser = argparse.ArgumentParser(description="Quote a swap against a pair snapshot")
    parser.add_argument(
        "snapshot",
        type=Path,
        help="Path to a pair snapshot JSON file",
    )
    parser.add_argument(
        "--amount",
        type=int,
        required=True,
        help="Input amount (exact input) or desired output (exact output), in raw units",
    )
    parser.add_argument(
        "--swap-for-y",
        action="store_true",
        help="Sell X for Y (default: sell Y for X)",
    )
    parser.add_argument(
        "--exact-output",
        action="store_true",
        help="Treat --amount as the exact output wanted",
    )
    parser.add_argument(
        "--slippage",
        type=Decimal,
        default=Decimal("0.5"),
        help="Slippage tolerance in percent (default: 0.5)",
    )
    parser.add_argument(
        "--now",
        type=int,
        default=None,
        help="Unix timestamp overriding the snapshot's timestamp",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging (per-bin swap steps)",
    )

    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )

    if not args.snapshot.exists():
        logger.error("snapshot_not_found", path=str(args.snapshot))
        print(f"Error: Snapshot not found: {args.snapshot}", file=sys.stderr)
        return 1

    snapshot = load_snapshot(args.snapshot)
    if args.now is not None:
        snapshot = snapshot.model_copy(update={"timestamp": args.now})

    try:
        response = asyncio.run(
            quote_snapshot(
                snapshot,
                amount=args.amount,
                swap_for_y=args.swap_for_y,
                is_exact_input=not args.exact_output,
                slippage=args.slippage,
            )
        )
    except DLMMError as e:
        logger.error("quote_failed", error=type(e).__name__, detail=str(e))
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(json.dumps(response.model_dump(by_alias=True), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
