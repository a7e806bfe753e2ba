"""Async quote service over injected snapshot collaborators.

Fetching pair state, bin arrays and the current time is I/O owned by the
caller's infrastructure. This module only defines the interfaces it needs,
awaits them once per quote, and then hands plain values to the pure quoter,
which runs in the default executor so the event loop stays free.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping, Sequence
from decimal import Decimal
from functools import partial
from typing import Protocol, TypeAlias

import structlog

from dlmm.bins import BinArray, BinArrayRange
from dlmm.config import DEFAULT_QUOTER_CONFIG, QuoterConfig
from dlmm.errors import PairNotFound
from dlmm.pair import PairState
from dlmm.price import bin_array_indices
from dlmm.swap.quote import Quote, get_quote

logger = structlog.get_logger()

# Resolves a slot/block reference (None = latest) to a unix timestamp,
# or None when the time is unknown
TimeOracle: TypeAlias = Callable[[int | None], Awaitable[int | None]]


class PairStateFetcher(Protocol):
    """Source of pair snapshots."""

    async def fetch_pair_state(self, pair_id: str) -> PairState:
        """Fetch the current state of a pair.

        Raises:
            PairNotFound: If the pair does not exist
        """
        ...


class BinArrayFetcher(Protocol):
    """Source of bin array snapshots."""

    async def fetch_bin_arrays(
        self, pair_id: str, indices: Sequence[int]
    ) -> list[BinArray | None]:
        """Fetch bin arrays by index, in order; None where an array does not exist."""
        ...


class InMemorySnapshotSource:
    """Dict-backed pair, bin array and time source.

    Implements both fetcher protocols for tests and offline quoting from
    saved snapshots.
    """

    def __init__(
        self,
        pairs: Mapping[str, PairState] | None = None,
        bin_arrays: Mapping[str, Sequence[BinArray]] | None = None,
        timestamp: int | None = None,
    ):
        """Initialize the source.

        Args:
            pairs: Mapping of pair id -> pair state
            bin_arrays: Mapping of pair id -> bin arrays (any order)
            timestamp: Value returned by current_time, None for unknown
        """
        self.pairs = dict(pairs or {})
        self.bin_arrays = {
            pair_id: {array.index: array for array in arrays}
            for pair_id, arrays in (bin_arrays or {}).items()
        }
        self.timestamp = timestamp

    async def fetch_pair_state(self, pair_id: str) -> PairState:
        try:
            return self.pairs[pair_id]
        except KeyError:
            raise PairNotFound(f"Pair not found: {pair_id}") from None

    async def fetch_bin_arrays(
        self, pair_id: str, indices: Sequence[int]
    ) -> list[BinArray | None]:
        arrays = self.bin_arrays.get(pair_id, {})
        return [arrays.get(index) for index in indices]

    async def current_time(self, _block_ref: int | None = None) -> int | None:
        return self.timestamp


class QuoteService:
    """Fetches snapshots for a pair and quotes swaps against them.

    Holds only collaborator references; all simulation state is created per
    call, so concurrent get_quote calls do not interfere.
    """

    def __init__(
        self,
        pair_fetcher: PairStateFetcher,
        bin_array_fetcher: BinArrayFetcher,
        time_oracle: TimeOracle | None = None,
        config: QuoterConfig | None = None,
    ):
        """Initialize the service.

        Args:
            pair_fetcher: Source of pair state
            bin_array_fetcher: Source of bin arrays
            time_oracle: Resolves the current timestamp. If None, volatility
                references are never rolled forward.
            config: Quoter configuration. Uses DEFAULT_QUOTER_CONFIG if not provided.
        """
        self.pair_fetcher = pair_fetcher
        self.bin_array_fetcher = bin_array_fetcher
        self.time_oracle = time_oracle
        self.config = config or DEFAULT_QUOTER_CONFIG

    async def load_bin_range(self, pair_id: str, pair: PairState) -> BinArrayRange:
        """Fetch the bin arrays around the active bin.

        Missing arrays are replaced with empty ones rather than failing.
        """
        indices = bin_array_indices(pair.active_id, self.config.bin_array_window)
        fetched = await self.bin_array_fetcher.fetch_bin_arrays(pair_id, indices)

        arrays: list[BinArray] = []
        for index, array in zip(indices, fetched, strict=True):
            if array is None:
                logger.warning("bin_array_missing", pair_id=pair_id, index=index)
                array = BinArray.empty(index)
            arrays.append(array)
        return BinArrayRange(*arrays)

    async def resolve_time(self, block_ref: int | None) -> int | None:
        """Resolve the timestamp once, before simulation."""
        if self.time_oracle is None:
            return None
        now = await self.time_oracle(block_ref)
        if now is None:
            logger.warning("time_oracle_no_timestamp", block_ref=block_ref)
        return now

    async def get_quote(
        self,
        pair_id: str,
        amount: int,
        swap_for_y: bool,
        is_exact_input: bool,
        slippage: Decimal | int | float | str,
        block_ref: int | None = None,
    ) -> Quote:
        """Quote a swap on a pair using freshly fetched snapshots.

        Fetch errors (e.g. PairNotFound) propagate unchanged.
        """
        logger.info(
            "quote_requested",
            pair_id=pair_id,
            amount=amount,
            swap_for_y=swap_for_y,
            is_exact_input=is_exact_input,
        )

        pair = await self.pair_fetcher.fetch_pair_state(pair_id)
        bin_range, now = await asyncio.gather(
            self.load_bin_range(pair_id, pair),
            self.resolve_time(block_ref),
        )

        # Simulation is CPU-bound; run it in the default executor
        loop = asyncio.get_running_loop()
        quote = await loop.run_in_executor(
            None,
            partial(
                get_quote,
                pair,
                bin_range,
                amount,
                swap_for_y,
                is_exact_input,
                slippage,
                now=now,
                config=self.config,
            ),
        )

        logger.info(
            "quote_returned",
            pair_id=pair_id,
            amount_in=quote.amount_in,
            amount_out=quote.amount_out,
            bins_crossed=quote.bins_crossed,
        )
        return quote


__all__ = [
    "TimeOracle",
    "PairStateFetcher",
    "BinArrayFetcher",
    "InMemorySnapshotSource",
    "QuoteService",
]
