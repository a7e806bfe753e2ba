"""Snapshot source doubles for service tests."""

from collections.abc import Sequence

from dlmm.bins import BinArray
from dlmm.pair import PairState
from dlmm.service import InMemorySnapshotSource


class RecordingSnapshotSource(InMemorySnapshotSource):
    """InMemorySnapshotSource that records every fetch as (method, pair_id)."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.calls: list[tuple[str, str]] = []

    async def fetch_pair_state(self, pair_id: str) -> PairState:
        self.calls.append(("fetch_pair_state", pair_id))
        return await super().fetch_pair_state(pair_id)

    async def fetch_bin_arrays(
        self, pair_id: str, indices: Sequence[int]
    ) -> list[BinArray | None]:
        self.calls.append(("fetch_bin_arrays", pair_id))
        return await super().fetch_bin_arrays(pair_id, indices)
