"""Pytest configuration and fixtures."""

import json
from collections.abc import Iterator
from pathlib import Path

import pytest

from dlmm.bins import Bin
from dlmm.constants import ACTIVE_ID
from dlmm.models.snapshot import PairSnapshot
from dlmm.pair import PairState
from tests.helpers import (
    LARGE_RESERVE,
    PAIR_ID,
    RecordingSnapshotSource,
    make_bin_arrays,
    make_pair,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"
SNAPSHOTS_DIR = FIXTURES_DIR / "snapshots"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the fixtures directory path."""
    return FIXTURES_DIR


def load_snapshot_json(name: str) -> dict:
    """Load the raw JSON of a snapshot fixture.

    Args:
        name: Fixture name without extension (e.g., "flat_pair")
    """
    path = SNAPSHOTS_DIR / f"{name}.json"
    with open(path) as f:
        return json.load(f)


def load_snapshot_fixture(name: str) -> PairSnapshot:
    """Load and validate a snapshot fixture by name."""
    return PairSnapshot.model_validate(load_snapshot_json(name))


def iter_snapshot_fixtures() -> Iterator[tuple[str, PairSnapshot]]:
    """Iterate over all snapshot fixtures as (name, PairSnapshot)."""
    for path in sorted(SNAPSHOTS_DIR.glob("*.json")):
        yield path.stem, load_snapshot_fixture(path.stem)


@pytest.fixture
def flat_snapshot() -> PairSnapshot:
    """Pair at price 1.0 with a 0.5% base fee and a 10% protocol share."""
    return load_snapshot_fixture("flat_pair")


@pytest.fixture
def volatile_snapshot() -> PairSnapshot:
    """Pair with variable fees and a timestamp past the filter period."""
    return load_snapshot_fixture("volatile_pair")


@pytest.fixture
def half_percent_fee_pair() -> PairState:
    """bin_step=100, base_factor=5000: base fee 5_000_000 (0.5%)."""
    return make_pair(bin_step=100, base_factor=5000)


@pytest.fixture
def deep_active_bin() -> dict[int, Bin]:
    """Active bin with reserves no test swap can drain."""
    return {
        ACTIVE_ID: Bin(
            reserve_x=LARGE_RESERVE,
            reserve_y=LARGE_RESERVE,
            total_supply=2 * LARGE_RESERVE,
        )
    }


@pytest.fixture
def memory_source(half_percent_fee_pair, deep_active_bin) -> RecordingSnapshotSource:
    """In-memory source serving one deep pair under PAIR_ID, recording fetches."""
    return RecordingSnapshotSource(
        pairs={PAIR_ID: half_percent_fee_pair},
        bin_arrays={PAIR_ID: make_bin_arrays(deep_active_bin)},
        timestamp=None,
    )
