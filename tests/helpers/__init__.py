"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Pair ids and common reserves
- factories: Pair, bin array and bin range factory functions
- sources: Snapshot source doubles that record fetches
"""

from tests.helpers.constants import (
    ACTIVE_ARRAY_INDEX,
    LARGE_RESERVE,
    PAIR_ID,
    UNKNOWN_PAIR_ID,
)
from tests.helpers.factories import (
    make_bin_arrays,
    make_bin_range,
    make_liquidity_bins,
    make_pair,
)
from tests.helpers.sources import RecordingSnapshotSource

__all__ = [
    # Constants
    "ACTIVE_ARRAY_INDEX",
    "LARGE_RESERVE",
    "PAIR_ID",
    "UNKNOWN_PAIR_ID",
    # Factories
    "make_pair",
    "make_bin_arrays",
    "make_bin_range",
    "make_liquidity_bins",
    # Doubles
    "RecordingSnapshotSource",
]
