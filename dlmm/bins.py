"""Bin and bin array snapshots, and the lookup window the swap walks over."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from dlmm.constants import BIN_ARRAY_SIZE
from dlmm.errors import BinArrayIndexMismatch, BinNotFound, InvalidParameter
from dlmm.price import bin_array_index


@dataclass(frozen=True)
class Bin:
    """Pooled liquidity at one discrete price."""

    reserve_x: int = 0
    reserve_y: int = 0
    total_supply: int = 0

    def __post_init__(self) -> None:
        if self.reserve_x < 0 or self.reserve_y < 0 or self.total_supply < 0:
            raise InvalidParameter(f"Bin amounts cannot be negative: {self}")

    def reserve_out(self, swap_for_y: bool) -> int:
        """Reserve paid out by a swap in the given direction."""
        return self.reserve_y if swap_for_y else self.reserve_x


EMPTY_BIN = Bin()


@dataclass(frozen=True)
class BinArray:
    """Fixed-size run of BIN_ARRAY_SIZE bins starting at bin id index * 256."""

    index: int
    bins: tuple[Bin, ...]

    def __post_init__(self) -> None:
        if len(self.bins) != BIN_ARRAY_SIZE:
            raise BinArrayIndexMismatch(
                f"Bin array {self.index} has {len(self.bins)} bins, expected {BIN_ARRAY_SIZE}"
            )

    @classmethod
    def empty(cls, index: int) -> BinArray:
        """Bin array with no liquidity (stands in for an array that does not exist)."""
        return cls(index=index, bins=(EMPTY_BIN,) * BIN_ARRAY_SIZE)

    @classmethod
    def from_mapping(cls, index: int, bins: Mapping[int, Bin]) -> BinArray:
        """Build an array from {bin_id: Bin}; unlisted bins are empty.

        Raises:
            BinArrayIndexMismatch: If a bin id does not belong to this array
        """
        slots = [EMPTY_BIN] * BIN_ARRAY_SIZE
        for bin_id, bin_ in bins.items():
            if bin_array_index(bin_id) != index:
                raise BinArrayIndexMismatch(f"Bin {bin_id} does not belong to bin array {index}")
            slots[bin_id % BIN_ARRAY_SIZE] = bin_
        return cls(index=index, bins=tuple(slots))

    @property
    def first_bin_id(self) -> int:
        return self.index * BIN_ARRAY_SIZE

    def items(self) -> Iterator[tuple[int, Bin]]:
        """Iterate over (bin_id, bin) pairs."""
        first = self.first_bin_id
        for offset, bin_ in enumerate(self.bins):
            yield first + offset, bin_


class BinArrayRange:
    """Read-only window over 1 to 3 contiguous bin arrays.

    Built fresh for every quote from externally supplied snapshots and
    discarded afterwards.
    """

    MAX_ARRAYS = 3

    def __init__(self, *bin_arrays: BinArray) -> None:
        """Create a range from consecutive bin arrays.

        Raises:
            BinArrayIndexMismatch: If the count is not 1-3 or indices are not
                strictly increasing by exactly 1
        """
        if not 1 <= len(bin_arrays) <= self.MAX_ARRAYS:
            raise BinArrayIndexMismatch(
                f"Bin array range needs 1 to {self.MAX_ARRAYS} arrays, got {len(bin_arrays)}"
            )
        for previous, current in zip(bin_arrays, bin_arrays[1:], strict=False):
            if current.index != previous.index + 1:
                raise BinArrayIndexMismatch(
                    f"Bin array index mismatch: {current.index} does not follow {previous.index}"
                )
        self._arrays = bin_arrays
        self._first_index = bin_arrays[0].index

    @property
    def min_bin_id(self) -> int:
        return self._arrays[0].first_bin_id

    @property
    def max_bin_id(self) -> int:
        return self._arrays[-1].first_bin_id + BIN_ARRAY_SIZE - 1

    @property
    def indices(self) -> list[int]:
        return [array.index for array in self._arrays]

    def contains(self, bin_id: int) -> bool:
        return self.min_bin_id <= bin_id <= self.max_bin_id

    def get_bin(self, bin_id: int) -> Bin:
        """Look up a bin by id in O(1).

        Raises:
            BinNotFound: If bin_id is outside the loaded arrays
        """
        if not self.contains(bin_id):
            raise BinNotFound(
                f"Bin {bin_id} not found in range [{self.min_bin_id}, {self.max_bin_id}]"
            )
        array = self._arrays[bin_array_index(bin_id) - self._first_index]
        return array.bins[bin_id % BIN_ARRAY_SIZE]

    def get_all_bins(self) -> list[Bin]:
        """All bins in the window, lowest id first."""
        return [bin_ for array in self._arrays for bin_ in array.bins]

    def total_supply(self) -> int:
        """Aggregate liquidity share supply across the window."""
        return sum(bin_.total_supply for bin_ in self.get_all_bins())

    def __repr__(self) -> str:
        return f"BinArrayRange(indices={self.indices})"


__all__ = ["Bin", "BinArray", "BinArrayRange", "EMPTY_BIN"]
