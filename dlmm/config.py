"""Quoter configuration."""

from dataclasses import dataclass

from dlmm.constants import MAX_BIN_CROSSINGS


@dataclass(frozen=True)
class QuoterConfig:
    """Centralized configuration for quote simulation.

    Attributes:
        max_bin_crossings: Bins a single simulated swap may visit before the
            quote fails (default: 30, the on-chain limit)
        price_precision: Significant digits of the Decimal context used for
            bin id <-> price conversion (default: 50)
        bin_array_window: Number of consecutive bin arrays fetched around the
            active array (default: 3, i.e. previous, current, next)
    """

    max_bin_crossings: int = MAX_BIN_CROSSINGS
    price_precision: int = 50
    bin_array_window: int = 3

    def __post_init__(self) -> None:
        if self.max_bin_crossings <= 0:
            raise ValueError(f"max_bin_crossings must be positive, got {self.max_bin_crossings}")
        if self.price_precision < 17:
            raise ValueError(f"price_precision must be at least 17, got {self.price_precision}")
        if not 1 <= self.bin_array_window <= 3:
            raise ValueError(f"bin_array_window must be in [1, 3], got {self.bin_array_window}")


# Default configuration instance
DEFAULT_QUOTER_CONFIG = QuoterConfig()
