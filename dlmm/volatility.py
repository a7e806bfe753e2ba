"""Volatility tracking for the variable fee.

The variable fee grows with how far the price has moved away from a
reference bin recently. The tracker replays the on-chain bookkeeping for one
simulated swap:

- update_references runs once when the swap starts. If more than
  filter_period seconds passed since the last update, the reference bin moves
  to the current active bin and the volatility reference decays (to zero after
  decay_period, otherwise to accumulator * reduction_factor / 10000).
- update_accumulator runs before every bin is priced:
  accumulator = min(max_accumulator, |active_id - reference_id| * 10000 + reference).

A tracker is created per simulation from the pair snapshot and never shared.
"""

from __future__ import annotations

from dataclasses import dataclass

from dlmm.constants import BASIS_POINT_MAX
from dlmm.pair import PairState, StaticFeeParameters


@dataclass
class VolatilityTracker:
    """Mutable volatility state for a single simulation call."""

    params: StaticFeeParameters
    volatility_accumulator: int
    volatility_reference: int
    reference_id: int
    time_last_updated: int

    @classmethod
    def from_pair(cls, pair: PairState) -> VolatilityTracker:
        """Seed a tracker from the pair's stored dynamic fee parameters."""
        dynamic = pair.dynamic_fee_parameters
        return cls(
            params=pair.static_fee_parameters,
            volatility_accumulator=dynamic.volatility_accumulator,
            volatility_reference=dynamic.volatility_reference,
            reference_id=dynamic.id_reference,
            time_last_updated=dynamic.time_last_updated,
        )

    def update_references(self, active_id: int, now: int | None) -> None:
        """Roll the reference bin and decay the reference volatility.

        Args:
            active_id: Active bin when the swap starts
            now: Current unix timestamp, or None to keep the stored references
        """
        if now is None:
            return

        elapsed = now - self.time_last_updated
        if elapsed > self.params.filter_period:
            self.reference_id = active_id
            if elapsed >= self.params.decay_period:
                self.volatility_reference = 0
            else:
                self.volatility_reference = (
                    self.volatility_accumulator * self.params.reduction_factor // BASIS_POINT_MAX
                )

        self.time_last_updated = now

    def update_accumulator(self, active_id: int) -> int:
        """Recompute the accumulator for the bin about to be priced.

        Returns:
            The new volatility accumulator
        """
        delta_id = abs(active_id - self.reference_id)
        self.volatility_accumulator = min(
            self.params.max_volatility_accumulator,
            delta_id * BASIS_POINT_MAX + self.volatility_reference,
        )
        return self.volatility_accumulator


__all__ = ["VolatilityTracker"]
