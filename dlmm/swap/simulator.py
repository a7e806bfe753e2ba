"""Bin-walking swap simulation.

A swap consumes liquidity one bin at a time, starting at the pair's active
bin. Selling X for Y (swap_for_y) drains Y from a bin and walks down
(active_id - 1); selling Y for X walks up. Inside a bin the price is constant,
so each step is a straight conversion at the bin's Q64.64 price plus the fee
in force for that bin. The fee is recomputed for every bin because the
volatility accumulator grows as the simulated price moves away from the
reference bin.

Rounding follows the on-chain program: input needed to drain a bin rounds up,
output for a partial fill rounds down.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from dlmm.bins import Bin, BinArrayRange
from dlmm.config import DEFAULT_QUOTER_CONFIG, QuoterConfig
from dlmm.errors import InvalidParameter, SwapCrossesTooManyBins, ZeroAmount
from dlmm.fees.calculator import (
    get_fee_amount,
    get_fee_for_amount,
    get_protocol_fee,
    get_total_fee,
)
from dlmm.math.fixed_point import Rounding
from dlmm.pair import PairState
from dlmm.price import get_price_q64
from dlmm.safe_int import S
from dlmm.swap.calculations import get_amount_in_by_price, get_amount_out_by_price
from dlmm.volatility import VolatilityTracker

logger = structlog.get_logger()


@dataclass(frozen=True)
class SwapStepResult:
    """Outcome of trading against a single bin.

    Attributes:
        bin_id: Bin the step traded against
        amount_in_with_fees: Gross input consumed, fee included
        amount_out: Output paid out of the bin
        fee_amount: Total fee charged on this step
        protocol_fee_amount: Protocol's share of fee_amount
    """

    bin_id: int
    amount_in_with_fees: int
    amount_out: int
    fee_amount: int
    protocol_fee_amount: int

    @classmethod
    def empty(cls, bin_id: int) -> SwapStepResult:
        """Step through a bin with no output-side liquidity."""
        return cls(
            bin_id=bin_id,
            amount_in_with_fees=0,
            amount_out=0,
            fee_amount=0,
            protocol_fee_amount=0,
        )


@dataclass(frozen=True)
class SwapSimulation:
    """Aggregate result of a simulated swap."""

    amount_in: int
    amount_out: int
    fee_amount: int
    protocol_fee_amount: int
    start_id: int
    end_id: int
    steps: tuple[SwapStepResult, ...]

    @property
    def bins_crossed(self) -> int:
        """Number of bins visited, including the final partially used bin."""
        return len(self.steps)

    @classmethod
    def zero(cls, active_id: int) -> SwapSimulation:
        """Result for a window without liquidity."""
        return cls(
            amount_in=0,
            amount_out=0,
            fee_amount=0,
            protocol_fee_amount=0,
            start_id=active_id,
            end_id=active_id,
            steps=(),
        )


def swap_exact_input_step(
    bin_: Bin,
    bin_id: int,
    bin_step: int,
    amount_in_left: int,
    fee: int,
    protocol_share: int,
    swap_for_y: bool,
) -> SwapStepResult:
    """Trade as much of `amount_in_left` as one bin can absorb.

    If the remaining input covers the whole output reserve (plus fee), the bin
    is drained; otherwise the fee is deducted from the input and the rest is
    converted at the bin price, rounding down and capped at the reserve.
    """
    reserve_out = bin_.reserve_out(swap_for_y)
    if reserve_out == 0:
        return SwapStepResult.empty(bin_id)

    price = get_price_q64(bin_id, bin_step)

    max_amount_in = get_amount_in_by_price(reserve_out, price, swap_for_y, Rounding.UP)
    max_fee_amount = get_fee_for_amount(max_amount_in, fee)
    max_amount_in_with_fees = max_amount_in + max_fee_amount

    if amount_in_left >= max_amount_in_with_fees:
        fee_amount = max_fee_amount
        amount_in_with_fees = max_amount_in_with_fees
        amount_out = reserve_out
    else:
        fee_amount = get_fee_amount(amount_in_left, fee)
        amount_in = (S(amount_in_left) - S(fee_amount)).value
        amount_out = min(
            get_amount_out_by_price(amount_in, price, swap_for_y, Rounding.DOWN),
            reserve_out,
        )
        amount_in_with_fees = amount_in_left

    return SwapStepResult(
        bin_id=bin_id,
        amount_in_with_fees=amount_in_with_fees,
        amount_out=amount_out,
        fee_amount=fee_amount,
        protocol_fee_amount=get_protocol_fee(fee_amount, protocol_share),
    )


def swap_exact_output_step(
    bin_: Bin,
    bin_id: int,
    bin_step: int,
    amount_out_left: int,
    fee: int,
    protocol_share: int,
    swap_for_y: bool,
) -> SwapStepResult:
    """Take up to `amount_out_left` from one bin and price the input it needs.

    The input for the output taken rounds up, then the fee is added on top
    so the bin nets exactly that input.
    """
    reserve_out = bin_.reserve_out(swap_for_y)
    amount_out = min(amount_out_left, reserve_out)
    if amount_out == 0:
        return SwapStepResult.empty(bin_id)

    price = get_price_q64(bin_id, bin_step)

    amount_in = get_amount_in_by_price(amount_out, price, swap_for_y, Rounding.UP)
    fee_amount = get_fee_for_amount(amount_in, fee)

    return SwapStepResult(
        bin_id=bin_id,
        amount_in_with_fees=amount_in + fee_amount,
        amount_out=amount_out,
        fee_amount=fee_amount,
        protocol_fee_amount=get_protocol_fee(fee_amount, protocol_share),
    )


def move_active_id(active_id: int, swap_for_y: bool) -> int:
    """Next bin to visit: down when buying Y, up when buying X."""
    return active_id - 1 if swap_for_y else active_id + 1


def validate_amount(amount: int) -> None:
    """Reject non-positive trade amounts.

    Raises:
        ZeroAmount: If amount is zero
        InvalidParameter: If amount is negative
    """
    if amount == 0:
        raise ZeroAmount("Amount must be greater than 0")
    if amount < 0:
        raise InvalidParameter(f"Amount cannot be negative: {amount}")


class SwapSimulator:
    """Simulates swaps against an immutable pair and bin window.

    The simulator only holds its inputs; every simulate_* call seeds its own
    VolatilityTracker, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        pair: PairState,
        bin_range: BinArrayRange,
        now: int | None,
        config: QuoterConfig | None = None,
    ):
        """Initialize the simulator.

        Args:
            pair: Pair snapshot
            bin_range: Loaded bin window around the active bin
            now: Unix timestamp resolved by the caller before simulation,
                or None to keep the stored volatility references
            config: Quoter configuration. Uses DEFAULT_QUOTER_CONFIG if not provided.
        """
        self.pair = pair
        self.bin_range = bin_range
        self.now = now
        self.config = config or DEFAULT_QUOTER_CONFIG

    def new_tracker(self) -> VolatilityTracker:
        """Volatility tracker seeded from the pair with references rolled to `now`."""
        tracker = VolatilityTracker.from_pair(self.pair)
        tracker.update_references(self.pair.active_id, self.now)
        return tracker

    def simulate_exact_in(self, amount_in: int, swap_for_y: bool) -> SwapSimulation:
        """Simulate selling exactly `amount_in`.

        Args:
            amount_in: Input amount, fee included
            swap_for_y: True to sell X for Y, False to sell Y for X

        Returns:
            SwapSimulation with the total output

        Raises:
            SwapCrossesTooManyBins: If the input is not used up within the bin cap
            BinNotFound: If the walk leaves the loaded bin window
        """
        validate_amount(amount_in)
        return self._simulate(amount_in, swap_for_y, exact_input=True)

    def simulate_exact_out(self, amount_out: int, swap_for_y: bool) -> SwapSimulation:
        """Simulate buying exactly `amount_out`.

        Args:
            amount_out: Desired output amount
            swap_for_y: True to buy Y with X, False to buy X with Y

        Returns:
            SwapSimulation with the total input required (fee included)

        Raises:
            SwapCrossesTooManyBins: If the output cannot be filled within the bin cap
            BinNotFound: If the walk leaves the loaded bin window
        """
        validate_amount(amount_out)
        return self._simulate(amount_out, swap_for_y, exact_input=False)

    def _simulate(self, amount: int, swap_for_y: bool, *, exact_input: bool) -> SwapSimulation:
        pair = self.pair
        protocol_share = pair.static_fee_parameters.protocol_share
        tracker = self.new_tracker()

        active_id = pair.active_id
        amount_left = S(amount)
        steps: list[SwapStepResult] = []

        while amount_left > 0:
            if len(steps) >= self.config.max_bin_crossings:
                logger.debug(
                    "swap_max_bin_crossings",
                    start_id=pair.active_id,
                    active_id=active_id,
                    amount_left=amount_left.value,
                    exact_input=exact_input,
                )
                raise SwapCrossesTooManyBins(
                    f"Swap crosses more than {self.config.max_bin_crossings} bins - quote aborted"
                )

            tracker.update_accumulator(active_id)
            fee = get_total_fee(pair, tracker.volatility_accumulator)
            bin_ = self.bin_range.get_bin(active_id)

            if exact_input:
                step = swap_exact_input_step(
                    bin_, active_id, pair.bin_step, amount_left.value, fee, protocol_share, swap_for_y
                )
                amount_left = amount_left - step.amount_in_with_fees
            else:
                step = swap_exact_output_step(
                    bin_, active_id, pair.bin_step, amount_left.value, fee, protocol_share, swap_for_y
                )
                amount_left = amount_left - step.amount_out
            steps.append(step)

            logger.debug(
                "swap_bin_step",
                bin_id=active_id,
                fee=fee,
                volatility_accumulator=tracker.volatility_accumulator,
                amount_in=step.amount_in_with_fees,
                amount_out=step.amount_out,
            )

            if amount_left > 0:
                active_id = move_active_id(active_id, swap_for_y)

        total_in = sum(step.amount_in_with_fees for step in steps)
        total_out = sum(step.amount_out for step in steps)

        return SwapSimulation(
            amount_in=amount if exact_input else total_in,
            amount_out=total_out if exact_input else amount,
            fee_amount=sum(step.fee_amount for step in steps),
            protocol_fee_amount=sum(step.protocol_fee_amount for step in steps),
            start_id=pair.active_id,
            end_id=active_id,
            steps=tuple(steps),
        )


__all__ = [
    "SwapStepResult",
    "SwapSimulation",
    "SwapSimulator",
    "swap_exact_input_step",
    "swap_exact_output_step",
    "move_active_id",
    "validate_amount",
]
