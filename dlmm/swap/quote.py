"""Quote assembly: simulation plus slippage bounds and price impact."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

import structlog

from dlmm.bins import BinArrayRange
from dlmm.config import QuoterConfig
from dlmm.fees.calculator import get_fee_amount, get_total_fee
from dlmm.math.fixed_point import Rounding
from dlmm.pair import PairState
from dlmm.price import get_price_q64
from dlmm.swap.calculations import (
    get_amount_out_by_price,
    get_max_input_with_slippage,
    get_min_output_with_slippage,
    get_price_impact,
    slippage_to_precision,
)
from dlmm.swap.simulator import SwapSimulator, validate_amount

logger = structlog.get_logger()


@dataclass(frozen=True)
class Quote:
    """Advisory swap quote plus the limits to submit on-chain.

    Attributes:
        amount_in: Simulated input, fee included
        amount_out: Simulated output
        amount: Fixed side of the trade to submit (input for exact-input,
            output for exact-output)
        other_amount_offset: Slippage-bounded other side (minimum output for
            exact-input, maximum input for exact-output)
        price_impact: Percent deviation from the single-bin output at the
            current price (negative when the trade gets a worse price)
        fee_amount: Total simulated fees
        protocol_fee_amount: Protocol's share of fee_amount
        bins_crossed: Bins the simulation visited
    """

    amount_in: int
    amount_out: int
    amount: int
    other_amount_offset: int
    price_impact: Decimal
    fee_amount: int = 0
    protocol_fee_amount: int = 0
    bins_crossed: int = 0

    @classmethod
    def zero(cls) -> Quote:
        """Quote for a window with no liquidity."""
        return cls(
            amount_in=0,
            amount_out=0,
            amount=0,
            other_amount_offset=0,
            price_impact=Decimal(0),
        )


def get_best_case_amount_out(simulator: SwapSimulator, amount_in: int, swap_for_y: bool) -> int:
    """Output for `amount_in` if the whole trade filled at the active bin.

    Uses the current total fee and the active bin price with no bin walking.
    """
    pair = simulator.pair
    tracker = simulator.new_tracker()
    tracker.update_accumulator(pair.active_id)
    fee = get_total_fee(pair, tracker.volatility_accumulator)

    amount_in_after_fee = amount_in - get_fee_amount(amount_in, fee)
    price = get_price_q64(pair.active_id, pair.bin_step)
    return get_amount_out_by_price(amount_in_after_fee, price, swap_for_y, Rounding.DOWN)


def get_quote(
    pair: PairState,
    bin_range: BinArrayRange,
    amount: int,
    swap_for_y: bool,
    is_exact_input: bool,
    slippage: Decimal | int | float | str,
    now: int | None = None,
    config: QuoterConfig | None = None,
) -> Quote:
    """Quote a swap against a pair snapshot.

    Args:
        pair: Pair snapshot
        bin_range: Bin arrays around the active bin
        amount: Input amount (exact-input) or desired output (exact-output)
        swap_for_y: True to sell X for Y, False to sell Y for X
        is_exact_input: Which side of the trade `amount` fixes
        slippage: Tolerated slippage in percent, in [0, 100)
        now: Unix timestamp for the volatility update, None to skip it
        config: Quoter configuration

    Returns:
        Quote with simulated amounts and slippage bounds. A window without
        liquidity yields Quote.zero().

    Raises:
        ZeroAmount: If amount is zero
        InvalidSlippage: If slippage is outside [0, 100)
        SwapCrossesTooManyBins: If the trade cannot fill within the bin cap
        BinNotFound: If the trade walks outside the loaded window
    """
    validate_amount(amount)
    slippage_to_precision(slippage)

    if bin_range.total_supply() == 0:
        logger.debug("quote_no_liquidity", active_id=pair.active_id, indices=bin_range.indices)
        return Quote.zero()

    simulator = SwapSimulator(pair, bin_range, now, config)
    if is_exact_input:
        simulation = simulator.simulate_exact_in(amount, swap_for_y)
    else:
        simulation = simulator.simulate_exact_out(amount, swap_for_y)

    amount_in = simulation.amount_in
    amount_out = simulation.amount_out

    if is_exact_input:
        min_amount_out = get_min_output_with_slippage(amount_out, slippage)
        fixed_amount, other_amount_offset = amount_in, min_amount_out
    else:
        max_amount_in = get_max_input_with_slippage(amount_in, slippage)
        fixed_amount, other_amount_offset = amount_out, max_amount_in

    best_case_amount_out = get_best_case_amount_out(simulator, amount_in, swap_for_y)
    price_impact = get_price_impact(amount_out, best_case_amount_out)

    logger.debug(
        "quote_computed",
        active_id=pair.active_id,
        end_id=simulation.end_id,
        amount_in=amount_in,
        amount_out=amount_out,
        other_amount_offset=other_amount_offset,
        price_impact=str(price_impact),
    )

    return Quote(
        amount_in=amount_in,
        amount_out=amount_out,
        amount=fixed_amount,
        other_amount_offset=other_amount_offset,
        price_impact=price_impact,
        fee_amount=simulation.fee_amount,
        protocol_fee_amount=simulation.protocol_fee_amount,
        bins_crossed=simulation.bins_crossed,
    )


__all__ = ["Quote", "get_quote", "get_best_case_amount_out"]
