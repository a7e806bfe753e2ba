"""Swap simulation and quoting.

This package provides:
- SwapSimulator: bin-walking exact-input and exact-output simulation
- get_quote: simulation wrapped with slippage bounds and price impact
- Amount conversion at Q64.64 bin prices and slippage helpers
"""

from .calculations import (
    get_amount_in_by_price,
    get_amount_out_by_price,
    get_max_input_with_slippage,
    get_min_output_with_slippage,
    get_price_impact,
    slippage_to_precision,
)
from .quote import Quote, get_best_case_amount_out, get_quote
from .simulator import (
    SwapSimulation,
    SwapSimulator,
    SwapStepResult,
    move_active_id,
    swap_exact_input_step,
    swap_exact_output_step,
    validate_amount,
)

__all__ = [
    # Simulation
    "SwapSimulator",
    "SwapSimulation",
    "SwapStepResult",
    "swap_exact_input_step",
    "swap_exact_output_step",
    "move_active_id",
    "validate_amount",
    # Quote
    "Quote",
    "get_quote",
    "get_best_case_amount_out",
    # Calculations
    "get_amount_in_by_price",
    "get_amount_out_by_price",
    "slippage_to_precision",
    "get_min_output_with_slippage",
    "get_max_input_with_slippage",
    "get_price_impact",
]
