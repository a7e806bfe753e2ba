"""Fee model for the DLMM quoter.

This package provides:
- Base, variable and total fee rates for a pair (PRECISION units, 1e9 = 100%)
- Amount-inclusive and amount-exclusive fee arithmetic
- Protocol fee share
- A percentage summary of a pair's fees

Usage:
    from dlmm.fees import get_total_fee, get_fee_amount

    fee = get_total_fee(pair, tracker.volatility_accumulator)
    fee_amount = get_fee_amount(amount_in, fee)
"""

from dlmm.fees.calculator import (
    get_base_fee,
    get_fee_amount,
    get_fee_for_amount,
    get_protocol_fee,
    get_total_fee,
    get_variable_fee,
)
from dlmm.fees.metadata import FeeMetadata, get_fee_metadata

__all__ = [
    # Calculator
    "get_base_fee",
    "get_variable_fee",
    "get_total_fee",
    "get_fee_amount",
    "get_fee_for_amount",
    "get_protocol_fee",
    # Metadata
    "FeeMetadata",
    "get_fee_metadata",
]
