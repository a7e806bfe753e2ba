"""Mathematical utilities for the DLMM quoter.

This package provides the fixed-point primitives used by every pool-affecting
computation:
- mul_div / mul_shift_right / shift_left_div with explicit rounding
- pow_q64: Q64.64 exponentiation for the bin price ladder
"""

from dlmm.math.fixed_point import (
    Rounding,
    div_rem,
    mul_div,
    mul_shift_right,
    pow_q64,
    shift_left_div,
)

__all__ = [
    "Rounding",
    "div_rem",
    "mul_div",
    "mul_shift_right",
    "shift_left_div",
    "pow_q64",
]
