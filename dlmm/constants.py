"""Protocol constants for the DLMM quoting engine.

These values form the contract with the on-chain liquidity book program and
must not drift from it.
"""

# Reference bin id: price 1.0 (before decimal adjustment) lives at 2^23
ACTIVE_ID = 8_388_608

# Bins per bin array account
BIN_ARRAY_SIZE = 256

# Maximum number of bins a single swap may visit before the quote is aborted
MAX_BIN_CROSSINGS = 30

# Basis points denominator (bin step, protocol share, reduction factor)
BASIS_POINT_MAX = 10_000

# Fee precision: a fee of PRECISION means 100%
PRECISION = 1_000_000_000

# Variable fee denominator: (volatility * bin_step)^2 * control / VARIABLE_FEE_PRECISION
VARIABLE_FEE_PRECISION = 100_000_000_000

# Q64.64 fixed-point price scale
SCALE_OFFSET = 64
ONE = 1 << SCALE_OFFSET

# Integer widths used by the on-chain program
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1

# Binary exponentiation in Q64.64 only supports |exponent| < 2^19
MAX_EXPONENTIAL = 0x80000

# Bin step bounds accepted by the price converter (basis points)
MIN_BIN_STEP = 1
MAX_BIN_STEP = BASIS_POINT_MAX

# Bin ids are unsigned 24-bit, centred on ACTIVE_ID
MIN_BIN_ID = 0
MAX_BIN_ID = 2**24 - 1
