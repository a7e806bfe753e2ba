"""DLMM error classes.

Every failure the quoting engine can raise derives from DLMMError. None of
these are transient: they describe malformed inputs, trades the pool cannot
fill within protocol limits, or arithmetic contract violations.
"""


class DLMMError(Exception):
    """Base error for DLMM quoting operations."""

    pass


class InvalidParameter(DLMMError, ValueError):
    """A caller-supplied parameter is out of range (bin step, price, amount, slippage)."""

    pass


class ZeroAmount(InvalidParameter):
    """Trade amount must be positive."""

    pass


class InvalidSlippage(InvalidParameter):
    """Slippage percent must be in range [0, 100)."""

    pass


class BinNotFound(DLMMError, LookupError):
    """Requested bin id lies outside the loaded bin array window."""

    pass


class BinArrayIndexMismatch(DLMMError):
    """Bin arrays handed to a range are not contiguous or are malformed."""

    pass


class SwapCrossesTooManyBins(DLMMError):
    """Trade cannot be filled within MAX_BIN_CROSSINGS bins - quote aborted."""

    pass


class PairNotFound(DLMMError, LookupError):
    """Snapshot source has no pair state for the requested pair id."""

    pass


class DLMMMathError(DLMMError, ArithmeticError):
    """Base class for fixed-point arithmetic contract violations.

    These indicate a bug in the caller or the engine, never a valid pool state.
    """

    pass


class DivisionByZero(DLMMMathError):
    """Division or modulo by zero."""

    pass


class InvalidRoundingMode(DLMMMathError):
    """Rounding mode is neither 'up' nor 'down'."""

    pass


class Underflow(DLMMMathError):
    """Subtraction would produce a negative unsigned result."""

    pass


class Overflow(DLMMMathError):
    """Value does not fit the unsigned width the on-chain program uses."""

    pass
