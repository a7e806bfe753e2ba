"""Shared type definitions for the DLMM wire models.

On-chain integers (u64 reserves and amounts, u128 supplies) are carried as
decimal strings so JSON clients never lose precision.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from dlmm.constants import U64_MAX, U128_MAX


def _validate_uint(value: Any, max_value: int, name: str) -> str:
    """Validate that a value is an unsigned integer within `max_value`.

    Args:
        value: Value to validate (string or int)
        max_value: Largest allowed value
        name: Type name for error messages

    Returns:
        Canonical decimal string

    Raises:
        ValueError: If value is not a non-negative integer within range
    """
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool):
        raise ValueError(f"{name} must be string or int, got bool")

    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"{name} must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"{name} must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"{name} cannot be negative: {value}")
    if int_value > max_value:
        raise ValueError(f"{name} overflow: {value} > {max_value}")

    return str(int_value)


def validate_u64(value: Any) -> str:
    """Validate a 64-bit unsigned integer given as string or int."""
    return _validate_uint(value, U64_MAX, "U64")


def validate_u128(value: Any) -> str:
    """Validate a 128-bit unsigned integer given as string or int."""
    return _validate_uint(value, U128_MAX, "U128")


# 64-bit unsigned integer as decimal string (validated)
U64 = Annotated[
    str,
    BeforeValidator(validate_u64),
    Field(description="64-bit unsigned integer as decimal string"),
]

# 128-bit unsigned integer as decimal string (validated)
U128 = Annotated[
    str,
    BeforeValidator(validate_u128),
    Field(description="128-bit unsigned integer as decimal string"),
]

# Opaque pair identifier (e.g. a base58 account address)
PairId = Annotated[str, Field(min_length=1, max_length=128)]


__all__ = ["U64", "U128", "PairId", "validate_u64", "validate_u128"]
