"""Deterministic 256-bit signed integer and 18-decimal fixed-point math.

No floating point is used anywhere in the arithmetic paths; identical inputs
give identical outputs on every interpreter.
"""

from ledgermath.errors import (
    DivisionByZero,
    NumericError,
    Overflow,
    Undefined,
    Underflow,
    WordOverflow,
)
from ledgermath.math.fixed_point import FixedDecimal, TryResult, exp, ln
from ledgermath.signed_int import I, Ordering, SignedInt

__all__ = [
    # Types
    "SignedInt",
    "I",
    "Ordering",
    "FixedDecimal",
    "TryResult",
    # Functions
    "exp",
    "ln",
    # Errors
    "NumericError",
    "DivisionByZero",
    "WordOverflow",
    "Underflow",
    "Overflow",
    "Undefined",
]
