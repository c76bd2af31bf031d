"""Fixed-point math for ledgermath.

This package provides:
- FixedDecimal: 18-decimal fixed-point arithmetic with explicit rounding
- exp, ln: 18-decimal exponential and logarithm on SignedInt
"""

from ledgermath.math.fixed_point import FixedDecimal, TryResult, exp, ln

__all__ = ["FixedDecimal", "TryResult", "exp", "ln"]
