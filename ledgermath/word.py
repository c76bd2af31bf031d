"""Unsigned 256-bit word primitives.

Python integers are unbounded, so every fixed-width behavior is explicit here:
- wrapping_* helpers reduce modulo 2^256
- checked helpers raise WordOverflow instead of growing past 256 bits
- mul_div_* use an exact (unbounded) intermediate product, which is what a
  512-bit intermediate would give, and only check the final quotient

Usage pattern:
    from ledgermath.word import mul_div_down, check_width

    def to_shares(amount: int, supply: int, assets: int) -> int:
        check_width(amount, 256, "amount")
        return mul_div_down(amount, supply, assets)  # Raises if assets == 0
"""

from __future__ import annotations

from ledgermath.constants import UINT256_MAX, WORD_BITS
from ledgermath.errors import DivisionByZero, WordOverflow

__all__ = [
    "check_width",
    "wrapping_add",
    "wrapping_sub",
    "wrapping_mul",
    "wrapping_shl",
    "pow",
    "div_up",
    "mul_div_down",
    "mul_div_up",
    "try_mul_div_down",
    "try_mul_div_up",
    "log2_down",
]


def check_width(value: int, bits: int, what: str = "value") -> int:
    """Validate that value is an unsigned integer of at most `bits` bits.

    Args:
        value: Integer to validate
        bits: Declared width (8, 16, 32, 64, 128 or 256)
        what: Name used in error messages

    Returns:
        The value unchanged

    Raises:
        TypeError: If value is not an int
        WordOverflow: If value is negative or needs more than `bits` bits
    """
    # bool is an int subclass but never a meaningful word
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{what} must be int, got {type(value).__name__}")
    if value < 0:
        raise WordOverflow(f"{what} cannot be negative for u{bits}: {value}")
    if value >> bits:
        raise WordOverflow(f"{what} exceeds u{bits} max: {value}")
    return value


def wrapping_add(a: int, b: int) -> int:
    """(a + b) mod 2^256."""
    return (a + b) & UINT256_MAX


def wrapping_sub(a: int, b: int) -> int:
    """(a - b) mod 2^256."""
    return (a - b) & UINT256_MAX


def wrapping_mul(a: int, b: int) -> int:
    """(a * b) mod 2^256."""
    return (a * b) & UINT256_MAX


def wrapping_shl(a: int, n: int) -> int:
    """(a << n) mod 2^256. Shifting by the word width or more yields 0."""
    if n < 0:
        raise ValueError(f"Shift amount cannot be negative: {n}")
    if n >= WORD_BITS:
        return 0
    return (a << n) & UINT256_MAX


def pow(base: int, exponent: int) -> int:
    """Checked unsigned power. pow(0, 0) == 1.

    Raises:
        WordOverflow: If the result exceeds 2^256 - 1
    """
    orig_base, orig_exponent = base, exponent
    result = 1
    while exponent > 0:
        if exponent & 1:
            result *= base
            if result > UINT256_MAX:
                raise WordOverflow(f"pow overflow: {orig_base}^{orig_exponent}")
        exponent >>= 1
        if exponent:
            base *= base
            # A higher exponent bit is still set, so this square reaches the result
            if base > UINT256_MAX:
                raise WordOverflow(f"pow overflow: {orig_base}^{orig_exponent}")
    return result


def div_up(a: int, b: int) -> int:
    """Unsigned ceiling division.

    Raises:
        DivisionByZero: If b is zero
    """
    if b == 0:
        raise DivisionByZero(f"Ceiling division by zero: {a}")
    if a == 0:
        return 0
    return (a - 1) // b + 1


def mul_div_down(a: int, b: int, c: int) -> int:
    """floor(a * b / c) with an exact intermediate product.

    Raises:
        DivisionByZero: If c is zero
        WordOverflow: If the quotient does not fit in 256 bits
    """
    if c == 0:
        raise DivisionByZero(f"mul_div_down by zero: {a} * {b} / 0")
    result = (a * b) // c
    if result > UINT256_MAX:
        raise WordOverflow(f"mul_div_down result exceeds u256 max: {a} * {b} / {c}")
    return result


def mul_div_up(a: int, b: int, c: int) -> int:
    """ceil(a * b / c) with an exact intermediate product.

    Raises:
        DivisionByZero: If c is zero
        WordOverflow: If the quotient does not fit in 256 bits
    """
    if c == 0:
        raise DivisionByZero(f"mul_div_up by zero: {a} * {b} / 0")
    product = a * b
    if product == 0:
        return 0
    result = (product - 1) // c + 1
    if result > UINT256_MAX:
        raise WordOverflow(f"mul_div_up result exceeds u256 max: {a} * {b} / {c}")
    return result


def try_mul_div_down(a: int, b: int, c: int) -> tuple[bool, int]:
    """Like mul_div_down, returning (False, 0) instead of raising."""
    if c == 0:
        return (False, 0)
    result = (a * b) // c
    if result > UINT256_MAX:
        return (False, 0)
    return (True, result)


def try_mul_div_up(a: int, b: int, c: int) -> tuple[bool, int]:
    """Like mul_div_up, returning (False, 0) instead of raising."""
    if c == 0:
        return (False, 0)
    product = a * b
    if product == 0:
        return (True, 0)
    result = (product - 1) // c + 1
    if result > UINT256_MAX:
        return (False, 0)
    return (True, result)


def log2_down(x: int) -> int:
    """Floor of log2(x), i.e. the index of the most significant set bit.

    log2_down(0) is defined as 0.
    """
    if x == 0:
        return 0
    return x.bit_length() - 1
