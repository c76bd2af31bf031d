"""Two's-complement signed 256-bit integer.

This module provides SignedInt, a value type that stores a single 256-bit
word and interprets it as two's complement:
- add, sub, mul and shl wrap modulo 2^256 (no overflow check)
- div truncates toward zero on the magnitudes, then reapplies the sign
- div_up rounds the magnitude up, then reapplies the sign
- mod follows the sign of the dividend
- shr is arithmetic (sign-extending)

Usage pattern:
    from ledgermath.signed_int import SignedInt, I

    def spread(bid: int, ask: int) -> SignedInt:
        return I.from_magnitude(ask) - I.from_magnitude(bid)

A magnitude >= 2^255 passed to from_magnitude() sets the top bit, and every
sign-dependent operation will then read it as negative. This aliasing is
part of the word representation and is not checked.
"""

from __future__ import annotations

from enum import IntEnum

from ledgermath.constants import (
    INT256_MAX,
    INT256_MIN,
    SIGN_BIT,
    U8_BITS,
    U16_BITS,
    U32_BITS,
    U64_BITS,
    U128_BITS,
    U256_BITS,
    UINT256_MAX,
    WORD_BITS,
)
from ledgermath.errors import DivisionByZero, WordOverflow
from ledgermath.word import (
    check_width,
    div_up,
    wrapping_add,
    wrapping_mul,
    wrapping_shl,
    wrapping_sub,
)
from ledgermath.word import pow as pow_u256


class Ordering(IntEnum):
    """Result of SignedInt.compare()."""

    LESS_THAN = 0
    EQUAL = 1
    GREATER_THAN = 2


class SignedInt:
    """256-bit two's-complement integer.

    The raw word is always kept in [0, 2^256). All operations return new
    instances; there is no way to mutate a SignedInt after construction.

    Attributes:
        value: The raw two's-complement word (read-only)
    """

    __slots__ = ("_bits",)
    _bits: int

    def __init__(self, bits: int) -> None:
        """Create a SignedInt from a raw 256-bit word.

        Prefer from_magnitude(), negative_from_magnitude() or from_int().

        Raises:
            TypeError: If bits is not an int
            WordOverflow: If bits is not a valid 256-bit word
        """
        self._bits = check_width(bits, U256_BITS, "word")

    # --- Constructors ---

    @classmethod
    def zero(cls) -> SignedInt:
        """Create a SignedInt with value 0."""
        return cls(0)

    @classmethod
    def one(cls) -> SignedInt:
        """Create a SignedInt with value 1."""
        return cls(1)

    @classmethod
    def from_magnitude(cls, magnitude: int) -> SignedInt:
        """Create a non-negative value from an unsigned 256-bit magnitude.

        Magnitudes >= 2^255 alias to negative values (see module docstring).
        """
        return cls(check_width(magnitude, U256_BITS, "magnitude"))

    @classmethod
    def negative_from_magnitude(cls, magnitude: int) -> SignedInt:
        """Create -magnitude, i.e. the two's-complement negation of magnitude."""
        check_width(magnitude, U256_BITS, "magnitude")
        return cls(wrapping_sub(0, magnitude))

    @classmethod
    def from_int(cls, value: int) -> SignedInt:
        """Create from a Python signed int in [-2^255, 2^255 - 1].

        Raises:
            TypeError: If value is not an int
            WordOverflow: If value is outside the signed 256-bit range
        """
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"SignedInt requires int, got {type(value).__name__}")
        if value < INT256_MIN or value > INT256_MAX:
            raise WordOverflow(f"Value outside int256 range: {value}")
        return cls(value & UINT256_MAX)

    @classmethod
    def from_str(cls, s: str) -> SignedInt:
        """Parse a signed decimal string.

        Raises:
            ValueError: If string is not a valid integer
            WordOverflow: If value is outside the signed 256-bit range
        """
        return cls.from_int(int(s))

    # --- Accessors and predicates ---

    @property
    def value(self) -> int:
        """The raw two's-complement word."""
        return self._bits

    def is_zero(self) -> bool:
        return self._bits == 0

    def is_negative(self) -> bool:
        """True if the top bit is set."""
        return bool(self._bits & SIGN_BIT)

    def is_positive(self) -> bool:
        """True if the top bit is clear. Zero counts as positive."""
        return not self._bits & SIGN_BIT

    def sign(self) -> int:
        """Return -1, 0 or 1."""
        if self._bits == 0:
            return 0
        return -1 if self.is_negative() else 1

    def magnitude(self) -> int:
        """Unsigned magnitude |self| as a plain int."""
        if self.is_negative():
            return wrapping_sub(0, self._bits)
        return self._bits

    def to_int(self) -> int:
        """Convert to a Python signed int."""
        if self._bits & SIGN_BIT:
            return self._bits - (1 << WORD_BITS)
        return self._bits

    # --- Comparison ---

    def compare(self, other: SignedInt | int) -> Ordering:
        """Three-way signed comparison."""
        a = self.to_int()
        b = _coerce(other).to_int()
        if a == b:
            return Ordering.EQUAL
        return Ordering.LESS_THAN if a < b else Ordering.GREATER_THAN

    def eq(self, other: SignedInt | int) -> bool:
        return self._bits == _coerce(other)._bits

    def lt(self, other: SignedInt | int) -> bool:
        return self.compare(other) is Ordering.LESS_THAN

    def lte(self, other: SignedInt | int) -> bool:
        return self.compare(other) is not Ordering.GREATER_THAN

    def gt(self, other: SignedInt | int) -> bool:
        return self.compare(other) is Ordering.GREATER_THAN

    def gte(self, other: SignedInt | int) -> bool:
        return self.compare(other) is not Ordering.LESS_THAN

    def min(self, other: SignedInt | int) -> SignedInt:
        """Return the smaller of self and other."""
        other = _coerce(other)
        return other if other.lt(self) else self

    def max(self, other: SignedInt | int) -> SignedInt:
        """Return the larger of self and other."""
        other = _coerce(other)
        return other if other.gt(self) else self

    # --- Ring arithmetic (wrapping) ---

    def add(self, other: SignedInt | int) -> SignedInt:
        """Wrapping addition modulo 2^256."""
        return SignedInt(wrapping_add(self._bits, _coerce(other)._bits))

    def sub(self, other: SignedInt | int) -> SignedInt:
        """Wrapping subtraction modulo 2^256."""
        return SignedInt(wrapping_sub(self._bits, _coerce(other)._bits))

    def mul(self, other: SignedInt | int) -> SignedInt:
        """Wrapping multiplication modulo 2^256.

        The sign is correct whenever the true product fits in 256 bits.
        """
        return SignedInt(wrapping_mul(self._bits, _coerce(other)._bits))

    def neg(self) -> SignedInt:
        """Two's-complement negation. -0 == 0."""
        return SignedInt(wrapping_sub(0, self._bits))

    def abs(self) -> SignedInt:
        """Absolute value.

        -2^255 has no positive counterpart and maps to itself.
        """
        if self.is_negative():
            return self.neg()
        return self

    def pow(self, exponent: int) -> SignedInt:
        """Raise to an unsigned 64-bit power.

        pow(0, 0) == 1. The result is negative iff self is negative and
        exponent is odd.

        Raises:
            WordOverflow: If the result is outside the signed 256-bit range
        """
        check_width(exponent, U64_BITS, "exponent")
        negative = self.is_negative() and exponent & 1 == 1
        magnitude = pow_u256(self.magnitude(), exponent)
        # -2^255 is representable, +2^255 is not
        limit = SIGN_BIT if negative else INT256_MAX
        if magnitude > limit:
            raise WordOverflow(f"pow overflow: {self.to_int()}^{exponent} outside int256 range")
        return _with_sign(magnitude, negative)

    # --- Division ---

    def div(self, other: SignedInt | int) -> SignedInt:
        """Signed division: truncated magnitude quotient with sign(a) xor sign(b).

        Raises:
            DivisionByZero: If other is zero
        """
        other = _coerce(other)
        if other._bits == 0:
            raise DivisionByZero(f"Division by zero: {self.to_int()} / 0")
        quotient = self.magnitude() // other.magnitude()
        return _with_sign(quotient, self.is_negative() != other.is_negative())

    def div_up(self, other: SignedInt | int) -> SignedInt:
        """Signed division rounding the magnitude up.

        The sign is reapplied afterwards, so 701 / -200 gives -4.

        Raises:
            DivisionByZero: If other is zero
        """
        other = _coerce(other)
        if other._bits == 0:
            raise DivisionByZero(f"Division by zero: {self.to_int()} / 0")
        quotient = div_up(self.magnitude(), other.magnitude())
        return _with_sign(quotient, self.is_negative() != other.is_negative())

    def mod(self, other: SignedInt | int) -> SignedInt:
        """Truncated remainder: same sign as self, magnitude |self| mod |other|.

        Raises:
            DivisionByZero: If other is zero
        """
        other = _coerce(other)
        if other._bits == 0:
            raise DivisionByZero(f"Modulo by zero: {self.to_int()} % 0")
        remainder = self.magnitude() % other.magnitude()
        return _with_sign(remainder, self.is_negative())

    # --- Shifts ---

    def shl(self, n: int) -> SignedInt:
        """Wrapping left shift of the raw word."""
        return SignedInt(wrapping_shl(self._bits, n))

    def shr(self, n: int) -> SignedInt:
        """Arithmetic right shift (floor division by 2^n).

        Shifting by 256 or more gives 0 for non-negative values and -1 for
        negative ones.
        """
        if n < 0:
            raise ValueError(f"Shift amount cannot be negative: {n}")
        return SignedInt((self.to_int() >> n) & UINT256_MAX)

    # --- Bitwise ---

    def and_(self, other: SignedInt | int) -> SignedInt:
        return SignedInt(self._bits & _coerce(other)._bits)

    def or_(self, other: SignedInt | int) -> SignedInt:
        return SignedInt(self._bits | _coerce(other)._bits)

    def xor(self, other: SignedInt | int) -> SignedInt:
        return SignedInt(self._bits ^ _coerce(other)._bits)

    def not_(self) -> SignedInt:
        return SignedInt(self._bits ^ UINT256_MAX)

    # --- Truncation ---

    def truncate_to_u8(self) -> int:
        return self._bits & ((1 << U8_BITS) - 1)

    def truncate_to_u16(self) -> int:
        return self._bits & ((1 << U16_BITS) - 1)

    def truncate_to_u32(self) -> int:
        return self._bits & ((1 << U32_BITS) - 1)

    def truncate_to_u64(self) -> int:
        return self._bits & ((1 << U64_BITS) - 1)

    def truncate_to_u128(self) -> int:
        return self._bits & ((1 << U128_BITS) - 1)

    # --- exp / ln (2^96 rational approximations) ---

    def exp(self) -> SignedInt:
        """See ledgermath.math.fixed_point.exp."""
        from ledgermath.math.fixed_point import exp

        return exp(self)

    def ln(self) -> SignedInt:
        """See ledgermath.math.fixed_point.ln."""
        from ledgermath.math.fixed_point import ln

        return ln(self)

    # --- Operators ---

    def __add__(self, other: SignedInt | int) -> SignedInt:
        return self.add(other)

    def __radd__(self, other: int) -> SignedInt:
        return _coerce(other).add(self)

    def __sub__(self, other: SignedInt | int) -> SignedInt:
        return self.sub(other)

    def __rsub__(self, other: int) -> SignedInt:
        return _coerce(other).sub(self)

    def __mul__(self, other: SignedInt | int) -> SignedInt:
        return self.mul(other)

    def __rmul__(self, other: int) -> SignedInt:
        return _coerce(other).mul(self)

    def __truediv__(self, other: object) -> SignedInt:
        raise TypeError("SignedInt has no '/' operator; use div() or div_up()")

    def __floordiv__(self, other: object) -> SignedInt:
        raise TypeError("SignedInt has no '//' operator; div() truncates toward zero")

    def __mod__(self, other: object) -> SignedInt:
        raise TypeError("SignedInt has no '%' operator; mod() follows the dividend sign")

    def __neg__(self) -> SignedInt:
        return self.neg()

    def __pos__(self) -> SignedInt:
        return self

    def __abs__(self) -> SignedInt:
        return self.abs()

    def __invert__(self) -> SignedInt:
        return self.not_()

    def __lshift__(self, n: int) -> SignedInt:
        return self.shl(n)

    def __rshift__(self, n: int) -> SignedInt:
        return self.shr(n)

    def __and__(self, other: SignedInt | int) -> SignedInt:
        return self.and_(other)

    def __or__(self, other: SignedInt | int) -> SignedInt:
        return self.or_(other)

    def __xor__(self, other: SignedInt | int) -> SignedInt:
        return self.xor(other)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SignedInt):
            return self._bits == other._bits
        if isinstance(other, int) and not isinstance(other, bool):
            return self.to_int() == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: SignedInt | int) -> bool:
        return self.lt(other)

    def __le__(self, other: SignedInt | int) -> bool:
        return self.lte(other)

    def __gt__(self, other: SignedInt | int) -> bool:
        return self.gt(other)

    def __ge__(self, other: SignedInt | int) -> bool:
        return self.gte(other)

    def __hash__(self) -> int:
        # Must agree with __eq__ against plain ints
        return hash(self.to_int())

    def __int__(self) -> int:
        return self.to_int()

    def __bool__(self) -> bool:
        return self._bits != 0

    def __repr__(self) -> str:
        return f"SignedInt({self.to_int()})"

    def __str__(self) -> str:
        return str(self.to_int())


def _coerce(x: SignedInt | int) -> SignedInt:
    """Accept a SignedInt or a Python signed int."""
    if isinstance(x, SignedInt):
        return x
    return SignedInt.from_int(x)


def _with_sign(magnitude: int, negative: bool) -> SignedInt:
    """Build a SignedInt from an unsigned magnitude and a sign flag."""
    if negative:
        return SignedInt(wrapping_sub(0, magnitude))
    return SignedInt(magnitude & UINT256_MAX)


# Convenience alias for concise code
I = SignedInt  # noqa: E741
