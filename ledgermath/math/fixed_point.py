"""18-decimal fixed-point math.

FixedDecimal stores an unsigned 256-bit word `raw` denoting raw / 10^18.
Scaled multiply and divide go through mul_div_down/up so that the rounding
direction is always explicit.

exp() and ln() work on SignedInt rather than FixedDecimal, since their inputs
or outputs can be negative. Both take and return 18-decimal values, and both
evaluate a rational approximation in 96-bit fixed point internally. The
approximation constants below are reproduced bit for bit; changing any of
them, or the order of the additions, changes results.
"""

from __future__ import annotations

from decimal import Decimal
from typing import ClassVar, NamedTuple

import structlog

from ledgermath.config import DEFAULT_MATH_CONFIG, MathConfig
from ledgermath.constants import (
    ONE_18,
    SCALE,
    U8_BITS,
    U64_BITS,
    U128_BITS,
    U256_BITS,
)
from ledgermath.errors import Overflow, Undefined, Underflow, WordOverflow
from ledgermath.signed_int import SignedInt
from ledgermath.word import (
    check_width,
    log2_down,
    mul_div_down,
    mul_div_up,
    pow as pow_u256,
    try_mul_div_down,
    try_mul_div_up,
    wrapping_mul,
    wrapping_shl,
)

__all__ = [
    # Classes
    "FixedDecimal",
    "TryResult",
    # Functions
    "exp",
    "ln",
    # Constants
    "ONE_18",
    "SCALE",
    "EXP_MIN_INPUT",
    "EXP_MAX_INPUT",
]

logger = structlog.get_logger()

# =============================================================================
# exp / ln constants
# =============================================================================

# At or below this input e^x rounds to zero at 18 decimals
EXP_MIN_INPUT = -42139678854452767551

# At or above this input e^x does not fit in a signed 256-bit word
EXP_MAX_INPUT = 135305999368893231589

# ln(2) in 96-bit fixed point
LN2_Q96 = 54916777467707473351141471128

# Converts the 2^96 result to 18 decimals together with the final 195 - k shift
EXP_RESULT_FACTOR = 3822833074963236453042738258902158003155416615667

# ln result assembly: r * LN_R_FACTOR + k * LN_K_FACTOR + LN_OFFSET, then >> 174
LN_R_FACTOR = 1677202110996718588342820967067443963516166
LN_K_FACTOR = 16597577552685614221487285958193947469193820559219878177908093499208371
LN_OFFSET = 600920179829731861736702779321621459595472258049074101567377883020018308


# =============================================================================
# exp / ln
# =============================================================================


def exp(x: SignedInt) -> SignedInt:
    """Compute e^x where x is 18-decimal fixed-point.

    Args:
        x: Exponent in 18-decimal fixed-point (can be negative)

    Returns:
        e^x as 18-decimal fixed-point. Exactly zero for x <= EXP_MIN_INPUT.

    Raises:
        Overflow: If x >= EXP_MAX_INPUT
    """
    if x.lte(EXP_MIN_INPUT):
        return SignedInt.zero()

    if x.gte(EXP_MAX_INPUT):
        raise Overflow(f"exp argument {x.to_int()} at or above {EXP_MAX_INPUT}")

    # x * 2^96 / 10^18 == (x << 78) / 5^18
    x = x.shl(78).div(5**18)

    # Reduce: k = round(x / ln2), x -= k * ln2, leaving x in [-ln2/2, ln2/2]
    k = x.shl(96).div(LN2_Q96).add(1 << 95).shr(96)
    x = x.sub(k.mul(LN2_Q96))

    y = x.add(1346386616545796478920950773328)
    y = y.mul(x).shr(96).add(57155421227552351082224309758442)
    p = y.add(x).sub(94201549194550492254356042504812)
    p = p.mul(y).shr(96).add(28719021644029726153956944680412240)
    p = p.mul(x).add(4385272521454847904659076985693276 << 96)

    q = x.sub(2855989394907223263936484059900)
    q = q.mul(x).shr(96).add(50020603652535783019961831881945)
    q = q.mul(x).shr(96).sub(533845033583426703283633433725380)
    q = q.mul(x).shr(96).add(3604857256930695427073651918091429)
    q = q.mul(x).shr(96).sub(14423608567350463180887372962807573)
    q = q.mul(x).shr(96).add(26449188498355588339934803723976023)

    # q has no roots in the reduced domain; r lies in (0.09, 0.25) * 2^96
    r = p.div(q)

    # k is in [-61, 195], so the shift never goes negative
    return SignedInt(wrapping_mul(r.value, EXP_RESULT_FACTOR) >> (195 - k.to_int()))


def ln(x: SignedInt) -> SignedInt:
    """Compute ln(x) where x is 18-decimal fixed-point.

    Args:
        x: Input in 18-decimal fixed-point, must be strictly positive

    Returns:
        ln(x) as 18-decimal fixed-point (negative for x < 1e18)

    Raises:
        Undefined: If x is zero or negative
    """
    if x.is_negative() or x.is_zero():
        raise Undefined(f"ln undefined for {x.to_int()}")

    # x = 2^k * m with m in [1, 2) as 96-bit fixed point
    k = SignedInt.from_magnitude(log2_down(x.value)).sub(96)
    x = SignedInt(wrapping_shl(x.value, 159 - k.to_int()) >> 159)

    p = x.add(3273285459638523848632254066296)
    p = p.mul(x).shr(96).add(24828157081833163892658089445524)
    p = p.mul(x).shr(96).add(43456485725739037958740375743393)
    p = p.mul(x).shr(96).sub(11111509109440967052023855526967)
    p = p.mul(x).shr(96).sub(45023709667254063763336534515857)
    p = p.mul(x).shr(96).sub(14706773417378608786704636184526)
    p = p.mul(x).sub(795164235651350426258249787498 << 96)

    q = x.add(5573035233440673466300451813936)
    q = q.mul(x).shr(96).add(71694874799317883764090561454958)
    q = q.mul(x).shr(96).add(283447036172924575727196451306956)
    q = q.mul(x).shr(96).add(401686690394027663651624208769553)
    q = q.mul(x).shr(96).add(204048457590392012362485061816622)
    q = q.mul(x).shr(96).add(31853899698501571402653359427138)
    q = q.mul(x).shr(96).add(909429971244387300277376558375)

    r = p.div(q)

    r = r.mul(LN_R_FACTOR)
    r = r.add(k.mul(LN_K_FACTOR))
    r = r.add(LN_OFFSET)
    return r.shr(174)


# =============================================================================
# FixedDecimal
# =============================================================================


class TryResult(NamedTuple):
    """Outcome of a try_* operation. value is zero whenever ok is False."""

    ok: bool
    value: FixedDecimal


class FixedDecimal:
    """18-decimal fixed-point number stored as an unsigned 256-bit int.

    Example: 1.5 is stored as 1_500_000_000_000_000_000
    """

    ONE: ClassVar[int] = ONE_18

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int) -> None:
        """Create FixedDecimal from raw scaled value.

        Raises:
            WordOverflow: If value is negative or exceeds 2^256 - 1
        """
        self._value = check_width(value, U256_BITS, "raw value")

    @staticmethod
    def scale() -> int:
        """The fixed-point scale, 10^18."""
        return SCALE

    @property
    def value(self) -> int:
        """The raw scaled value."""
        return self._value

    def raw_value(self) -> int:
        return self._value

    def is_zero(self) -> bool:
        return self._value == 0

    # --- Construction from integers ---

    @classmethod
    def _from_integer(cls, n: int, bits: int) -> FixedDecimal:
        check_width(n, bits, "integer")
        raw = n * SCALE
        if raw.bit_length() > U256_BITS:
            raise WordOverflow(f"{n} * 10^18 exceeds u256 max")
        return cls(raw)

    @classmethod
    def from_u64(cls, n: int) -> FixedDecimal:
        """Create from a whole number (scaled by 10^18)."""
        return cls._from_integer(n, U64_BITS)

    @classmethod
    def from_u128(cls, n: int) -> FixedDecimal:
        return cls._from_integer(n, U128_BITS)

    @classmethod
    def from_u256(cls, n: int) -> FixedDecimal:
        return cls._from_integer(n, U256_BITS)

    @classmethod
    def from_raw_u64(cls, n: int) -> FixedDecimal:
        """Create from a raw value already scaled to 18 decimals."""
        return cls(check_width(n, U64_BITS, "raw value"))

    @classmethod
    def from_raw_u128(cls, n: int) -> FixedDecimal:
        return cls(check_width(n, U128_BITS, "raw value"))

    @classmethod
    def from_raw_u256(cls, n: int) -> FixedDecimal:
        return cls(check_width(n, U256_BITS, "raw value"))

    # --- Import from external precision (default rounding: up) ---

    @classmethod
    def _external_to_fixed(cls, n: int, decimals: int, bits: int) -> FixedDecimal:
        check_width(n, bits, "amount")
        return cls(mul_div_up(n, SCALE, _decimals_factor(decimals)))

    @classmethod
    def u64_to_fixed(cls, n: int, decimals: int) -> FixedDecimal:
        """Import an amount expressed with `decimals` decimals, rounding up.

        Args:
            n: Amount in external units (u64)
            decimals: Decimals of the external representation (u8)

        Returns:
            The amount in 18-decimal fixed-point
        """
        return cls._external_to_fixed(n, decimals, U64_BITS)

    @classmethod
    def u64_to_fixed_up(cls, n: int, decimals: int) -> FixedDecimal:
        return cls._external_to_fixed(n, decimals, U64_BITS)

    @classmethod
    def u128_to_fixed(cls, n: int, decimals: int) -> FixedDecimal:
        return cls._external_to_fixed(n, decimals, U128_BITS)

    @classmethod
    def u128_to_fixed_up(cls, n: int, decimals: int) -> FixedDecimal:
        return cls._external_to_fixed(n, decimals, U128_BITS)

    @classmethod
    def u256_to_fixed(cls, n: int, decimals: int) -> FixedDecimal:
        return cls._external_to_fixed(n, decimals, U256_BITS)

    @classmethod
    def u256_to_fixed_up(cls, n: int, decimals: int) -> FixedDecimal:
        return cls._external_to_fixed(n, decimals, U256_BITS)

    # --- Export to external precision (default rounding: down) ---

    def _to_external(self, decimals: int, bits: int, round_up: bool) -> int:
        factor = _decimals_factor(decimals)
        if round_up:
            result = mul_div_up(self._value, factor, SCALE)
        else:
            result = mul_div_down(self._value, factor, SCALE)
        return check_width(result, bits, "converted value")

    def to_u64(self, decimals: int) -> int:
        """Export to an integer with `decimals` decimals, rounding down.

        Raises:
            WordOverflow: If the result does not fit in 64 bits
        """
        return self._to_external(decimals, U64_BITS, round_up=False)

    def to_u64_up(self, decimals: int) -> int:
        """Export to an integer with `decimals` decimals, rounding up."""
        return self._to_external(decimals, U64_BITS, round_up=True)

    def to_u128(self, decimals: int) -> int:
        return self._to_external(decimals, U128_BITS, round_up=False)

    def to_u128_up(self, decimals: int) -> int:
        return self._to_external(decimals, U128_BITS, round_up=True)

    def to_u256(self, decimals: int) -> int:
        return self._to_external(decimals, U256_BITS, round_up=False)

    def to_u256_up(self, decimals: int) -> int:
        return self._to_external(decimals, U256_BITS, round_up=True)

    # --- Scaled arithmetic ---

    def mul_down(self, other: FixedDecimal) -> FixedDecimal:
        """Multiply with floor rounding: (a * b) // 10^18"""
        return FixedDecimal(mul_div_down(self._value, other._value, SCALE))

    def mul_up(self, other: FixedDecimal) -> FixedDecimal:
        """Multiply with ceiling rounding."""
        return FixedDecimal(mul_div_up(self._value, other._value, SCALE))

    def div_down(self, other: FixedDecimal) -> FixedDecimal:
        """Divide with floor rounding: (a * 10^18) // b

        Raises:
            DivisionByZero: If other is zero
        """
        return FixedDecimal(mul_div_down(self._value, SCALE, other._value))

    def div_up(self, other: FixedDecimal) -> FixedDecimal:
        """Divide with ceiling rounding.

        Raises:
            DivisionByZero: If other is zero
        """
        return FixedDecimal(mul_div_up(self._value, SCALE, other._value))

    def try_mul_down(
        self, other: FixedDecimal, *, config: MathConfig = DEFAULT_MATH_CONFIG
    ) -> TryResult:
        """mul_down that returns (False, 0) on overflow instead of raising."""
        ok, raw = try_mul_div_down(self._value, other._value, SCALE)
        return self._try_result("try_mul_down", ok, raw, other, config)

    def try_mul_up(
        self, other: FixedDecimal, *, config: MathConfig = DEFAULT_MATH_CONFIG
    ) -> TryResult:
        """mul_up that returns (False, 0) on overflow instead of raising."""
        ok, raw = try_mul_div_up(self._value, other._value, SCALE)
        return self._try_result("try_mul_up", ok, raw, other, config)

    def try_div_down(
        self, other: FixedDecimal, *, config: MathConfig = DEFAULT_MATH_CONFIG
    ) -> TryResult:
        """div_down that returns (False, 0) on overflow or zero divisor."""
        ok, raw = try_mul_div_down(self._value, SCALE, other._value)
        return self._try_result("try_div_down", ok, raw, other, config)

    def try_div_up(
        self, other: FixedDecimal, *, config: MathConfig = DEFAULT_MATH_CONFIG
    ) -> TryResult:
        """div_up that returns (False, 0) on overflow or zero divisor."""
        ok, raw = try_mul_div_up(self._value, SCALE, other._value)
        return self._try_result("try_div_up", ok, raw, other, config)

    def _try_result(
        self, op: str, ok: bool, raw: int, other: FixedDecimal, config: MathConfig
    ) -> TryResult:
        if not ok and config.log_soft_failures:
            logger.debug(
                "fixed_decimal_soft_failure",
                op=op,
                lhs=self._value,
                rhs=other._value,
            )
        return TryResult(ok, FixedDecimal(raw))

    # --- Unscaled arithmetic ---

    def add(self, other: FixedDecimal) -> FixedDecimal:
        """Add two values.

        Raises:
            WordOverflow: If the sum exceeds 2^256 - 1
        """
        return FixedDecimal(check_width(self._value + other._value, U256_BITS, "sum"))

    def sub(self, other: FixedDecimal) -> FixedDecimal:
        """Subtract other from self.

        Raises:
            Underflow: If other > self
        """
        result = self._value - other._value
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other._value} = {result}")
        return FixedDecimal(result)

    # --- Display ---

    def to_decimal(self) -> Decimal:
        """Convert to Decimal for display."""
        return Decimal(self._value).scaleb(-18)

    # --- Comparison ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FixedDecimal):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FixedDecimal):
            return NotImplemented
        return self._value < other._value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, FixedDecimal):
            return NotImplemented
        return self._value <= other._value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, FixedDecimal):
            return NotImplemented
        return self._value > other._value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, FixedDecimal):
            return NotImplemented
        return self._value >= other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self) -> str:
        return f"FixedDecimal({self._value})"

    def __str__(self) -> str:
        return str(self.to_decimal())


def _decimals_factor(decimals: int) -> int:
    """10^decimals for a u8 decimals count.

    Raises:
        WordOverflow: If decimals > 255 or 10^decimals exceeds u256
    """
    check_width(decimals, U8_BITS, "decimals")
    return pow_u256(10, decimals)
