"""Tests for unsigned 256-bit word primitives."""

import pytest

from ledgermath.constants import UINT256_MAX
from ledgermath.errors import DivisionByZero, WordOverflow
from ledgermath.word import (
    check_width,
    div_up,
    log2_down,
    mul_div_down,
    mul_div_up,
    pow,
    try_mul_div_down,
    try_mul_div_up,
    wrapping_add,
    wrapping_mul,
    wrapping_shl,
    wrapping_sub,
)


class TestCheckWidth:
    """Tests for check_width()."""

    @pytest.mark.parametrize("bits", [8, 16, 32, 64, 128, 256])
    def test_max_value_fits(self, bits):
        """2^bits - 1 is accepted."""
        assert check_width(2**bits - 1, bits) == 2**bits - 1

    @pytest.mark.parametrize("bits", [8, 16, 32, 64, 128, 256])
    def test_one_past_max_raises(self, bits):
        """2^bits is rejected."""
        with pytest.raises(WordOverflow, match=f"u{bits}"):
            check_width(2**bits, bits)

    def test_negative_raises(self):
        """Negative values are never valid words."""
        with pytest.raises(WordOverflow, match="negative"):
            check_width(-1, 256)

    def test_non_int_raises(self):
        """Floats, strings and bools are rejected."""
        with pytest.raises(TypeError):
            check_width("1", 256)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            check_width(True, 8)


class TestWrapping:
    """Tests for modular word arithmetic."""

    def test_add_wraps(self):
        assert wrapping_add(UINT256_MAX, 1) == 0
        assert wrapping_add(UINT256_MAX, 2) == 1

    def test_sub_wraps(self):
        assert wrapping_sub(0, 1) == UINT256_MAX

    def test_mul_wraps(self):
        assert wrapping_mul(2**255, 2) == 0
        assert wrapping_mul(UINT256_MAX, UINT256_MAX) == 1

    def test_shl(self):
        """Left shift drops bits past the word."""
        assert wrapping_shl(1, 255) == 2**255
        assert wrapping_shl(3, 255) == 2**255
        assert wrapping_shl(1, 256) == 0
        assert wrapping_shl(UINT256_MAX, 1000) == 0

    def test_shl_negative_raises(self):
        with pytest.raises(ValueError, match="negative"):
            wrapping_shl(1, -1)


class TestPow:
    """Tests for checked pow()."""

    def test_zero_to_zero_is_one(self):
        assert pow(0, 0) == 1

    def test_powers_of_ten(self):
        assert pow(10, 18) == 10**18
        assert pow(10, 77) == 10**77

    def test_overflow_raises(self):
        """10^78 does not fit in 256 bits."""
        with pytest.raises(WordOverflow):
            pow(10, 78)

    def test_largest_power_of_two(self):
        assert pow(2, 255) == 2**255
        with pytest.raises(WordOverflow):
            pow(2, 256)

    def test_one_to_any_power(self):
        assert pow(1, 2**64 - 1) == 1


class TestMulDiv:
    """Tests for mul_div_down / mul_div_up and their try_ variants."""

    def test_exact_division_agrees(self):
        assert mul_div_down(6, 7, 3) == 14
        assert mul_div_up(6, 7, 3) == 14

    def test_rounding_direction(self):
        """7 * 1 / 2 = 3.5 rounds to 3 and 4."""
        assert mul_div_down(7, 1, 2) == 3
        assert mul_div_up(7, 1, 2) == 4

    def test_intermediate_may_exceed_word(self):
        """Only the quotient must fit; the product may be 512 bits wide."""
        assert mul_div_down(UINT256_MAX, UINT256_MAX, UINT256_MAX) == UINT256_MAX
        assert mul_div_up(UINT256_MAX, UINT256_MAX, UINT256_MAX) == UINT256_MAX

    def test_quotient_overflow_raises(self):
        with pytest.raises(WordOverflow):
            mul_div_down(UINT256_MAX, 2, 1)
        with pytest.raises(WordOverflow):
            mul_div_up(UINT256_MAX, 2, 1)

    def test_zero_divisor_raises(self):
        with pytest.raises(DivisionByZero):
            mul_div_down(1, 1, 0)
        with pytest.raises(DivisionByZero):
            mul_div_up(1, 1, 0)

    def test_zero_product_rounds_to_zero(self):
        assert mul_div_up(0, 5, 3) == 0

    def test_try_success(self):
        assert try_mul_div_down(7, 1, 2) == (True, 3)
        assert try_mul_div_up(7, 1, 2) == (True, 4)

    def test_try_failures_return_zero(self):
        """Division by zero and overflow become (False, 0)."""
        assert try_mul_div_down(1, 1, 0) == (False, 0)
        assert try_mul_div_up(1, 1, 0) == (False, 0)
        assert try_mul_div_down(UINT256_MAX, 2, 1) == (False, 0)
        assert try_mul_div_up(UINT256_MAX, 2, 1) == (False, 0)


class TestMisc:
    """Tests for div_up and log2_down."""

    def test_div_up(self):
        assert div_up(701, 200) == 4
        assert div_up(800, 200) == 4
        assert div_up(0, 200) == 0

    def test_div_up_by_zero_raises(self):
        with pytest.raises(DivisionByZero):
            div_up(1, 0)

    @pytest.mark.parametrize(
        "x,expected",
        [(0, 0), (1, 0), (2, 1), (3, 1), (1024, 10), (UINT256_MAX, 255)],
    )
    def test_log2_down(self, x, expected):
        assert log2_down(x) == expected
