"""Tests for pydantic field types."""

import pytest
from pydantic import BaseModel, ValidationError

from ledgermath.constants import UINT256_MAX
from ledgermath.math.fixed_point import FixedDecimal
from ledgermath.signed_int import SignedInt
from ledgermath.types import FixedDecimalField, SignedIntField


class Position(BaseModel):
    size: FixedDecimalField
    pnl: SignedIntField


class TestSignedIntField:
    """Tests for SignedIntField."""

    def test_parses_signed_string(self):
        p = Position(size=0, pnl="-42")
        assert isinstance(p.pnl, SignedInt)
        assert p.pnl == -42

    def test_accepts_int(self):
        assert Position(size=0, pnl=-(2**255)).pnl == SignedInt.negative_from_magnitude(2**255)

    def test_accepts_instance(self):
        value = SignedInt.negative_from_magnitude(7)
        assert Position(size=0, pnl=value).pnl is value

    @pytest.mark.parametrize("bad", [str(2**255), -(2**255) - 1, "1.5", 1.5, True, None, "abc"])
    def test_rejects_invalid(self, bad):
        with pytest.raises(ValidationError):
            Position(size=0, pnl=bad)


class TestFixedDecimalField:
    """Tests for FixedDecimalField."""

    def test_raw_value_input(self):
        """Input is the raw 18-decimal value, not the display value."""
        p = Position(size="1500000000000000000", pnl=0)
        assert p.size == FixedDecimal(1_500_000_000_000_000_000)

    def test_max(self):
        assert Position(size=str(UINT256_MAX), pnl=0).size.value == UINT256_MAX

    @pytest.mark.parametrize("bad", ["-1", -1, UINT256_MAX + 1, "1.5", False])
    def test_rejects_invalid(self, bad):
        with pytest.raises(ValidationError):
            Position(size=bad, pnl=0)


class TestSerialization:
    """Values travel as decimal strings."""

    def test_model_dump(self):
        p = Position(size=FixedDecimal.from_u64(2), pnl=-5)
        assert p.model_dump() == {"size": "2000000000000000000", "pnl": "-5"}

    def test_json_roundtrip(self):
        p = Position(size=UINT256_MAX, pnl=-(2**200))
        assert Position.model_validate_json(p.model_dump_json()) == p
