"""Pydantic field types for ledgermath values.

These let higher-level models carry 256-bit values as decimal strings on the
wire while working with SignedInt / FixedDecimal in code:

    class Position(BaseModel):
        size: FixedDecimalField
        pnl: SignedIntField
"""

from typing import Annotated, Any

from pydantic import Field, PlainSerializer, PlainValidator

from ledgermath.errors import WordOverflow
from ledgermath.math.fixed_point import FixedDecimal
from ledgermath.signed_int import SignedInt


def validate_signed_int(value: Any) -> SignedInt:
    """Validate an int, signed decimal string or SignedInt into a SignedInt.

    Raises:
        ValueError: If value is not an integer within the int256 range
    """
    if isinstance(value, SignedInt):
        return value
    int_value = _parse_int(value, "SignedInt")
    try:
        return SignedInt.from_int(int_value)
    except WordOverflow as err:
        raise ValueError(str(err)) from err


def validate_fixed_decimal(value: Any) -> FixedDecimal:
    """Validate a raw int, raw decimal string or FixedDecimal into a FixedDecimal.

    The input is the raw 18-decimal value, not the display value: "1500000000000000000"
    is 1.5.

    Raises:
        ValueError: If value is not an integer within the uint256 range
    """
    if isinstance(value, FixedDecimal):
        return value
    int_value = _parse_int(value, "FixedDecimal")
    try:
        return FixedDecimal(int_value)
    except WordOverflow as err:
        raise ValueError(str(err)) from err


def _parse_int(value: Any, what: str) -> int:
    # bool would silently become 0 / 1
    if isinstance(value, bool):
        raise ValueError(f"{what} must be string or int, got bool")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise ValueError(f"{what} must be string or int, got {type(value).__name__}")
    try:
        return int(value)
    except ValueError as err:
        raise ValueError(f"{what} must be a decimal integer string: '{value}'") from err


# Signed 256-bit integer, serialized as signed decimal string
SignedIntField = Annotated[
    SignedInt,
    PlainValidator(validate_signed_int),
    PlainSerializer(lambda v: str(v.to_int()), return_type=str),
    Field(description="256-bit two's-complement integer as signed decimal string"),
]

# 18-decimal fixed-point, serialized as its raw decimal string
FixedDecimalField = Annotated[
    FixedDecimal,
    PlainValidator(validate_fixed_decimal),
    PlainSerializer(lambda v: str(v.value), return_type=str),
    Field(description="18-decimal fixed-point raw value as decimal string"),
]
