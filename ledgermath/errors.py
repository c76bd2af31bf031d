"""Error classes for ledgermath.

Every hard failure is an ArithmeticError subclass so callers can catch the
whole family at once, or a single kind when they need to tell them apart.
"""


class NumericError(ArithmeticError):
    """Base class for ledgermath arithmetic errors."""

    pass


class DivisionByZero(NumericError):
    """Division or modulo by zero."""

    pass


class WordOverflow(NumericError):
    """Value does not fit in its declared unsigned width."""

    pass


class Underflow(NumericError):
    """Unsigned subtraction would produce a negative result."""

    pass


class Overflow(NumericError):
    """exp argument is at or above the overflow threshold."""

    pass


class Undefined(NumericError):
    """ln of a zero or negative argument."""

    pass
