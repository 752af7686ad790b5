"""Decimal context, working contexts and final rounding.

All arithmetic runs in a copy of DECIMATH_CONTEXT (ROUND_HALF_UP, traps for
InvalidOperation/DivisionByZero/Overflow). The thread-local context of the
caller is never consulted.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP as _ROUND_HALF_UP
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
)
from typing import Final

DECIMATH_CONTEXT = Context(
    prec=28,
    rounding=_ROUND_HALF_UP,
    Emin=-999999,
    Emax=999999,
    capitals=1,
    clamp=0,
    flags=[],
    traps=[InvalidOperation, DivisionByZero, Overflow],
)

ZERO: Final = Decimal(0)
ONE: Final = Decimal(1)
TWO: Final = Decimal(2)
HALF: Final = Decimal("0.5")


def working_context(precision: int) -> Context:
    """DECIMATH_CONTEXT with prec set to the given number of digits."""
    ctx = DECIMATH_CONTEXT.copy()
    ctx.prec = precision
    return ctx


def power_of_ten(exponent: int) -> Decimal:
    """Exact 10**exponent, built from its tuple form (no context rounding)."""
    return Decimal((0, (1,), exponent))


def integer_digits(value: Decimal) -> int:
    """Number of digits before the decimal point of |value| (0 when |value| < 1)."""
    return max(0, value.adjusted() + 1)


def int_digits(value: int) -> int:
    """Number of decimal digits of |value|, with no int-to-str conversion."""
    return Decimal(value).adjusted() + 1


def is_integral(value: Decimal) -> bool:
    return value == value.to_integral_value()


def round_significant(value: Decimal, digits: int) -> Decimal:
    """Round half-up to exactly ``digits`` significant digits.

    Trailing zeros are kept, so Decimal(2) at 10 digits is 2.000000000.
    An exact zero is returned as Decimal(0).
    """
    if value.is_zero():
        return ZERO
    ctx = working_context(digits + 2)
    exponent = value.adjusted() - digits + 1
    rounded = value.quantize(power_of_ten(exponent), rounding=_ROUND_HALF_UP, context=ctx)
    if len(rounded.as_tuple().digits) > digits:
        # carry into a new leading digit (9.99.. -> 10.0..): drop one place
        rounded = rounded.quantize(power_of_ten(exponent + 1), rounding=_ROUND_HALF_UP, context=ctx)
    return rounded


def significant_digits(value: Decimal) -> int:
    """Length of the coefficient, trailing zeros included."""
    return len(value.as_tuple().digits)
