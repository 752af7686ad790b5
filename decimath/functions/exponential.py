"""Exponential, logarithm and power functions."""

from __future__ import annotations

from decimal import Decimal, localcontext

from decimath.core.context import (
    ONE,
    ZERO,
    int_digits,
    integer_digits,
    is_integral,
    working_context,
)
from decimath.core.errors import DecimalResult, domain_error, range_error
from decimath.core.precision import FunctionTag
from decimath.core.result import Err, Ok
from decimath.functions._dispatch import evaluate, resolve_cache
from decimath.numeric.constants import ConstantCache
from decimath.numeric.kernels import exp_kernel, expm1_kernel, ln_kernel, log1p_kernel

_QUOTIENT_EXTRA_DIGITS = 2


def exp(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    c = resolve_cache(cache)
    return evaluate(FunctionTag.EXP, precision, (x,), lambda w: exp_kernel(x, w, c))


def expm1(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    """exp(x) - 1, accurate for x near 0."""
    c = resolve_cache(cache)
    return evaluate(FunctionTag.EXPM1, precision, (x,), lambda w: expm1_kernel(x, w, c))


def ln(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x <= ZERO:
            return domain_error("ln", x, "argument must be > 0")
        return ln_kernel(x, w, c)

    return evaluate(FunctionTag.LN, precision, (x,), compute)


def log1p(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    """ln(1 + x), accurate for x near 0."""
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x <= -ONE:
            return domain_error("log1p", x, "argument must be > -1")
        return log1p_kernel(x, w, c)

    return evaluate(FunctionTag.LOG1P, precision, (x,), compute)


def log10(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    """Base-10 logarithm. Exact powers of ten give their exact exponent."""
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x <= ZERO:
            return domain_error("log10", x, "argument must be > 0")
        exponent = _exact_power_of_ten(x)
        if exponent is not None:
            return Ok(Decimal(exponent))
        match ln_kernel(x, w + _QUOTIENT_EXTRA_DIGITS, c):
            case Err(e):
                return Err(e)
            case Ok(ln_x):
                pass
        match c.ln10_at(w + _QUOTIENT_EXTRA_DIGITS):
            case Err(e):
                return Err(e)
            case Ok(ln10):
                pass
        with localcontext(working_context(w)):
            return Ok(ln_x / ln10)

    return evaluate(FunctionTag.LOG10, precision, (x,), compute)


def log(
    x: Decimal, base: Decimal, precision: int, *, cache: ConstantCache | None = None,
) -> DecimalResult:
    """Logarithm of x in the given base, ln(x) / ln(base)."""
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x <= ZERO:
            return domain_error("log", x, "argument must be > 0")
        if base <= ZERO or base == ONE:
            return domain_error("log", base, "base must be > 0 and != 1")
        match ln_kernel(x, w + _QUOTIENT_EXTRA_DIGITS, c):
            case Err(e):
                return Err(e)
            case Ok(ln_x):
                pass
        match ln_kernel(base, w + _QUOTIENT_EXTRA_DIGITS, c):
            case Err(e):
                return Err(e)
            case Ok(ln_base):
                pass
        with localcontext(working_context(w)):
            return Ok(ln_x / ln_base)

    return evaluate(FunctionTag.LOG, precision, (x, base), compute)


def pow(  # noqa: A001
    x: Decimal, y: Decimal, precision: int, *, cache: ConstantCache | None = None,
) -> DecimalResult:
    """x raised to y.

    Integral y: repeated squaring, exact whenever the exact power fits in
    the working precision. Otherwise exp(y ln x), which needs x > 0.
    """
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if is_integral(y):
            return _integer_power(x, int(y), w)
        if x < ZERO:
            return domain_error("pow", f"{x}, {y}", "negative base needs an integral exponent")
        if x.is_zero():
            if y > ZERO:
                return Ok(ZERO)
            return domain_error("pow", f"{x}, {y}", "zero base needs a positive exponent")
        if x == ONE:
            return Ok(ONE)
        # y ln x carries this many integer digits; each costs one digit of ln x
        extended = w + integer_digits(y) + int_digits(3 * (abs(x.adjusted()) + 1))
        match ln_kernel(x, extended, c):
            case Err(e):
                return Err(e)
            case Ok(ln_x):
                pass
        with localcontext(working_context(extended)):
            exponent = y * ln_x
        return exp_kernel(exponent, w, c, function="pow")

    return evaluate(FunctionTag.POW, precision, (x, y), compute)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _exact_power_of_ten(x: Decimal) -> int | None:
    """k when x == 10^k exactly, else None."""
    sign, digits, _ = x.as_tuple()
    if sign or digits[0] != 1 or any(digits[1:]):
        return None
    return x.adjusted()


def _integer_power(x: Decimal, n: int, precision: int) -> DecimalResult:
    if n == 0:
        return Ok(ONE)
    if x.is_zero():
        if n > 0:
            return Ok(ZERO)
        return domain_error("pow", f"{x}, {n}", "zero base needs a positive exponent")
    if x.copy_abs() == ONE:
        return Ok(x if n & 1 else ONE)
    with localcontext(working_context(precision + int_digits(n))):
        result = ONE
        base = ONE / x if n < 0 else +x
        remaining = abs(n)
        while remaining:
            if remaining & 1:
                result *= base
            remaining >>= 1
            if remaining:
                base *= base
    if result.is_zero():
        # underflowed below Emin
        return range_error("pow", f"{x}, {n}")
    return Ok(result)
