"""Hyperbolic and inverse hyperbolic functions.

sinh and tanh sum their own series below |x| = 1, where the exp form would
cancel; above it everything is built from exp. The inverse functions are
written in log1p form so small arguments keep their relative precision.
"""

from __future__ import annotations

from decimal import Decimal, localcontext

from decimath.core.config import DEFAULT_CONFIG, EngineConfig
from decimath.core.context import HALF, ONE, TWO, ZERO, power_of_ten, working_context
from decimath.core.errors import DecimalResult, domain_error
from decimath.core.precision import FunctionTag
from decimath.core.result import Err, Ok
from decimath.functions._dispatch import evaluate, resolve_cache
from decimath.numeric.constants import ConstantCache
from decimath.numeric.kernels import exp_kernel, ln_kernel, log1p_kernel, sqrt_kernel
from decimath.numeric.series import sum_series, term_limit

_EXTRA_DIGITS = 2
# tanh(x) = 1 - 2 exp(-2|x|) + ..., so beyond (W + 2) * ln(10) / 2 it is 1 to W + 2 digits
_TANH_SATURATION_PER_DIGIT = Decimal("1.1513")


def sinh_series(
    x: Decimal, precision: int, config: EngineConfig = DEFAULT_CONFIG,
) -> DecimalResult:
    """sum x^(2k+1) / (2k+1)! for |x| < 1."""
    with localcontext(working_context(precision)):
        x_squared = x * x
    return sum_series(
        x, lambda term, k: term * x_squared / ((2 * k) * (2 * k + 1)), precision,
        max_terms=term_limit(precision, 13, config),
        magnitude=x.adjusted(),
        name="sinh",
    )


def sinh(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x.is_zero():
            return Ok(ZERO)
        if x.copy_abs() < ONE:
            return sinh_series(x, w)
        match exp_kernel(x, w + _EXTRA_DIGITS, c, function="sinh"):
            case Err(e):
                return Err(e)
            case Ok(big):
                pass
        with localcontext(working_context(w + _EXTRA_DIGITS)):
            small = ONE / big
        with localcontext(working_context(w)):
            return Ok((big - small) / TWO)

    return evaluate(FunctionTag.SINH, precision, (x,), compute)


def cosh(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x.is_zero():
            return Ok(ONE)
        match exp_kernel(x, w + _EXTRA_DIGITS, c, function="cosh"):
            case Err(e):
                return Err(e)
            case Ok(big):
                pass
        with localcontext(working_context(w + _EXTRA_DIGITS)):
            small = ONE / big
        with localcontext(working_context(w)):
            return Ok((big + small) / TWO)

    return evaluate(FunctionTag.COSH, precision, (x,), compute)


def tanh(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x.is_zero():
            return Ok(ZERO)
        negative = x < ZERO
        a = x.copy_abs()
        extended = w + _EXTRA_DIGITS
        if a > _TANH_SATURATION_PER_DIGIT * extended:
            return Ok(ONE.copy_negate() if negative else ONE)
        if a < ONE:
            # sinh / sqrt(1 + sinh^2)
            match sinh_series(x, extended):
                case Err(e):
                    return Err(e)
                case Ok(s):
                    pass
            with localcontext(working_context(extended)):
                radicand = ONE + s * s
            match sqrt_kernel(radicand, extended):
                case Err(e):
                    return Err(e)
                case Ok(cosh_x):
                    pass
            with localcontext(working_context(w)):
                return Ok(s / cosh_x)
        with localcontext(working_context(extended)):
            doubled = TWO * a
        match exp_kernel(doubled, extended, c, function="tanh"):
            case Err(e):
                return Err(e)
            case Ok(big):
                pass
        with localcontext(working_context(w)):
            value = (big - ONE) / (big + ONE)
            return Ok(-value if negative else value)

    return evaluate(FunctionTag.TANH, precision, (x,), compute)


def asinh(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    """asinh(a) = log1p(a + a^2 / (1 + sqrt(a^2 + 1))), odd in x."""
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x.is_zero():
            return Ok(ZERO)
        negative = x < ZERO
        a = x.copy_abs()
        extended = w + _EXTRA_DIGITS
        if a > power_of_ten(w // 2 + 1):
            # asinh(a) = ln(2a) + 1/(4a^2) - ...; the tail is below the last digit
            with localcontext(working_context(extended)):
                twice = TWO * a
            result = ln_kernel(twice, w, c)
        else:
            with localcontext(working_context(extended)):
                a_squared = a * a
                radicand = a_squared + ONE
            match sqrt_kernel(radicand, extended):
                case Err(e):
                    return Err(e)
                case Ok(root):
                    pass
            with localcontext(working_context(extended)):
                argument = a + a_squared / (ONE + root)
            result = log1p_kernel(argument, w, c)
        return result.map(lambda v: v.copy_negate() if negative else v)

    return evaluate(FunctionTag.ASINH, precision, (x,), compute)


def acosh(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    """acosh(x) = log1p(t + sqrt(t (x + 1))) with t = x - 1, for x >= 1."""
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x < ONE:
            return domain_error("acosh", x, "argument must be >= 1")
        if x == ONE:
            return Ok(ZERO)
        extended = w + _EXTRA_DIGITS
        if x > power_of_ten(w // 2 + 1):
            with localcontext(working_context(extended)):
                twice = TWO * x
            return ln_kernel(twice, w, c)
        with localcontext(working_context(extended)):
            t = x - ONE
            radicand = t * (x + ONE)
        match sqrt_kernel(radicand, extended):
            case Err(e):
                return Err(e)
            case Ok(root):
                pass
        with localcontext(working_context(extended)):
            argument = t + root
        return log1p_kernel(argument, w, c)

    return evaluate(FunctionTag.ACOSH, precision, (x,), compute)


def atanh(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    """atanh(x) = ln((1 + x) / (1 - x)) / 2 for |x| < 1.

    Below |x| = 1/2 the log1p form log1p(2x / (1 - x)) / 2 is used instead.
    """
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x.copy_abs() >= ONE:
            return domain_error("atanh", x, "argument must be in (-1, 1)")
        if x.is_zero():
            return Ok(ZERO)
        extended = w + _EXTRA_DIGITS
        if x.copy_abs() < HALF:
            with localcontext(working_context(extended)):
                argument = TWO * x / (ONE - x)
            result = log1p_kernel(argument, extended, c)
        else:
            with localcontext(working_context(extended)):
                ratio = (ONE + x) / (ONE - x)
            result = ln_kernel(ratio, extended, c)
        match result:
            case Err(e):
                return Err(e)
            case Ok(doubled):
                pass
        with localcontext(working_context(w)):
            return Ok(doubled / TWO)

    return evaluate(FunctionTag.ATANH, precision, (x,), compute)
