"""Kernels: reduction + series/Newton + reconstruction, at working precision.

Each kernel takes an argument already checked against its domain and a
working precision W, and returns the unrounded value. The dispatch layer
rounds to the requested digits.

Series ranges after reduction (terms per ten digits in parentheses):
exp    |r| <= ln2/2        (22)
atanh  |u| <= 1/3          (11)
sin    |s| <= pi/4         (10)
cos    |s| <= pi/4         (10)
atan   |a| <= 1/10         (5)
sinh   |x| < 1             (13)
expm1  |x| < 1/2           (17)
"""

from __future__ import annotations

from decimal import Decimal, localcontext

from decimath.core.config import DEFAULT_CONFIG, EngineConfig
from decimath.core.context import (
    DECIMATH_CONTEXT,
    HALF,
    ONE,
    TWO,
    ZERO,
    working_context,
)
from decimath.core.errors import MathError, range_error
from decimath.core.result import Err, Ok
from decimath.numeric.constants import ConstantCache
from decimath.numeric.newton import nth_root_core
from decimath.numeric.reduction import (
    TrigKernel,
    TrigReduction,
    reduce_atan,
    reduce_exp,
    reduce_ln,
    reduce_trig,
)
from decimath.numeric.series import sum_series, term_limit

# exp(x) leaves [10^Emin, 10^Emax] beyond |x| ~ Emax * ln 10; keep a margin
_EXP_LIMIT = Decimal(DECIMATH_CONTEXT.Emax - 1000) * Decimal("2.302585")
_KERNEL_EXTRA_DIGITS = 2
_LN10_UPPER = Decimal("2.31")


# ---------------------------------------------------------------------------
# exp
# ---------------------------------------------------------------------------


def exp_series(
    r: Decimal, precision: int, config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[MathError]:
    """sum r^k / k! for |r| <= ln2/2."""
    return sum_series(
        ONE, lambda term, k: term * r / k, precision,
        max_terms=term_limit(precision, 22, config),
        name="exp",
    )


def exp_kernel(
    x: Decimal,
    precision: int,
    cache: ConstantCache,
    config: EngineConfig = DEFAULT_CONFIG,
    *,
    function: str = "exp",
) -> Ok[Decimal] | Err[MathError]:
    if x.is_zero():
        return Ok(ONE)
    if x.copy_abs() > _EXP_LIMIT:
        return range_error(function, x)
    match reduce_exp(x, precision, cache):
        case Err(e):
            return Err(e)
        case Ok(reduction):
            pass
    match exp_series(reduction.reduced, precision, config):
        case Err(e):
            return Err(e)
        case Ok(exp_r):
            pass
    with localcontext(working_context(precision)):
        return Ok(reduction.reconstruct(exp_r))


def expm1_kernel(
    x: Decimal,
    precision: int,
    cache: ConstantCache,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[MathError]:
    """exp(x) - 1. Small |x| sums x + x^2/2! + ... so no leading digits cancel."""
    if x.is_zero():
        return Ok(ZERO)
    if x < ZERO and x.copy_negate() > (precision + _KERNEL_EXTRA_DIGITS) * _LN10_UPPER:
        return Ok(ONE.copy_negate())  # exp(x) is below the last working digit
    if x.copy_abs() >= HALF:
        return exp_kernel(x, precision + _KERNEL_EXTRA_DIGITS, cache, config, function="expm1").map(
            lambda value: _minus_one(value, precision),
        )
    return sum_series(
        x, lambda term, k: term * x / (k + 1), precision,
        max_terms=term_limit(precision, 17, config),
        magnitude=x.adjusted(),
        name="expm1",
    )


def _minus_one(value: Decimal, precision: int) -> Decimal:
    with localcontext(working_context(precision)):
        return value - ONE


# ---------------------------------------------------------------------------
# ln / log1p
# ---------------------------------------------------------------------------


def atanh_series(
    u: Decimal, precision: int, config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[MathError]:
    """sum u^(2k+1) / (2k+1) for |u| <= 1/3."""
    with localcontext(working_context(precision)):
        u_squared = u * u
    return sum_series(
        u, lambda term, k: term * u_squared * (2 * k - 1) / (2 * k + 1), precision,
        max_terms=term_limit(precision, 11, config),
        magnitude=u.adjusted() if not u.is_zero() else 0,
        name="atanh",
    )


def log1p_kernel(
    d: Decimal,
    precision: int,
    cache: ConstantCache,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[MathError]:
    """ln(1 + d) for d > -1.

    For |d| < 1/2: ln(1 + d) = 2 atanh(d / (2 + d)), with |d / (2 + d)| < 1/3,
    which keeps full relative precision for tiny d.
    """
    if d.is_zero():
        return Ok(ZERO)
    if d.copy_abs() >= HALF:
        with localcontext(working_context(precision + _KERNEL_EXTRA_DIGITS)):
            y = ONE + d
        return ln_kernel(y, precision, cache, config)
    with localcontext(working_context(precision + _KERNEL_EXTRA_DIGITS)):
        u = d / (TWO + d)
    return atanh_series(u, precision, config).map(lambda s: _double(s, precision))


def ln_kernel(
    x: Decimal,
    precision: int,
    cache: ConstantCache,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[MathError]:
    """ln(x) for x > 0."""
    if x == ONE:
        return Ok(ZERO)
    with localcontext(working_context(precision + _KERNEL_EXTRA_DIGITS)):
        d = x - ONE
    if d.copy_abs() < HALF:
        return log1p_kernel(d, precision, cache, config)

    match reduce_ln(x, precision, cache):
        case Err(e):
            return Err(e)
        case Ok(reduction):
            pass
    with localcontext(working_context(precision + _KERNEL_EXTRA_DIGITS)):
        m = reduction.reduced
        u = (m - ONE) / (m + ONE)
    match atanh_series(u, precision, config):
        case Err(e):
            return Err(e)
        case Ok(atanh_u):
            pass
    with localcontext(working_context(precision)):
        return Ok(reduction.reconstruct(TWO * atanh_u))


def _double(value: Decimal, precision: int) -> Decimal:
    with localcontext(working_context(precision)):
        return TWO * value


# ---------------------------------------------------------------------------
# sin / cos
# ---------------------------------------------------------------------------


def sin_series(
    s: Decimal, precision: int, config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[MathError]:
    with localcontext(working_context(precision)):
        s_squared = s * s
    return sum_series(
        s, lambda term, k: -term * s_squared / ((2 * k) * (2 * k + 1)), precision,
        max_terms=term_limit(precision, 10, config),
        magnitude=s.adjusted() if not s.is_zero() else 0,
        name="sin",
    )


def cos_series(
    s: Decimal, precision: int, config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[MathError]:
    with localcontext(working_context(precision)):
        s_squared = s * s
    return sum_series(
        ONE, lambda term, k: -term * s_squared / ((2 * k - 1) * (2 * k)), precision,
        max_terms=term_limit(precision, 10, config),
        name="cos",
    )


def trig_kernel_value(
    reduction: TrigReduction,
    kernel: TrigKernel,
    precision: int,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[MathError]:
    if kernel is TrigKernel.SIN:
        return sin_series(reduction.reduced, precision, config)
    return cos_series(reduction.reduced, precision, config)


def sine_phase_kernel(
    x: Decimal,
    phase: int,
    precision: int,
    cache: ConstantCache,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[MathError]:
    """sin(x + phase*pi/2); phase=0 is sin(x), phase=1 is cos(x)."""
    if x.is_zero():
        return Ok(ZERO if phase % 2 == 0 else ONE)
    match reduce_trig(x, precision, cache, config):
        case Err(e):
            return Err(e)
        case Ok(reduction):
            pass
    kernel, sign = reduction.kernel(phase)
    return trig_kernel_value(reduction, kernel, precision, config).map(
        lambda value: value if sign > 0 else value.copy_negate(),
    )


# ---------------------------------------------------------------------------
# atan / sqrt
# ---------------------------------------------------------------------------


def atan_kernel(
    x: Decimal,
    precision: int,
    cache: ConstantCache,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[MathError]:
    if x.is_zero():
        return Ok(ZERO)
    match reduce_atan(x, precision, cache, config):
        case Err(e):
            return Err(e)
        case Ok(reduction):
            pass
    a = reduction.reduced
    with localcontext(working_context(precision)):
        a_squared = a * a
    match sum_series(
        a, lambda term, k: -term * a_squared * (2 * k - 1) / (2 * k + 1), precision,
        max_terms=term_limit(precision, 5, config),
        magnitude=a.adjusted(),
        name="atan",
    ):
        case Err(e):
            return Err(e)
        case Ok(atan_a):
            pass
    with localcontext(working_context(precision)):
        return Ok(reduction.reconstruct(atan_a))


def sqrt_kernel(
    x: Decimal, precision: int, config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[MathError]:
    """sqrt(x) for x >= 0."""
    if x.is_zero():
        return Ok(ZERO)
    return nth_root_core(x, 2, precision, config)
