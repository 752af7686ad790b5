"""Trigonometric and inverse trigonometric functions.

Angles are in radians. sin and cos share one kernel: sin(x + phase pi/2)
with phase 0 or 1. The inverse functions all go through atan.
"""

from __future__ import annotations

from decimal import Decimal, localcontext

from decimath.core.context import ONE, TWO, ZERO, working_context
from decimath.core.errors import DecimalResult, domain_error
from decimath.core.precision import FunctionTag
from decimath.core.result import Err, Ok
from decimath.functions._dispatch import evaluate, resolve_cache
from decimath.numeric.constants import ConstantCache
from decimath.numeric.kernels import (
    atan_kernel,
    cos_series,
    sin_series,
    sine_phase_kernel,
    sqrt_kernel,
)
from decimath.numeric.reduction import reduce_trig

_EXTRA_DIGITS = 2


def sin(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    c = resolve_cache(cache)
    return evaluate(FunctionTag.SIN, precision, (x,), lambda w: sine_phase_kernel(x, 0, w, c))


def cos(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    c = resolve_cache(cache)
    return evaluate(FunctionTag.COS, precision, (x,), lambda w: sine_phase_kernel(x, 1, w, c))


def tan(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    """sin/cos of the reduced argument; the quadrant picks tan(s) or -cot(s)."""
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x.is_zero():
            return Ok(ZERO)
        extended = w + _EXTRA_DIGITS
        match reduce_trig(x, extended, c):
            case Err(e):
                return Err(e)
            case Ok(reduction):
                pass
        match sin_series(reduction.reduced, extended):
            case Err(e):
                return Err(e)
            case Ok(sin_s):
                pass
        match cos_series(reduction.reduced, extended):
            case Err(e):
                return Err(e)
            case Ok(cos_s):
                pass
        if reduction.quadrant % 2 == 0:
            with localcontext(working_context(w)):
                return Ok(sin_s / cos_s)
        if sin_s.is_zero():
            return domain_error("tan", x, "argument is a pole of tan")
        with localcontext(working_context(w)):
            return Ok(-cos_s / sin_s)

    return evaluate(FunctionTag.TAN, precision, (x,), compute)


def asin(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    """asin(x) = atan(x / sqrt((1 - x)(1 + x))) for |x| < 1."""
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x.copy_abs() > ONE:
            return domain_error("asin", x, "argument must be in [-1, 1]")
        if x.is_zero():
            return Ok(ZERO)
        if x.copy_abs() == ONE:
            return _half_pi(c, w).map(lambda v: v if x > ZERO else v.copy_negate())
        extended = w + _EXTRA_DIGITS
        with localcontext(working_context(extended)):
            radicand = (ONE - x) * (ONE + x)
        match sqrt_kernel(radicand, extended):
            case Err(e):
                return Err(e)
            case Ok(root):
                pass
        with localcontext(working_context(extended)):
            t = x / root
        return atan_kernel(t, w, c)

    return evaluate(FunctionTag.ASIN, precision, (x,), compute)


def acos(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    """acos(x) = 2 atan(sqrt((1 - x) / (1 + x))) for -1 < x <= 1."""
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x.copy_abs() > ONE:
            return domain_error("acos", x, "argument must be in [-1, 1]")
        if x == ONE:
            return Ok(ZERO)
        if x == -ONE:
            return c.pi_at(w)
        extended = w + _EXTRA_DIGITS
        with localcontext(working_context(extended)):
            ratio = (ONE - x) / (ONE + x)
        match sqrt_kernel(ratio, extended):
            case Err(e):
                return Err(e)
            case Ok(root):
                pass
        match atan_kernel(root, extended, c):
            case Err(e):
                return Err(e)
            case Ok(half_angle):
                pass
        with localcontext(working_context(w)):
            return Ok(TWO * half_angle)

    return evaluate(FunctionTag.ACOS, precision, (x,), compute)


def atan(x: Decimal, precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    c = resolve_cache(cache)
    return evaluate(FunctionTag.ATAN, precision, (x,), lambda w: atan_kernel(x, w, c))


def atan2(
    y: Decimal, x: Decimal, precision: int, *, cache: ConstantCache | None = None,
) -> DecimalResult:
    """Angle of the point (x, y), in (-pi, pi]."""
    c = resolve_cache(cache)

    def compute(w: int) -> DecimalResult:
        if x.is_zero():
            if y.is_zero():
                return domain_error("atan2", f"{y}, {x}", "angle of the origin is undefined")
            return _half_pi(c, w).map(lambda v: v if y > ZERO else v.copy_negate())
        extended = w + _EXTRA_DIGITS
        with localcontext(working_context(extended)):
            ratio = y / x
        if x > ZERO:
            return atan_kernel(ratio, w, c)

        # x < 0: shift atan(y/x) by pi towards the half plane of y
        match atan_kernel(ratio, extended, c):
            case Err(e):
                return Err(e)
            case Ok(angle):
                pass
        match c.pi_at(extended):
            case Err(e):
                return Err(e)
            case Ok(pi):
                pass
        with localcontext(working_context(w)):
            return Ok(angle - pi if y < ZERO else angle + pi)

    return evaluate(FunctionTag.ATAN2, precision, (y, x), compute)


def _half_pi(cache: ConstantCache, precision: int) -> DecimalResult:
    match cache.pi_at(precision + 1):
        case Err(e):
            return Err(e)
        case Ok(pi):
            pass
    with localcontext(working_context(precision)):
        return Ok(pi / TWO)
