"""Argument Reduction: map an input into the range where a kernel converges.

Each reduce_* function returns Ok(record) where the record holds the reduced
argument plus what is needed to reconstruct f(x) from the kernel value.
Reconstruction is applied exactly once, in the caller's working context.

Rules
-----
exp  : x = n ln2 + r, |r| <= ln2/2               exp(x) = exp(r) 2^n
ln   : x = m 2^k, 0.5 <= m < 2                    ln(x) = ln(m) + k ln2
trig : x = turns 2pi + quadrant pi/2 + s          |s| <= pi/4
atan : |x| > 1 -> pi/2 - atan(1/|x|), then a -> a / (1 + sqrt(1 + a^2))
       until a <= 1/10                            atan(x) = sign 2^h atan(a)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, localcontext
from enum import Enum
from typing import final

from decimath.core.config import DEFAULT_CONFIG, EngineConfig
from decimath.core.context import (
    HALF,
    ONE,
    TWO,
    ZERO,
    int_digits,
    integer_digits,
    significant_digits,
    working_context,
)
from decimath.core.errors import MathError, convergence_failure
from decimath.core.result import Err, Ok
from decimath.numeric.constants import ConstantCache
from decimath.numeric.newton import nth_root_core

logger = logging.getLogger(__name__)

_REDUCTION_EXTRA_DIGITS = 2
# digits of cancellation tolerated beyond the significant digits of x
_TRIG_CANCELLATION_SLACK = 10
_ATAN_TARGET = Decimal("0.1")
_ATAN_MAX_HALVINGS = 8
# floor(log2(10) * 10^6); underestimates log2 10 by < 1e-6
_LOG2_10_MICRO = 3321928


# ---------------------------------------------------------------------------
# exp
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class ExpReduction:
    """x = power_of_two * ln2 + reduced."""

    reduced: Decimal
    power_of_two: int

    def reconstruct(self, exp_reduced: Decimal) -> Decimal:
        if self.power_of_two == 0:
            return +exp_reduced
        return exp_reduced * TWO ** self.power_of_two


def reduce_exp(
    x: Decimal, precision: int, cache: ConstantCache,
) -> Ok[ExpReduction] | Err[MathError]:
    # n carries integer_digits(x) digits, so ln2 needs that many more
    extended = precision + integer_digits(x) + _REDUCTION_EXTRA_DIGITS
    match cache.ln2_at(extended):
        case Err(e):
            return Err(e)
        case Ok(ln2):
            pass
    with localcontext(working_context(extended)):
        n = int((x / ln2).to_integral_value())
        r = x - n * ln2
    return Ok(ExpReduction(reduced=r, power_of_two=n))


# ---------------------------------------------------------------------------
# ln
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class LnReduction:
    """x = reduced * 2^power_of_two, with ln2 at the precision the sum needs."""

    reduced: Decimal
    power_of_two: int
    ln2: Decimal

    def reconstruct(self, ln_reduced: Decimal) -> Decimal:
        if self.power_of_two == 0:
            return +ln_reduced
        return ln_reduced + self.power_of_two * self.ln2


def reduce_ln(
    x: Decimal, precision: int, cache: ConstantCache,
) -> Ok[LnReduction] | Err[MathError]:
    """Factor x > 0 as m 2^k with m in [0.5, 2)."""
    extended = precision + _REDUCTION_EXTRA_DIGITS
    # seed k from the decimal exponent, then correct by halving/doubling
    k = (x.adjusted() * _LOG2_10_MICRO) // 1_000_000
    with localcontext(working_context(extended)):
        m = x / TWO ** k if k else +x
        while m >= TWO:
            m /= TWO
            k += 1
        while m < HALF:
            m *= TWO
            k -= 1
    if k == 0:
        return Ok(LnReduction(reduced=m, power_of_two=0, ln2=ZERO))
    match cache.ln2_at(extended + int_digits(k)):
        case Err(e):
            return Err(e)
        case Ok(ln2):
            return Ok(LnReduction(reduced=m, power_of_two=k, ln2=ln2))


# ---------------------------------------------------------------------------
# sin / cos / tan
# ---------------------------------------------------------------------------


class TrigKernel(Enum):
    SIN = "sin"
    COS = "cos"


@final
@dataclass(frozen=True, slots=True)
class TrigReduction:
    """x = turns * 2pi + quadrant * pi/2 + reduced, quadrant in 0..3."""

    reduced: Decimal
    turns: int
    quadrant: int

    def kernel(self, phase: int = 0) -> tuple[TrigKernel, int]:
        """Kernel and sign giving sin(x + phase*pi/2) from the reduced argument.

        phase=0 -> sin(x), phase=1 -> cos(x).
        """
        match (self.quadrant + phase) % 4:
            case 0:
                return TrigKernel.SIN, 1
            case 1:
                return TrigKernel.COS, 1
            case 2:
                return TrigKernel.SIN, -1
            case _:
                return TrigKernel.COS, -1


def reduce_trig(
    x: Decimal,
    precision: int,
    cache: ConstantCache,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[TrigReduction] | Err[MathError]:
    """Reduce x modulo 2pi into [-pi, pi], then by quadrant into [-pi/4, pi/4].

    When x lies close to a multiple of pi/2, the subtraction cancels leading
    digits of s. The reduction is then repeated with at least as many extra
    digits of pi as were lost, and never fewer than twice the previous extra.
    A decimal with D significant digits stays about 10^-D away from every
    nonzero multiple of pi/2, so the extra digits are capped near D plus the
    integer digits of x; cancellation beyond that cap, or more retries than
    the config allows, is a ConvergenceFailure.
    """
    whole = integer_digits(x)
    extra = whole + _REDUCTION_EXTRA_DIGITS
    budget = whole + significant_digits(x) + _TRIG_CANCELLATION_SLACK
    attempts = config.trig_reduction_retries + 1
    for _attempt in range(attempts):
        extended = precision + extra
        match cache.pi_at(extended):
            case Err(e):
                return Err(e)
            case Ok(pi):
                pass
        with localcontext(working_context(extended)):
            two_pi = TWO * pi
            half_pi = pi / TWO
            turns = int((x / two_pi).to_integral_value())
            r = x - turns * two_pi
            quadrant = int((r / half_pi).to_integral_value())
            s = r - quadrant * half_pi
        if turns == 0 and quadrant == 0:
            # nothing was subtracted
            return Ok(TrigReduction(reduced=s, turns=0, quadrant=0))
        # s is good to about 10^(whole - extended) absolute
        lost = extended if s.is_zero() else max(0, -s.adjusted() - 1)
        needed = whole + lost + _REDUCTION_EXTRA_DIGITS
        if needed <= extra:
            return Ok(TrigReduction(reduced=s, turns=turns, quadrant=quadrant % 4))
        if extra >= budget:
            break
        extra = min(budget, max(needed, 2 * extra))

    logger.warning(
        "trig reduction of %s lost more than %d digits to cancellation",
        x, extra - whole,
    )
    return convergence_failure(
        "trig_reduction", attempts, precision,
        "decimath.numeric.reduction.reduce_trig",
    )


# ---------------------------------------------------------------------------
# atan
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class AtanReduction:
    """atan(x) = sign * (half_pi - 2^halvings atan(reduced)) if complement
    else sign * 2^halvings atan(reduced)."""

    reduced: Decimal
    negative: bool
    complement: bool
    halvings: int
    half_pi: Decimal

    def reconstruct(self, atan_reduced: Decimal) -> Decimal:
        value = atan_reduced * TWO ** self.halvings if self.halvings else +atan_reduced
        if self.complement:
            value = self.half_pi - value
        return -value if self.negative else value


def reduce_atan(
    x: Decimal,
    precision: int,
    cache: ConstantCache,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[AtanReduction] | Err[MathError]:
    """Reduce a nonzero x to |a| <= 1/10 via reciprocal and half-angle steps."""
    extended = precision + _REDUCTION_EXTRA_DIGITS
    negative = x < ZERO
    a = x.copy_abs()
    complement = a > ONE
    half_pi = ZERO
    if complement:
        match cache.pi_at(extended):
            case Err(e):
                return Err(e)
            case Ok(pi):
                pass
        with localcontext(working_context(extended)):
            half_pi = pi / TWO
            a = ONE / a

    halvings = 0
    while a > _ATAN_TARGET and halvings < _ATAN_MAX_HALVINGS:
        with localcontext(working_context(extended)):
            radicand = ONE + a * a
        match nth_root_core(radicand, 2, extended, config):
            case Err(e):
                return Err(e)
            case Ok(root):
                pass
        with localcontext(working_context(extended)):
            a = a / (ONE + root)
        halvings += 1

    return Ok(AtanReduction(
        reduced=a, negative=negative, complement=complement,
        halvings=halvings, half_pi=half_pi,
    ))
