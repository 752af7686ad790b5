"""Constant Cache: pi, e, ln 2 and ln 10 to a requested precision.

Algorithms
----------
pi   : Chudnovsky series, binary splitting on Python ints, integer sqrt.
e    : sum 1/k!.
ln2  : 18 atanh(1/26) - 2 atanh(1/4801) + 8 atanh(1/8749).
ln10 : 3 ln2 + 2 atanh(1/9)   (ln 10 = ln 8 + ln 5/4).

A value stored at precision P serves every request <= P by rounding, and
the rounded value is published under its own key so repeated requests for
the same precision return the identical Decimal. Computation happens
outside the store lock; when two threads race on one key the first publish
wins and both return it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal, localcontext
from math import isqrt
from typing import final

from decimath.core.config import DEFAULT_CONFIG, EngineConfig
from decimath.core.context import ONE, working_context
from decimath.core.errors import MathError, invalid_precision
from decimath.core.result import Err, Ok, sequence
from decimath.infra.memory_adapter import InMemoryConstantStore
from decimath.infra.protocols import ConstantId, ConstantStore
from decimath.numeric.series import atanh_reciprocal, sum_series, term_limit

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Chudnovsky binary splitting
# ---------------------------------------------------------------------------

_C = 640320
_C3_OVER_24 = _C**3 // 24
_DIGITS_PER_TERM = 14  # each Chudnovsky term adds ~14.18 digits


def _chudnovsky_split(a: int, b: int) -> tuple[int, int, int]:
    """P(a,b), Q(a,b), T(a,b) for the Chudnovsky terms in [a, b)."""
    if b - a == 1:
        if a == 0:
            p = q = 1
        else:
            p = (6 * a - 5) * (2 * a - 1) * (6 * a - 1)
            q = a * a * a * _C3_OVER_24
        t = p * (13591409 + 545140134 * a)
        if a & 1:
            t = -t
        return p, q, t
    m = (a + b) // 2
    p_am, q_am, t_am = _chudnovsky_split(a, m)
    p_mb, q_mb, t_mb = _chudnovsky_split(m, b)
    return p_am * p_mb, q_am * q_mb, q_mb * t_am + p_am * t_mb


def _compute_pi(precision: int) -> Ok[Decimal] | Err[MathError]:
    terms = precision // _DIGITS_PER_TERM + 2
    _, q, t = _chudnovsky_split(0, terms)
    one_squared = 10 ** (2 * precision)
    sqrt_c = isqrt(10005 * one_squared)
    scaled = (q * 426880 * sqrt_c) // t  # floor(pi * 10^precision)
    with localcontext(working_context(precision)):
        return Ok(+Decimal(scaled).scaleb(-precision))


def _compute_e(precision: int, config: EngineConfig) -> Ok[Decimal] | Err[MathError]:
    return sum_series(
        ONE, lambda term, k: term / k, precision,
        max_terms=term_limit(precision, 10, config),
        name="e",
    )


def _compute_ln2(precision: int, config: EngineConfig) -> Ok[Decimal] | Err[MathError]:
    match sequence(atanh_reciprocal(n, precision, config) for n in (26, 4801, 8749)):
        case Err(e):
            return Err(e)
        case Ok([a26, a4801, a8749]):
            pass
    with localcontext(working_context(precision)):
        return Ok(18 * a26 - 2 * a4801 + 8 * a8749)


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------


@final
class ConstantCache:
    """Read-through cache of constants over a ConstantStore.

    Pass a private instance for isolation, or use DEFAULT_CACHE (shared by
    the whole process).
    """

    def __init__(
        self,
        store: ConstantStore | None = None,
        config: EngineConfig = DEFAULT_CONFIG,
    ) -> None:
        self._store: ConstantStore = store if store is not None else InMemoryConstantStore()
        self._config = config

    @property
    def store(self) -> ConstantStore:
        return self._store

    def pi_at(self, precision: int) -> Ok[Decimal] | Err[MathError]:
        return self._lookup(ConstantId.PI, precision, _compute_pi)

    def e_at(self, precision: int) -> Ok[Decimal] | Err[MathError]:
        return self._lookup(
            ConstantId.E, precision, lambda p: _compute_e(p, self._config),
        )

    def ln2_at(self, precision: int) -> Ok[Decimal] | Err[MathError]:
        return self._lookup(
            ConstantId.LN2, precision, lambda p: _compute_ln2(p, self._config),
        )

    def ln10_at(self, precision: int) -> Ok[Decimal] | Err[MathError]:
        return self._lookup(ConstantId.LN10, precision, self._compute_ln10)

    def _compute_ln10(self, precision: int) -> Ok[Decimal] | Err[MathError]:
        match self.ln2_at(precision):
            case Err(e):
                return Err(e)
            case Ok(ln2):
                pass
        match atanh_reciprocal(9, precision, self._config):
            case Err(e):
                return Err(e)
            case Ok(atanh_ninth):
                pass
        with localcontext(working_context(precision)):
            return Ok(3 * ln2 + 2 * atanh_ninth)

    def _lookup(
        self,
        constant: ConstantId,
        precision: int,
        compute: Callable[[int], Ok[Decimal] | Err[MathError]],
    ) -> Ok[Decimal] | Err[MathError]:
        source = f"decimath.numeric.constants.{constant.value}_at"
        if isinstance(precision, bool) or not isinstance(precision, int):
            return invalid_precision(precision, "must be an int", source)
        if precision <= 0:
            return invalid_precision(precision, "must be > 0", source)

        hit = self._store.get((constant, precision))
        if hit is not None:
            return Ok(hit)

        best = self._store.best(constant, precision)
        if best is not None:
            return Ok(self._store.publish((constant, precision), _round_to(best[1], precision)))

        guarded = precision + self._config.constant_guard_digits
        logger.debug("Computing %s to %d digits", constant.value, guarded)
        match compute(guarded):
            case Err(e):
                return Err(e)
            case Ok(value):
                pass
        self._store.publish((constant, guarded), value)
        return Ok(self._store.publish((constant, precision), _round_to(value, precision)))


def _round_to(value: Decimal, precision: int) -> Decimal:
    with localcontext(working_context(precision)):
        return +value


DEFAULT_CACHE = ConstantCache()
