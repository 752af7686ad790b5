"""Series Evaluator: sum a power series to a precision-derived threshold.

A series is described by its first term and a rule producing term k from
term k-1 and k. Summation stops at the first term with
|term| < 10^(magnitude - precision). The number of terms is capped by
``max_terms`` (see term_limit); hitting the cap is a ConvergenceFailure,
which means a kernel was called outside its reduced argument range.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal, localcontext

from decimath.core.config import DEFAULT_CONFIG, EngineConfig
from decimath.core.context import ZERO, power_of_ten, working_context
from decimath.core.errors import ConvergenceFailure, convergence_failure
from decimath.core.result import Err, Ok

logger = logging.getLogger(__name__)

type TermRule = Callable[[Decimal, int], Decimal]


def term_limit(
    precision: int,
    terms_per_ten_digits: int,
    config: EngineConfig = DEFAULT_CONFIG,
) -> int:
    """Upper bound on the terms a series may need for ``precision`` digits.

    ``terms_per_ten_digits`` is the worst-case number of terms the series
    needs to gain ten digits on its validated input range.
    """
    return -(-precision * terms_per_ten_digits // 10) + config.series_term_margin


def sum_series(
    first: Decimal,
    next_term: TermRule,
    precision: int,
    *,
    max_terms: int,
    magnitude: int = 0,
    name: str = "series",
) -> Ok[Decimal] | Err[ConvergenceFailure]:
    """Sum first + t1 + t2 + ... at ``precision`` digits.

    magnitude = 0 gives the absolute threshold 10^-precision. Kernels whose
    value may be far below 1 pass the exponent of their first term, which
    makes the threshold relative to the result.
    """
    with localcontext(working_context(precision)):
        if first.is_zero():
            return Ok(ZERO)
        threshold = power_of_ten(magnitude - precision)
        total = +first
        term = total
        for index in range(1, max_terms + 1):
            term = next_term(term, index)
            total += term
            if abs(term) < threshold:
                return Ok(total)
    logger.warning(
        "%s: no convergence to %d digits after %d terms (last term %s)",
        name, precision, max_terms, term,
    )
    return convergence_failure(name, max_terms, precision, "decimath.numeric.series.sum_series")


# ---------------------------------------------------------------------------
# Common series
# ---------------------------------------------------------------------------


def atanh_reciprocal(
    n: int, precision: int, config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[ConvergenceFailure]:
    """atanh(1/n) = sum 1 / ((2k+1) n^(2k+1)) for an integer n >= 2."""
    with localcontext(working_context(precision)):
        first = Decimal(1) / n
    n_squared = n * n
    digits_per_term = len(str(n_squared)) - 1  # lower bound on log10(n^2)
    per_ten = 10 // digits_per_term if digits_per_term > 0 else 20

    def rule(term: Decimal, k: int) -> Decimal:
        return term * (2 * k - 1) / ((2 * k + 1) * n_squared)

    return sum_series(
        first, rule, precision,
        max_terms=term_limit(precision, max(1, per_ten), config),
        magnitude=first.adjusted(),
        name=f"atanh(1/{n})",
    )
