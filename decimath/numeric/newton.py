"""Root Extraction: Newton-Raphson nth root with precision doubling.

    y <- ((n - 1) y + x / y^(n-1)) / n

Each step roughly doubles the number of correct digits, so the working
precision is doubled along with it: the schedule runs from the seed's
accuracy up to the target W, each level carried out two digits above
itself. Once at W, iteration stops when two successive iterates differ by
at most one unit in the W-th digit. The step count is capped at
len(schedule) + newton_extra_steps, i.e. O(log W).
"""

from __future__ import annotations

import logging
from decimal import Decimal, localcontext

from decimath.core.config import DEFAULT_CONFIG, EngineConfig
from decimath.core.context import power_of_ten, working_context
from decimath.core.errors import ConvergenceFailure, convergence_failure
from decimath.core.result import Err, Ok

logger = logging.getLogger(__name__)

_LEVEL_EXTRA_DIGITS = 2


def precision_schedule(
    precision: int, config: EngineConfig = DEFAULT_CONFIG,
) -> tuple[int, ...]:
    """Increasing working precisions ending at ``precision``.

    Each level is about half of the next, the first is at or below the seed's
    accuracy.
    """
    levels = [precision]
    while levels[-1] > config.newton_seed_digits:
        levels.append(levels[-1] // 2 + 1)
    return tuple(reversed(levels))


def seed_estimate(x: Decimal, n: int) -> Decimal:
    """Coarse x^(1/n) for x > 0, good to about 15 digits.

    The decimal exponent is split as q*n + r; only the leading digits of x
    and 10^(r/n) pass through binary floating point, so huge exponents and
    huge n never overflow a float.
    """
    exponent = x.adjusted()
    shift, remainder = divmod(exponent, n)
    with localcontext(working_context(20)):
        lead = float(x.scaleb(-exponent))  # in [1, 10)
        estimate = lead ** (1.0 / n) * 10.0 ** (remainder / n)
        return Decimal(repr(estimate)).scaleb(shift)


def nth_root_core(
    x: Decimal,
    n: int,
    precision: int,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[Decimal] | Err[ConvergenceFailure]:
    """x^(1/n) to ``precision`` digits for x > 0 and n >= 1.

    The caller performs domain checks; this kernel assumes them.
    """
    if n == 1:
        with localcontext(working_context(precision)):
            return Ok(+x)

    schedule = precision_schedule(precision, config)
    max_steps = len(schedule) + config.newton_extra_steps
    last_level = len(schedule) - 1
    n_decimal = Decimal(n)
    n_minus_one = Decimal(n - 1)

    y = seed_estimate(x, n)
    for step in range(max_steps):
        level = schedule[min(step, last_level)]
        with localcontext(working_context(level + _LEVEL_EXTRA_DIGITS)):
            y_next = (n_minus_one * y + x / y ** (n - 1)) / n_decimal
            if step >= last_level:
                tolerance = power_of_ten(y_next.adjusted() - precision)
                if abs(y_next - y) <= tolerance:
                    return Ok(y_next)
        y = y_next

    logger.warning(
        "root(%s, %d) did not reach a fixed point at %d digits in %d steps",
        x, n, precision, max_steps,
    )
    return convergence_failure(
        f"newton_root_{n}", max_steps, precision,
        "decimath.numeric.newton.nth_root_core",
    )
