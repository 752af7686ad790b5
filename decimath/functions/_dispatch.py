"""Shared entry-point plumbing for the public functions.

evaluate() is the single path from a public call to a kernel:
precision check -> argument check -> kernel at working precision ->
half-up rounding to the requested digits.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal, Overflow

from decimath.core.context import DECIMATH_CONTEXT, round_significant
from decimath.core.errors import DecimalResult, domain_error, range_error
from decimath.core.precision import FunctionTag, working_precision
from decimath.core.result import Err, Ok
from decimath.numeric.constants import DEFAULT_CACHE, ConstantCache


def resolve_cache(cache: ConstantCache | None) -> ConstantCache:
    return DEFAULT_CACHE if cache is None else cache


def evaluate(
    tag: FunctionTag,
    precision: int,
    arguments: tuple[object, ...],
    compute: Callable[[int], DecimalResult],
) -> DecimalResult:
    """Run ``compute(W)`` for a validated request and round its value.

    A trapped decimal Overflow inside the computation, or a value below
    the context's Emin, becomes a RangeError.
    """
    match working_precision(precision, tag):
        case Err(e):
            return Err(e)
        case Ok(wp):
            pass
    for argument in arguments:
        if not isinstance(argument, Decimal):
            return domain_error(tag.value, repr(argument), "argument must be a Decimal")
        if not argument.is_finite():
            return domain_error(tag.value, argument, "argument must be finite")
    described = ", ".join(str(a) for a in arguments)

    def rounded(value: Decimal) -> DecimalResult:
        # subnormal: fewer than the requested digits are representable
        if not value.is_zero() and value.adjusted() < DECIMATH_CONTEXT.Emin:
            return range_error(tag.value, described)
        return Ok(round_significant(value, wp.requested))

    try:
        return compute(wp.working).bind(rounded)
    except Overflow:
        return range_error(tag.value, described)
