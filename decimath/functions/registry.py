"""Static table of every public function, addressable by tag or name.

FUNCTION_TABLE maps each FunctionTag to its arity and an implementation
taking (arguments, precision, cache). evaluate() is the uniform entry point
for callers that choose the function at runtime.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import final

from decimath.core.context import is_integral
from decimath.core.errors import DecimalResult, domain_error
from decimath.core.precision import FunctionTag
from decimath.functions import constants, exponential, hyperbolic, roots, trigonometric
from decimath.numeric.constants import ConstantCache

type Implementation = Callable[[tuple[Decimal, ...], int, ConstantCache | None], DecimalResult]


@final
@dataclass(frozen=True, slots=True)
class FunctionEntry:
    tag: FunctionTag
    arity: int
    implementation: Implementation


def _unary(
    function: Callable[..., DecimalResult],
) -> Implementation:
    return lambda args, p, cache: function(args[0], p, cache=cache)


def _binary(
    function: Callable[..., DecimalResult],
) -> Implementation:
    return lambda args, p, cache: function(args[0], args[1], p, cache=cache)


def _nullary(
    function: Callable[..., DecimalResult],
) -> Implementation:
    return lambda args, p, cache: function(p, cache=cache)


def _nth_root(args: tuple[Decimal, ...], precision: int, cache: ConstantCache | None) -> DecimalResult:  # noqa: ARG001
    x, n = args
    if not n.is_finite() or not is_integral(n):
        return domain_error("nth_root", n, "root index must be an integer")
    return roots.nth_root(x, int(n), precision)


_ENTRIES = (
    FunctionEntry(FunctionTag.SQRT, 1, lambda args, p, cache: roots.sqrt(args[0], p)),  # noqa: ARG005
    FunctionEntry(FunctionTag.NTH_ROOT, 2, _nth_root),
    FunctionEntry(FunctionTag.EXP, 1, _unary(exponential.exp)),
    FunctionEntry(FunctionTag.EXPM1, 1, _unary(exponential.expm1)),
    FunctionEntry(FunctionTag.LN, 1, _unary(exponential.ln)),
    FunctionEntry(FunctionTag.LOG1P, 1, _unary(exponential.log1p)),
    FunctionEntry(FunctionTag.LOG10, 1, _unary(exponential.log10)),
    FunctionEntry(FunctionTag.LOG, 2, _binary(exponential.log)),
    FunctionEntry(FunctionTag.POW, 2, _binary(exponential.pow)),
    FunctionEntry(FunctionTag.SIN, 1, _unary(trigonometric.sin)),
    FunctionEntry(FunctionTag.COS, 1, _unary(trigonometric.cos)),
    FunctionEntry(FunctionTag.TAN, 1, _unary(trigonometric.tan)),
    FunctionEntry(FunctionTag.ASIN, 1, _unary(trigonometric.asin)),
    FunctionEntry(FunctionTag.ACOS, 1, _unary(trigonometric.acos)),
    FunctionEntry(FunctionTag.ATAN, 1, _unary(trigonometric.atan)),
    FunctionEntry(FunctionTag.ATAN2, 2, _binary(trigonometric.atan2)),
    FunctionEntry(FunctionTag.SINH, 1, _unary(hyperbolic.sinh)),
    FunctionEntry(FunctionTag.COSH, 1, _unary(hyperbolic.cosh)),
    FunctionEntry(FunctionTag.TANH, 1, _unary(hyperbolic.tanh)),
    FunctionEntry(FunctionTag.ASINH, 1, _unary(hyperbolic.asinh)),
    FunctionEntry(FunctionTag.ACOSH, 1, _unary(hyperbolic.acosh)),
    FunctionEntry(FunctionTag.ATANH, 1, _unary(hyperbolic.atanh)),
    FunctionEntry(FunctionTag.PI, 0, _nullary(constants.pi)),
    FunctionEntry(FunctionTag.E, 0, _nullary(constants.e)),
    FunctionEntry(FunctionTag.LN2, 0, _nullary(constants.ln2)),
)

FUNCTION_TABLE: Mapping[FunctionTag, FunctionEntry] = MappingProxyType(
    {entry.tag: entry for entry in _ENTRIES},
)


def evaluate(
    function: FunctionTag | str,
    arguments: tuple[Decimal, ...],
    precision: int,
    *,
    cache: ConstantCache | None = None,
) -> DecimalResult:
    """Evaluate a function chosen by tag or by name, e.g. ("atan2", (y, x), 30)."""
    if isinstance(function, FunctionTag):
        tag = function
    else:
        try:
            tag = FunctionTag(function)
        except ValueError:
            return domain_error("evaluate", function, "unknown function")
    entry = FUNCTION_TABLE[tag]
    if len(arguments) != entry.arity:
        return domain_error(
            tag.value, len(arguments), f"expected {entry.arity} argument(s)",
        )
    for argument in arguments:
        if not isinstance(argument, Decimal):
            return domain_error(tag.value, repr(argument), "argument must be a Decimal")
    return entry.implementation(tuple(arguments), precision, cache)
