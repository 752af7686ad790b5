"""Precision Context: requested digits -> working digits.

W = P + guard_digits(tag). The guard counts are fixed per function and
cover series truncation, the rounding of every arithmetic step of the
algorithm, and the reconstruction step. Input-dependent digits (argument
size, cancellation depth) are added later by argument reduction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import assert_never, final

from decimath.core.config import DEFAULT_CONFIG, EngineConfig
from decimath.core.errors import InvalidPrecisionError, invalid_precision
from decimath.core.result import Err, Ok


class FunctionTag(Enum):
    """Closed set of public functions."""

    SQRT = "sqrt"
    NTH_ROOT = "nth_root"
    EXP = "exp"
    EXPM1 = "expm1"
    LN = "ln"
    LOG1P = "log1p"
    LOG10 = "log10"
    LOG = "log"
    POW = "pow"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    ATAN2 = "atan2"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"
    ASINH = "asinh"
    ACOSH = "acosh"
    ATANH = "atanh"
    PI = "pi"
    E = "e"
    LN2 = "ln2"


def guard_digits(tag: FunctionTag) -> int:  # noqa: PLR0911
    """Fixed guard digit count for a function."""
    match tag:
        case FunctionTag.PI | FunctionTag.E | FunctionTag.LN2:
            return 5
        case FunctionTag.SQRT | FunctionTag.NTH_ROOT:
            return 5
        case FunctionTag.EXP | FunctionTag.EXPM1 | FunctionTag.LN | FunctionTag.LOG1P:
            return 8
        case FunctionTag.SIN | FunctionTag.COS | FunctionTag.ATAN:
            return 8
        case FunctionTag.SINH | FunctionTag.COSH:
            return 8
        case FunctionTag.LOG10 | FunctionTag.LOG | FunctionTag.TAN | FunctionTag.ATAN2:
            return 10
        case FunctionTag.ASIN | FunctionTag.ACOS:
            return 10
        case FunctionTag.TANH | FunctionTag.ASINH | FunctionTag.ACOSH | FunctionTag.ATANH:
            return 10
        case FunctionTag.POW:
            return 12
        case _never:
            assert_never(_never)


@final
@dataclass(frozen=True, slots=True)
class WorkingPrecision:
    """Requested output digits plus the function's guard digits."""

    requested: int
    guard: int

    @property
    def working(self) -> int:
        return self.requested + self.guard


def working_precision(
    precision: object,
    tag: FunctionTag,
    config: EngineConfig = DEFAULT_CONFIG,
) -> Ok[WorkingPrecision] | Err[InvalidPrecisionError]:
    """Validate a precision request and attach the guard digits for ``tag``."""
    source = f"decimath.{tag.value}"
    # bool is a subclass of int and is not a digit count
    if isinstance(precision, bool) or not isinstance(precision, int):
        return invalid_precision(precision, "must be an int", source)
    if precision <= 0:
        return invalid_precision(precision, "must be > 0", source)
    if precision > config.max_precision:
        return invalid_precision(
            precision, f"exceeds max_precision={config.max_precision}", source,
        )
    return Ok(WorkingPrecision(requested=precision, guard=guard_digits(tag)))
