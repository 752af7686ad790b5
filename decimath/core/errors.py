"""Error values for decimath. Numeric functions return them inside Err.

Every error is a frozen dataclass that can be pattern-matched, compared and
serialized. Base class MathError, four @final subclasses:

InvalidPrecisionError  requested digit count is not a positive int
DomainError            argument outside the function's mathematical domain
ConvergenceFailure     an iteration exceeded its analytic bound (a defect)
RangeError             result exponent outside the package Decimal context
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import final

from decimath.core.result import Err, Ok


@dataclass(frozen=True, slots=True)
class MathError:
    """Base error value. NOT @final: has subclasses."""

    message: str
    code: str
    source: str  # "module.function" that produced this error

    def with_context(self, context: str) -> MathError:
        """Return a copy with context prepended to message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "code": self.code,
            "source": self.source,
        }


@final
@dataclass(frozen=True, slots=True)
class InvalidPrecisionError(MathError):
    """Requested precision is not a positive integer (or exceeds the limit)."""

    requested: str

    def to_dict(self) -> dict[str, object]:
        return {**MathError.to_dict(self), "requested": self.requested}


@final
@dataclass(frozen=True, slots=True)
class DomainError(MathError):
    """Argument outside the domain of the function."""

    function: str
    argument: str

    def to_dict(self) -> dict[str, object]:
        return {
            **MathError.to_dict(self),
            "function": self.function,
            "argument": self.argument,
        }


@final
@dataclass(frozen=True, slots=True)
class ConvergenceFailure(MathError):
    """Series or iteration did not converge within its iteration bound."""

    algorithm: str
    iterations: int
    precision: int

    def to_dict(self) -> dict[str, object]:
        return {
            **MathError.to_dict(self),
            "algorithm": self.algorithm,
            "iterations": self.iterations,
            "precision": self.precision,
        }


@final
@dataclass(frozen=True, slots=True)
class RangeError(MathError):
    """Result magnitude is not representable in the package context."""

    function: str
    argument: str

    def to_dict(self) -> dict[str, object]:
        return {
            **MathError.to_dict(self),
            "function": self.function,
            "argument": self.argument,
        }


type DecimalResult = Ok[Decimal] | Err[MathError]


# ---------------------------------------------------------------------------
# Constructors: reduce the Err(...) wrapping pattern to a 1-liner
# ---------------------------------------------------------------------------


def invalid_precision(requested: object, reason: str, source: str) -> Err[InvalidPrecisionError]:
    return Err(InvalidPrecisionError(
        message=f"precision {requested!r} {reason}",
        code="INVALID_PRECISION",
        source=source,
        requested=repr(requested),
    ))


def domain_error(function: str, argument: object, reason: str) -> Err[DomainError]:
    return Err(DomainError(
        message=f"{function}: {reason}, got {argument}",
        code="DOMAIN_ERROR",
        source=f"decimath.{function}",
        function=function,
        argument=str(argument),
    ))


def convergence_failure(
    algorithm: str, iterations: int, precision: int, source: str,
) -> Err[ConvergenceFailure]:
    return Err(ConvergenceFailure(
        message=(
            f"{algorithm} did not converge to {precision} digits "
            f"within {iterations} iterations"
        ),
        code="CONVERGENCE_FAILURE",
        source=source,
        algorithm=algorithm,
        iterations=iterations,
        precision=precision,
    ))


def range_error(function: str, argument: object) -> Err[RangeError]:
    return Err(RangeError(
        message=f"{function}: result for {argument} is outside the representable exponent range",
        code="RANGE_ERROR",
        source=f"decimath.{function}",
        function=function,
        argument=str(argument),
    ))
