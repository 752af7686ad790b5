"""pi, e and ln 2 rounded to a requested precision."""

from __future__ import annotations

from decimath.core.errors import DecimalResult
from decimath.core.precision import FunctionTag
from decimath.functions._dispatch import evaluate, resolve_cache
from decimath.numeric.constants import ConstantCache


def pi(precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    c = resolve_cache(cache)
    return evaluate(FunctionTag.PI, precision, (), c.pi_at)


def e(precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    c = resolve_cache(cache)
    return evaluate(FunctionTag.E, precision, (), c.e_at)


def ln2(precision: int, *, cache: ConstantCache | None = None) -> DecimalResult:
    c = resolve_cache(cache)
    return evaluate(FunctionTag.LN2, precision, (), c.ln2_at)
