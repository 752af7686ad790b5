"""Hypothesis profiles and shared fixtures for the decimath test suite.

The ``reference`` fixture evaluates a function with mpmath, an independent
arbitrary-precision library, at well above the requested precision.
``ulps`` measures the distance between a result and that reference in
units of the result's last digit.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

import mpmath
import pytest
from hypothesis import HealthCheck, settings

from decimath.numeric.constants import ConstantCache

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


# ---------------------------------------------------------------------------
# Reference values
# ---------------------------------------------------------------------------

_REFERENCE_EXTRA_DIGITS = 25

type Reference = Callable[..., Decimal]


def _reference(name: str, *args: Decimal | int, digits: int) -> Decimal:
    """mpmath.<name>(*args) to ``digits`` + 25 significant digits."""
    with mpmath.workdps(digits + _REFERENCE_EXTRA_DIGITS):
        converted = [a if isinstance(a, int) else mpmath.mpf(str(a)) for a in args]
        value = getattr(mpmath, name)(*converted)
        return Decimal(mpmath.nstr(value, digits + _REFERENCE_EXTRA_DIGITS - 5))


def _ulps(result: Decimal, reference: Decimal, digits: int) -> Decimal:
    """|result - reference| in units of the digits-th significant digit."""
    if reference.is_zero():
        return result.copy_abs()
    unit = Decimal((0, (1,), reference.adjusted() - digits + 1))
    return (result - reference).copy_abs() / unit


@pytest.fixture(scope="session")
def reference() -> Reference:
    return _reference


@pytest.fixture(scope="session")
def ulps() -> Callable[[Decimal, Decimal, int], Decimal]:
    return _ulps


@pytest.fixture
def fresh_cache() -> ConstantCache:
    """A private constant cache, empty at the start of each test."""
    return ConstantCache()
