"""Tests for decimath.numeric.newton: nth root by Newton-Raphson."""

from __future__ import annotations

import logging
from collections.abc import Callable
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from decimath.core.config import EngineConfig
from decimath.core.errors import ConvergenceFailure
from decimath.core.result import Err
from decimath.numeric.newton import nth_root_core, precision_schedule, seed_estimate

type Ulps = Callable[[Decimal, Decimal, int], Decimal]


class TestPrecisionSchedule:
    def test_doubling_levels(self) -> None:
        assert precision_schedule(100) == (14, 26, 51, 100)

    def test_small_target_is_single_level(self) -> None:
        assert precision_schedule(10) == (10,)

    @given(st.integers(min_value=1, max_value=200_000))
    def test_increasing_and_ends_at_target(self, precision: int) -> None:
        schedule = precision_schedule(precision)
        assert schedule[-1] == precision
        assert schedule[0] <= max(precision, 15)
        assert all(a < b for a, b in zip(schedule, schedule[1:], strict=False))

    def test_length_is_logarithmic(self) -> None:
        assert len(precision_schedule(100_000)) <= 15


class TestSeedEstimate:
    def test_square_root_of_two(self) -> None:
        seed = seed_estimate(Decimal(2), 2)
        assert abs(seed - Decimal("1.4142135623730950488")) < Decimal("1e-14")

    def test_huge_exponent_does_not_overflow_float(self) -> None:
        seed = seed_estimate(Decimal("1E+1000"), 3)
        expected = Decimal("2.1544346900318837218E+333")
        assert abs(seed / expected - 1) < Decimal("1e-13")

    def test_tiny_argument(self) -> None:
        seed = seed_estimate(Decimal("4E-600"), 2)
        assert abs(seed / Decimal("2E-300") - 1) < Decimal("1e-13")


class TestNthRootCore:
    @pytest.mark.parametrize(
        ("x", "n"),
        [("2", 2), ("10", 3), ("0.5", 2), ("123456789.123456789", 7), ("159765.989751345", 135)],
    )
    def test_matches_reference(
        self, x: str, n: int, reference: Callable[..., Decimal], ulps: Ulps,
    ) -> None:
        value = nth_root_core(Decimal(x), n, 80).unwrap()
        assert ulps(value, reference("root", Decimal(x), n, digits=80), 80) <= 2

    def test_exact_square(self) -> None:
        assert abs(nth_root_core(Decimal(144), 2, 30).unwrap() - 12) <= Decimal("1e-28")

    def test_first_root_is_identity(self) -> None:
        assert nth_root_core(Decimal("7.25"), 1, 10).unwrap() == Decimal("7.25")

    def test_large_precision(self, reference: Callable[..., Decimal], ulps: Ulps) -> None:
        value = nth_root_core(Decimal(3), 2, 2000).unwrap()
        assert ulps(value, reference("sqrt", Decimal(3), digits=2000), 2000) <= 2

    def test_iteration_cap_reports_convergence_failure(
        self, caplog: pytest.LogCaptureFixture,
    ) -> None:
        # one schedule level and no extra steps: the float seed cannot reach 50 digits
        config = EngineConfig(newton_seed_digits=1000, newton_extra_steps=0)
        with caplog.at_level(logging.WARNING, logger="decimath.numeric.newton"):
            result = nth_root_core(Decimal(2), 2, 50, config)
        assert isinstance(result, Err)
        assert isinstance(result.error, ConvergenceFailure)
        assert result.error.algorithm == "newton_root_2"
        assert result.error.iterations == 1
        assert "did not reach a fixed point" in caplog.text
