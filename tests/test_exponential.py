"""Tests for decimath.functions.exponential: exp, ln, log, pow."""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal, localcontext

import pytest
from hypothesis import given
from hypothesis import strategies as st

from decimath.core.context import significant_digits
from decimath.core.errors import DomainError, InvalidPrecisionError, RangeError
from decimath.core.result import Err, Ok
from decimath.functions.exponential import exp, expm1, ln, log, log1p, log10, pow  # noqa: A004

type Reference = Callable[..., Decimal]
type Ulps = Callable[[Decimal, Decimal, int], Decimal]


@st.composite
def scientific_decimals(draw: st.DrawFn, min_exp: int = -27, max_exp: int = 13) -> Decimal:
    """Positive Decimal m * 10^e with up to 7 digits, spanning 1e-20 .. 1e20."""
    mantissa = draw(st.integers(min_value=1, max_value=9_999_999))
    exponent = draw(st.integers(min_value=min_exp, max_value=max_exp))
    return Decimal(mantissa).scaleb(exponent)


# ---------------------------------------------------------------------------
# exp / expm1
# ---------------------------------------------------------------------------


class TestExp:
    def test_exp_zero(self) -> None:
        assert str(exp(Decimal(0), 10).unwrap()) == "1.000000000"

    @pytest.mark.parametrize("x", ["1", "-1", "0.5", "10", "-50", "123.456", "1E-30", "-7E-10"])
    @pytest.mark.parametrize("precision", [10, 50])
    def test_matches_reference(
        self, x: str, precision: int, reference: Reference, ulps: Ulps,
    ) -> None:
        value = exp(Decimal(x), precision).unwrap()
        assert significant_digits(value) == precision
        assert ulps(value, reference("exp", Decimal(x), digits=precision), precision) <= 1

    def test_large_argument(self, reference: Reference, ulps: Ulps) -> None:
        value = exp(Decimal("100000.5"), 30).unwrap()
        assert ulps(value, reference("exp", Decimal("100000.5"), digits=30), 30) <= 1

    def test_overflow_is_range_error(self) -> None:
        result = exp(Decimal("1E+7"), 10)
        assert isinstance(result, Err)
        assert isinstance(result.error, RangeError)

    def test_underflow_is_range_error(self) -> None:
        assert isinstance(exp(Decimal("-1E+7"), 10).error, RangeError)  # type: ignore[union-attr]


class TestExpm1:
    @pytest.mark.parametrize("x", ["1E-30", "-1E-12", "0.3", "-0.49", "2", "-3"])
    def test_matches_reference(self, x: str, reference: Reference, ulps: Ulps) -> None:
        value = expm1(Decimal(x), 30).unwrap()
        assert ulps(value, reference("expm1", Decimal(x), digits=30), 30) <= 1

    def test_very_negative_is_minus_one(self) -> None:
        assert expm1(Decimal(-200), 20) == Ok(Decimal("-1.0000000000000000000"))

    def test_zero(self) -> None:
        assert expm1(Decimal(0), 10) == Ok(Decimal(0))


# ---------------------------------------------------------------------------
# ln / log1p / log10 / log
# ---------------------------------------------------------------------------


class TestLn:
    def test_ln_one_is_zero(self) -> None:
        assert ln(Decimal(1), 10) == Ok(Decimal(0))

    @pytest.mark.parametrize("x", ["0", "-1", "-1E-50"])
    def test_non_positive_is_domain_error(self, x: str) -> None:
        result = ln(Decimal(x), 10)
        assert isinstance(result, Err)
        assert isinstance(result.error, DomainError)
        assert result.error.function == "ln"

    @pytest.mark.parametrize(
        "x", ["2", "10", "0.5", "1.0000001", "0.9999999", "1E+100", "3E-500", "98765.4321"],
    )
    @pytest.mark.parametrize("precision", [12, 60])
    def test_matches_reference(
        self, x: str, precision: int, reference: Reference, ulps: Ulps,
    ) -> None:
        value = ln(Decimal(x), precision).unwrap()
        assert ulps(value, reference("ln", Decimal(x), digits=precision), precision) <= 1

    @given(scientific_decimals())
    def test_exp_of_ln_round_trips(self, x: Decimal) -> None:
        logarithm = ln(x, 25).unwrap()
        back = exp(logarithm, 20).unwrap()
        unit = Decimal((0, (1,), x.adjusted() - 19))
        assert abs(back - x) <= unit

    @given(scientific_decimals(), scientific_decimals())
    def test_monotonic(self, a: Decimal, b: Decimal) -> None:
        low, high = sorted((a, b))
        assert ln(low, 15).unwrap() <= ln(high, 15).unwrap()

    def test_accuracy_at_every_precision(self, reference: Reference, ulps: Ulps) -> None:
        for precision in range(1, 80, 7):
            value = ln(Decimal(3), precision).unwrap()
            assert significant_digits(value) == precision
            assert ulps(value, reference("ln", Decimal(3), digits=precision), precision) <= 1


class TestLog1p:
    @pytest.mark.parametrize("x", ["1E-25", "-1E-25", "0.25", "-0.75", "5", "1E+40"])
    def test_matches_reference(self, x: str, reference: Reference, ulps: Ulps) -> None:
        value = log1p(Decimal(x), 30).unwrap()
        assert ulps(value, reference("log1p", Decimal(x), digits=30), 30) <= 1

    def test_minus_one_is_domain_error(self) -> None:
        assert isinstance(log1p(Decimal(-1), 10).error, DomainError)  # type: ignore[union-attr]


class TestLog10:
    def test_exact_powers_of_ten(self) -> None:
        assert str(log10(Decimal(1000), 10).unwrap()) == "3.000000000"
        assert log10(Decimal("0.001"), 5) == Ok(Decimal("-3.0000"))
        assert log10(Decimal("1E+250"), 3) == Ok(Decimal("250"))
        assert log10(Decimal("1.000"), 10) == Ok(Decimal(0))

    @pytest.mark.parametrize("x", ["2", "0.5", "12345", "1.01"])
    def test_matches_reference(self, x: str, reference: Reference, ulps: Ulps) -> None:
        value = log10(Decimal(x), 40).unwrap()
        assert ulps(value, reference("log10", Decimal(x), digits=40), 40) <= 1

    def test_zero_is_domain_error(self) -> None:
        assert isinstance(log10(Decimal(0), 10).error, DomainError)  # type: ignore[union-attr]


class TestLog:
    def test_integer_answer(self) -> None:
        assert log(Decimal(8), Decimal(2), 20) == Ok(Decimal("3.0000000000000000000"))

    @pytest.mark.parametrize(("x", "base"), [("100", "3"), ("0.2", "7.5"), ("5", "0.5")])
    def test_matches_reference(
        self, x: str, base: str, reference: Reference, ulps: Ulps,
    ) -> None:
        value = log(Decimal(x), Decimal(base), 30).unwrap()
        expected = reference("log", Decimal(x), Decimal(base), digits=30)
        assert ulps(value, expected, 30) <= 1

    @pytest.mark.parametrize(("x", "base"), [("2", "1"), ("2", "0"), ("2", "-3"), ("-2", "3")])
    def test_domain_errors(self, x: str, base: str) -> None:
        assert isinstance(log(Decimal(x), Decimal(base), 10).error, DomainError)  # type: ignore[union-attr]


# ---------------------------------------------------------------------------
# pow
# ---------------------------------------------------------------------------


class TestPow:
    def test_integer_exponent_is_exact(self) -> None:
        assert str(pow(Decimal(2), Decimal(10), 5).unwrap()) == "1024.0"

    def test_negative_base_integer_exponent(self) -> None:
        assert pow(Decimal(-2), Decimal(3), 10) == Ok(Decimal("-8.000000000"))
        assert pow(Decimal(-2), Decimal(2), 3) == Ok(Decimal("4.00"))

    def test_negative_integer_exponent(self) -> None:
        assert pow(Decimal(10), Decimal(-2), 5) == Ok(Decimal("0.010000"))

    def test_zero_cases(self) -> None:
        assert pow(Decimal(0), Decimal(0), 5) == Ok(Decimal("1.0000"))
        assert pow(Decimal(0), Decimal("2.5"), 5) == Ok(Decimal(0))
        assert isinstance(pow(Decimal(0), Decimal(-1), 5).error, DomainError)  # type: ignore[union-attr]
        assert isinstance(pow(Decimal(0), Decimal("-0.5"), 5).error, DomainError)  # type: ignore[union-attr]

    def test_negative_base_fractional_exponent_is_domain_error(self) -> None:
        result = pow(Decimal(-2), Decimal("0.5"), 10)
        assert isinstance(result, Err)
        assert isinstance(result.error, DomainError)

    @pytest.mark.parametrize(
        ("x", "y"),
        [("2", "0.5"), ("10", "-3.25"), ("1.0001", "10000"), ("3.7", "123.45"), ("2", "100000")],
    )
    def test_matches_reference(self, x: str, y: str, reference: Reference, ulps: Ulps) -> None:
        value = pow(Decimal(x), Decimal(y), 30).unwrap()
        expected = reference("power", Decimal(x), Decimal(y), digits=30)
        assert ulps(value, expected, 30) <= 1

    def test_overflow_is_range_error(self) -> None:
        assert isinstance(pow(Decimal(10), Decimal(1_000_000), 5).error, RangeError)  # type: ignore[union-attr]
        assert isinstance(pow(Decimal(10), Decimal("2E+6") + Decimal("0.5"), 5).error, RangeError)  # type: ignore[union-attr]

    def test_exponent_with_thousands_of_digits_overflows(self) -> None:
        result = pow(Decimal("1.5"), Decimal("1E+5000"), 10)
        assert isinstance(result, Err)
        assert isinstance(result.error, RangeError)

    def test_result_below_emin_is_range_error(self) -> None:
        result = pow(Decimal("1E-500002"), Decimal(2), 10)
        assert isinstance(result, Err)
        assert isinstance(result.error, RangeError)
        assert result.error.function == "pow"


# ---------------------------------------------------------------------------
# Shared entry-point behavior
# ---------------------------------------------------------------------------


class TestEntryPoint:
    @pytest.mark.parametrize("bad", [Decimal("NaN"), Decimal("Infinity"), Decimal("-Infinity")])
    def test_non_finite_is_domain_error(self, bad: Decimal) -> None:
        assert isinstance(exp(bad, 10).error, DomainError)  # type: ignore[union-attr]

    def test_non_decimal_is_domain_error(self) -> None:
        assert isinstance(ln(2.0, 10).error, DomainError)  # type: ignore[arg-type, union-attr]

    def test_invalid_precision(self) -> None:
        assert isinstance(exp(Decimal(1), 0).error, InvalidPrecisionError)  # type: ignore[union-attr]

    def test_caller_context_does_not_leak(self) -> None:
        expected = exp(Decimal("1.5"), 40)
        with localcontext() as ctx:
            ctx.prec = 3
            ctx.rounding = "ROUND_DOWN"
            assert exp(Decimal("1.5"), 40) == expected
            assert significant_digits(ln(Decimal(7), 25).unwrap()) == 25
