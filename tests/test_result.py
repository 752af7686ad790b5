"""Tests for decimath.core.result: Ok/Err values returned by every function."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from decimath.core.errors import DomainError, MathError, domain_error
from decimath.core.result import Err, Ok, sequence, unwrap


def _reciprocal(x: Decimal) -> Ok[Decimal] | Err[MathError]:
    if x.is_zero():
        return domain_error("reciprocal", x, "argument must be nonzero")
    return Ok(Decimal(1) / x)


class TestOkErrBasics:
    def test_ok_is_frozen(self) -> None:
        ok = Ok(Decimal("1.5"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            ok.value = Decimal(2)  # type: ignore[misc]

    def test_equality_by_value(self) -> None:
        assert Ok(Decimal("2.0")) == Ok(Decimal("2.0"))
        assert Err("a") != Err("b")

    def test_pattern_match(self) -> None:
        match _reciprocal(Decimal(0)):
            case Err(DomainError(function=fn)):
                assert fn == "reciprocal"
            case _:
                pytest.fail("Should match Err(DomainError)")


class TestCombinators:
    def test_map_on_ok(self) -> None:
        assert Ok(Decimal(4)).map(lambda v: v * 2) == Ok(Decimal(8))

    def test_map_on_err_passthrough(self) -> None:
        assert Err("fail").map(lambda v: v * 2) == Err("fail")

    def test_bind_chains_fallible_steps(self) -> None:
        assert Ok(Decimal(4)).bind(_reciprocal) == Ok(Decimal("0.25"))

    def test_bind_surfaces_later_error(self) -> None:
        assert isinstance(Ok(Decimal(0)).bind(_reciprocal), Err)

    def test_err_bind_short_circuits(self) -> None:
        assert Err("first").bind(_reciprocal) == Err("first")


class TestFreeFunctions:
    def test_unwrap_ok(self) -> None:
        assert unwrap(Ok(Decimal(3))) == Decimal(3)

    def test_unwrap_err_raises(self) -> None:
        with pytest.raises(RuntimeError, match="unwrap on Err"):
            unwrap(Err("fail"))

    def test_method_unwrap_err_raises(self) -> None:
        with pytest.raises(RuntimeError, match="Called unwrap on Err"):
            Err("fail").unwrap()

    def test_unwrap_rejects_non_result(self) -> None:
        with pytest.raises(TypeError):
            unwrap(Decimal(1))  # type: ignore[arg-type]

    def test_sequence_all_ok(self) -> None:
        assert sequence([Ok(1), Ok(2), Ok(3)]) == Ok([1, 2, 3])

    def test_sequence_first_err(self) -> None:
        assert sequence([Ok(1), Err("e"), Err("later")]) == Err("e")

    def test_sequence_empty(self) -> None:
        assert sequence([]) == Ok([])

    def test_sequence_stops_consuming_at_first_err(self) -> None:
        produced: list[int] = []

        def results() -> Iterator[Ok[int] | Err[str]]:
            for i, r in enumerate((Ok(1), Err("e"), Ok(3))):
                produced.append(i)
                yield r

        assert sequence(results()) == Err("e")
        assert produced == [0, 1]


class TestLaws:
    @given(st.integers())
    def test_map_identity(self, x: int) -> None:
        assert Ok(x).map(lambda v: v) == Ok(x)

    @given(st.decimals(min_value=-10**6, max_value=10**6, places=6))
    def test_bind_left_identity(self, x: Decimal) -> None:
        assert Ok(x).bind(_reciprocal) == _reciprocal(x)
