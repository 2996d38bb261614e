"""Unit tests for the Result type and result_all."""
from __future__ import annotations

import pytest

from mp_envkit.kernel.types import Err, Ok, result_all


class TestOk:
    def test_unwrap_returns_value(self) -> None:
        assert Ok(3).unwrap() == 3

    def test_flags(self) -> None:
        res = Ok("x")
        assert res.is_ok() and not res.is_err()

    def test_map_and_flat_map(self) -> None:
        assert Ok(2).map(lambda v: v * 10) == Ok(20)
        assert Ok(2).flat_map(lambda v: Ok(v + 1)) == Ok(3)

    def test_flat_map_can_fail(self) -> None:
        error = ValueError("nope")
        assert Ok(2).flat_map(lambda v: Err(error)).err() is error

    def test_default_value_is_none(self) -> None:
        assert Ok().value is None

    def test_equality_by_value(self) -> None:
        assert Ok([1, 2]) == Ok([1, 2])
        assert Ok(1) != Ok(2)


class TestErr:
    def test_unwrap_raises_error(self) -> None:
        with pytest.raises(ValueError, match="bad"):
            Err(ValueError("bad")).unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        assert Err(ValueError()).unwrap_or(7) == 7

    def test_map_is_noop(self) -> None:
        err = Err(ValueError("x"))
        assert err.map(lambda v: v + 1) is err
        assert err.ok() is None


class TestResultAll:
    def test_collects_values(self) -> None:
        assert result_all([Ok(1), Ok(2)]) == Ok([1, 2])

    def test_returns_first_error(self) -> None:
        first = ValueError("first")
        res = result_all([Ok(1), Err(first), Err(ValueError("second"))])
        assert res.is_err()
        assert res.err() is first

    def test_empty_input(self) -> None:
        assert result_all([]) == Ok([])
