"""Tests for Some / NOTHING."""

import pytest

from typecraft.core.maybe import NOTHING, Nothing, Some, maybe_of


class TestMaybeOf:
    def test_none_is_nothing(self) -> None:
        assert maybe_of(None) is NOTHING

    def test_value_is_some(self) -> None:
        assert maybe_of(0) == Some(0)


class TestSome:
    def test_flags(self) -> None:
        assert Some(1).is_some
        assert not Some(1).is_nothing

    def test_map(self) -> None:
        assert Some(1).map(lambda v: v + 1) == Some(2)

    def test_map_to_none_is_nothing(self) -> None:
        assert Some(1).map(lambda v: None) is NOTHING

    def test_bind(self) -> None:
        assert Some(2).bind(lambda v: Some(v * 2)) == Some(4)

    def test_unwrap(self) -> None:
        assert Some("a").unwrap() == "a"
        assert Some("a").value_or("b") == "a"


class TestNothing:
    def test_singleton(self) -> None:
        assert Nothing() is NOTHING
        assert repr(NOTHING) == "NOTHING"
        assert not NOTHING

    def test_flags(self) -> None:
        assert NOTHING.is_nothing
        assert not NOTHING.is_some

    def test_map_and_bind_short_circuit(self) -> None:
        assert NOTHING.map(lambda v: v + 1) is NOTHING
        assert NOTHING.bind(lambda v: Some(v)) is NOTHING

    def test_value_or(self) -> None:
        assert NOTHING.value_or(3) == 3

    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="NOTHING"):
            NOTHING.unwrap()
