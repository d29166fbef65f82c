"""Tests for map types."""

import pytest

from typecraft.builder import coercible, map_of
from typecraft.core.errors import (
    AggregateError,
    CoercionError,
    ConstraintError,
    NotCollectionError,
)
from typecraft.types import Constructor, Map, Nominal, Type


@pytest.fixture
def scores(strict_str: Type, coercible_int: Constructor) -> Map:
    return map_of(strict_str, coercible_int)


class TestMap:
    def test_applies_key_and_value_types(self, scores: Map) -> None:
        assert scores({"a": "1", "b": 2}) == {"a": 1, "b": 2}

    def test_key_coercion(self, strict_int: Type) -> None:
        assert map_of(coercible(str), strict_int)({1: 2}) == {"1": 2}

    def test_failures_keyed_by_input_key(self, scores: Map) -> None:
        result = scores.try_apply({1: "1", "b": "x", "c": "3"})
        assert isinstance(result.error, AggregateError)
        assert set(result.errors) == {1, "b"}
        assert isinstance(result.errors[1], ConstraintError)
        assert isinstance(result.errors["b"], CoercionError)
        assert result.output["c"] == 3

    def test_key_failure_hides_value_check(self, scores: Map) -> None:
        result = scores.try_apply({1: "not a number"})
        assert isinstance(result.errors[1], ConstraintError)

    def test_not_a_hash(self, scores: Map) -> None:
        result = scores.try_apply([("a", 1)])
        assert isinstance(result.error, NotCollectionError)
        assert result.message == "[('a', 1)] is not a hash"

    def test_lax(self, scores: Map) -> None:
        assert scores.lax({1: "x"}) == {1: "x"}

    def test_introspection(self, scores: Map, strict_str: Type) -> None:
        assert scores.key_type == strict_str
        assert scores.primitive is dict
        assert Map() == Map(Nominal(object), Nominal(object))

    def test_to_ast(self, scores: Map) -> None:
        tag, (key_ast, value_ast, meta) = scores.to_ast()
        assert tag == "map"
        assert key_ast == scores.key_type.to_ast()
        assert value_ast == scores.value_type.to_ast()
        assert meta == {}
