"""Tests for default types."""

import pytest

from typecraft.core.errors import ConstraintError, DefinitionError
from typecraft.types import Constrained, Default, Type


class TestDefault:
    def test_missing_input_gets_default(self, strict_str: Type) -> None:
        t = strict_str.default("x")
        assert t() == "x"
        assert t.apply_unsafe() == "x"

    def test_supplied_input_validated(self, strict_str: Type) -> None:
        t = strict_str.default("x")
        assert t("y") == "y"
        with pytest.raises(ConstraintError):
            t(1)

    def test_none_is_not_missing(self, strict_str: Type) -> None:
        assert strict_str.default("x").try_apply(None).failure

    def test_flag(self, strict_str: Type) -> None:
        assert strict_str.default("x").is_default
        assert not strict_str.is_default

    def test_invalid_default_rejected(self, strict_int: Type) -> None:
        with pytest.raises(DefinitionError, match="Invalid default value 'x'"):
            strict_int.default("x")

    def test_factory_called_per_use(self) -> None:
        from typecraft.builder import instance

        t = instance(list).default(factory=list)
        first = t()
        assert first == []
        assert t() is not first

    def test_needs_exactly_one_source(self, strict_int: Type) -> None:
        with pytest.raises(DefinitionError):
            strict_int.default()
        with pytest.raises(DefinitionError):
            strict_int.default(1, factory=lambda: 2)

    def test_redefault_replaces(self, strict_int: Type) -> None:
        t = strict_int.default(1).default(2)
        assert t() == 2
        assert isinstance(t.wrapped, Constrained)

    def test_constrained_rewraps(self, strict_int: Type) -> None:
        t = strict_int.default(5).constrained(gt=0)
        assert isinstance(t, Default)
        assert len(t.wrapped.rules) == 2
        assert t() == 5
        assert t.try_apply(0).failure

    def test_constrained_revalidates_default(self, strict_int: Type) -> None:
        with pytest.raises(DefinitionError, match="Invalid default value 5"):
            strict_int.default(5).constrained(gt=10)

    def test_enum_revalidates_default(self, strict_str: Type) -> None:
        with pytest.raises(DefinitionError, match="Invalid default value 'x'"):
            strict_str.default("x").enum("a", "b")

    def test_enum_keeps_member_default(self, strict_str: Type) -> None:
        assert strict_str.default("a").enum("a", "b")() == "a"

    def test_constrained_keeps_factory(self, strict_int: Type) -> None:
        t = strict_int.default(factory=lambda: 50).constrained(gt=10)
        assert isinstance(t, Default)
        assert t() == 50
        assert t.try_apply(3).failure

    def test_constrained_without_rules_is_identity(self, strict_int: Type) -> None:
        t = strict_int.default(5)
        assert t.constrained() is t

    def test_equality(self, strict_int: Type) -> None:
        assert strict_int.default(1) == strict_int.default(1)
        assert strict_int.default(1) != strict_int.default(2)

    def test_to_ast(self, strict_int: Type) -> None:
        tag, (wrapped, source) = strict_int.default(1).to_ast()
        assert tag == "default"
        assert wrapped == strict_int.to_ast()
        assert source == ("value", 1)

    def test_factory_ast(self, strict_int: Type) -> None:
        def zero() -> int:
            return 0

        _, (_, source) = strict_int.default(factory=zero).to_ast()
        assert source == ("factory", zero.__qualname__)
