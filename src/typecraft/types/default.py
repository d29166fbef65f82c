"""Default types: substitute a value when no input is supplied."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from typecraft.core.errors import DefinitionError
from typecraft.core.result import Result, Success
from typecraft.core.undefined import Undefined
from typecraft.types.base import Type
from typecraft.types.decorator import Decorator


@dataclass(frozen=True, eq=False, repr=False)
class Default(Decorator):
    """Wrapped type with a fixed default ``value`` or a ``factory``."""

    value: Any = Undefined
    factory: Callable[[], Any] | None = None

    @classmethod
    def build(
        cls,
        wrapped: Type,
        value: Any = Undefined,
        factory: Callable[[], Any] | None = None,
    ) -> Default:
        """Build a default type, validating a fixed default up front.

        Raises:
            DefinitionError: If neither or both of *value* and *factory* are
                given, or *value* is rejected by *wrapped*.
        """
        if (value is Undefined) == (factory is None):
            msg = "Pass exactly one of a default value or factory="
            raise DefinitionError(msg)
        if factory is not None:
            if not callable(factory):
                msg = f"Default factory must be callable, got {factory!r}"
                raise DefinitionError(msg)
            return cls(wrapped, factory=factory)

        result = wrapped.try_apply(value)
        if result.failure:
            msg = f"Invalid default value {value!r}: {result.message}"
            raise DefinitionError(msg)
        return cls(wrapped, value=value)

    def evaluate(self) -> Any:
        """Produce the default value."""
        if self.factory is not None:
            return self.factory()
        return self.value

    def _try(self, input: Any) -> Result:
        if input is Undefined:
            return Success(input, self.evaluate())
        return self.wrapped.try_apply(input)

    def _eq_fields(self) -> tuple[Any, ...]:
        return (self.wrapped, self.value, self.factory)

    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        if self.factory is not None:
            source: tuple[str, Any] = ("factory", getattr(self.factory, "__qualname__", repr(self.factory)))
        else:
            source = ("value", self.value)
        return ("default", (self.wrapped.to_ast(meta=meta), source))

    @property
    def is_default(self) -> bool:
        return True

    def default(self, value: Any = Undefined, *, factory: Callable[[], Any] | None = None) -> Default:
        """Replace the default rather than stacking a second one."""
        return self.wrapped.default(value, factory=factory)

    def constrained(self, **predicates: Any) -> Type:
        """Constrain the wrapped type and check the fixed default against it.

        Raises:
            DefinitionError: If the default value no longer satisfies the
                constrained type.
        """
        if not predicates:
            return self
        return Default.build(self.wrapped.constrained(**predicates), self.value, self.factory)
