"""Enum types: a bijective label <-> raw value mapping over a base type.

Inputs are translated before the wrapped type (usually
``base.constrained(included_in=labels)``) checks them:

- ``Undefined`` -> whatever default the wrapped type produces;
- a label -> unchanged;
- a raw value -> its label;
- anything else -> unchanged, so the wrapped type rejects it.

INVARIANT: ``mapping`` is invertible. Two labels sharing a raw value is a
``DefinitionError`` at construction.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from typecraft.core.errors import DefinitionError
from typecraft.core.result import Failure, Result, Success
from typecraft.core.undefined import Undefined
from typecraft.types.decorator import Decorator


@dataclass(frozen=True, eq=False, repr=False)
class Enum(Decorator):
    """Restricts the wrapped type to a fixed set of labels.

    Attributes:
        mapping: Ordered ``label -> raw value`` mapping.
        values: Labels, in declaration order.
        inverted_mapping: ``raw value -> label``.
    """

    mapping: Mapping[Any, Any] = field(default_factory=dict)
    values: tuple[Any, ...] = field(init=False)
    inverted_mapping: Mapping[Any, Any] = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.mapping, Mapping):
            msg = f"Enum mapping must be a mapping, got {type(self.mapping).__name__}"
            raise DefinitionError(msg)
        mapping = dict(self.mapping)
        try:
            inverted = {raw: label for label, raw in mapping.items()}
        except TypeError as exc:
            msg = f"Enum raw values must be hashable: {mapping!r}"
            raise DefinitionError(msg) from exc
        if len(inverted) != len(mapping):
            msg = f"Enum mapping is not invertible, raw values repeat: {mapping!r}"
            raise DefinitionError(msg)
        object.__setattr__(self, "mapping", MappingProxyType(mapping))
        object.__setattr__(self, "values", tuple(mapping))
        object.__setattr__(self, "inverted_mapping", MappingProxyType(inverted))

    def map_value(self, input: Any) -> Any:
        """Translate *input* to a label where possible, else pass it through."""
        if input is Undefined:
            return self.wrapped.apply_safe(Undefined)
        try:
            if input in self.mapping:
                return input
            return self.inverted_mapping.get(input, input)
        except TypeError:
            return input

    def _try(self, input: Any) -> Result:
        if input is Undefined:
            return self.wrapped.try_apply(input)
        result = self.wrapped.try_apply(self.map_value(input))
        if result.failure:
            return Failure(input, result.error, result.output)
        return Success(input, result.value)

    def _eq_fields(self) -> tuple[Any, ...]:
        return (self.wrapped, tuple(self.mapping.items()))

    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        return ("enum", (self.wrapped.to_ast(meta=meta), dict(self.mapping)))

    def default(self, value: Any = Undefined, *, factory: Callable[[], Any] | None = None) -> Any:
        msg = (
            ".enum(*values).default(value) is not supported. "
            "Call .default(value).enum(*values) instead"
        )
        raise DefinitionError(msg)

    def __contains__(self, value: Any) -> bool:
        return self.is_valid(value)
