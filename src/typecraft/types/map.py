"""Map types: one key type and one value type for every entry."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from typecraft.core.errors import AggregateError, NotCollectionError, ValidationFailure
from typecraft.core.result import Failure, Result, Success
from typecraft.core.undefined import Undefined
from typecraft.types.base import Type, freeze_meta
from typecraft.types.nominal import ANY


@dataclass(frozen=True, eq=False, repr=False)
class Map(Type):
    """A dict whose keys satisfy ``key_type`` and values ``value_type``.

    Failures are keyed by the original input key. A key failure hides the
    value check for that entry.
    """

    key_type: Type = ANY
    value_type: Type = ANY
    meta: Mapping[str, Any] = field(default_factory=dict, kw_only=True)

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))

    @property
    def primitive(self) -> type:
        return dict

    def _try(self, input: Any) -> Result:
        if not isinstance(input, Mapping):
            return Failure(input, NotCollectionError(input, "a hash"))

        output: dict[Any, Any] = {}
        errors: dict[Any, ValidationFailure] = {}
        for raw_key, raw_value in input.items():
            key = self.key_type.try_apply(raw_key)
            if key.failure:
                errors[raw_key] = key.error
                output[raw_key] = raw_value
                continue
            value = self.value_type.try_apply(raw_value)
            if value.failure:
                errors[raw_key] = value.error
                output[key.value] = value.output
                continue
            if key.value is Undefined or value.value is Undefined:
                continue
            output[key.value] = value.value

        if errors:
            return Failure(input, AggregateError(input, errors), output)
        return Success(input, output)

    def _eq_fields(self) -> tuple[Any, ...]:
        return (self.key_type, self.value_type)

    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        return (
            "map",
            (
                self.key_type.to_ast(meta=meta),
                self.value_type.to_ast(meta=meta),
                dict(self.meta) if meta else {},
            ),
        )

    @property
    def lax(self) -> Type:
        from typecraft.types.lax import Lax

        return Lax(replace(self, key_type=self.key_type.lax, value_type=self.value_type.lax))
