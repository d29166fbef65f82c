"""Array types: a member type applied to every element of a sequence.

Every element is checked; failures are accumulated per index into one
``AggregateError`` rather than stopping at the first. Elements whose
member type produces ``Undefined`` are dropped from the output.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass, field, replace
from typing import Any

from typecraft.core.errors import AggregateError, NotCollectionError, ValidationFailure
from typecraft.core.result import Failure, Result, Success
from typecraft.core.undefined import Undefined
from typecraft.types.base import Type, freeze_meta
from typecraft.types.nominal import ANY


def is_collection(value: Any) -> bool:
    """True for lists, tuples, sets and other non-string sequences."""
    if isinstance(value, str | bytes | bytearray):
        return False
    return isinstance(value, Sequence | Set)


@dataclass(frozen=True, eq=False, repr=False)
class ArrayOf(Type):
    """A list whose elements all satisfy ``member``."""

    member: Type = ANY
    meta: Mapping[str, Any] = field(default_factory=dict, kw_only=True)

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))

    @property
    def primitive(self) -> type:
        return list

    def of(self, member: Type) -> ArrayOf:
        return replace(self, member=member)

    def _try(self, input: Any) -> Result:
        if not is_collection(input):
            return Failure(input, NotCollectionError(input, "an array"))

        output: list[Any] = []
        errors: dict[int, ValidationFailure] = {}
        for index, element in enumerate(input):
            result = self.member.try_apply(element)
            if result.failure:
                errors[index] = result.error
                output.append(result.output)
            elif result.value is not Undefined:
                output.append(result.value)

        if errors:
            return Failure(input, AggregateError(input, errors), output)
        return Success(input, output)

    def _eq_fields(self) -> tuple[Any, ...]:
        return (self.member,)

    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        return ("array", (self.member.to_ast(meta=meta), dict(self.meta) if meta else {}))

    @property
    def lax(self) -> Type:
        from typecraft.types.lax import Lax

        return Lax(replace(self, member=self.member.lax))
