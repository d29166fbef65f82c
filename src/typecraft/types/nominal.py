"""Nominal types: a primitive class and nothing else.

A nominal type accepts every input unchanged; it only records the class
that inputs are meant to be. Strictness comes from constraining it
(``Nominal(int).constrained(type=int)``).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from typecraft.core.result import Result, Success
from typecraft.types.base import Type, freeze_meta, primitive_name

NoneType = type(None)


@dataclass(frozen=True, eq=False, repr=False)
class Nominal(Type):
    """Type identified by its primitive class only."""

    primitive: type | tuple[type, ...] = object
    meta: Mapping[str, Any] = field(default_factory=dict, kw_only=True)

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))

    def _try(self, input: Any) -> Result:
        return Success(input, input)

    def _eq_fields(self) -> tuple[Any, ...]:
        return (self.primitive,)

    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        return ("nominal", (primitive_name(self.primitive), dict(self.meta) if meta else {}))


ANY = Nominal(object)
NIL = Nominal(NoneType).constrained(type=NoneType)
