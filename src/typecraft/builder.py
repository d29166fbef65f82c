"""Free-function construction interface.

Thin, explicit constructors for every type variant, so callers never
need to reach into ``typecraft.types`` or extend built-in containers.

Usage::

    from typecraft import builder as t

    User = t.hash_schema(
        {
            "name": t.strict(str).constrained(filled=True),
            "age": t.coercible(int).constrained(gteq=0),
            "role": t.strict(str).default("member").enum("member", "admin"),
            "tags?": t.array_of(t.strict(str)),
        }
    )
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from typecraft.core.errors import DefinitionError
from typecraft.types.array import ArrayOf
from typecraft.types.base import Type
from typecraft.types.constructor import Constructor
from typecraft.types.enum import Enum
from typecraft.types.map import Map
from typecraft.types.maybe import MaybeType
from typecraft.types.nominal import ANY, NIL, Nominal
from typecraft.types.schema import HashSchema, Key
from typecraft.types.sum import Sum

__all__ = [
    "ANY",
    "NIL",
    "array_of",
    "coercible",
    "constant",
    "constructor",
    "enum",
    "hash_schema",
    "instance",
    "map_of",
    "maybe",
    "nominal",
    "optional",
    "strict",
    "sum_of",
    "value",
    "wrap",
]


def nominal(cls: type) -> Nominal:
    """A type that records *cls* but accepts any input."""
    return Nominal(cls)


def instance(cls: type) -> Type:
    """Values must be instances of *cls* (checked with ``isinstance``)."""
    return Nominal(cls).constrained(type=cls)


strict = instance


def value(expected: Any) -> Type:
    """Exactly one value, compared with ``==``."""
    return Nominal(type(expected)).constrained(eql=expected)


def constant(obj: Any) -> Type:
    """Exactly one object, compared by identity."""
    return Nominal(type(obj)).constrained(**{"is": obj})


def wrap(base: Type, **predicates: Any) -> Type:
    """Constrain *base* with named predicates."""
    return _require_type(base).constrained(**predicates)


def constructor(base: Type, fn: Callable[[Any], Any]) -> Constructor:
    return _require_type(base).constructor(fn)


def coercible(cls: type, fn: Callable[[Any], Any] | None = None) -> Constructor:
    """Coerce with *fn* (default: ``cls`` itself), then require an instance.

    Examples:
        >>> coercible(int).apply_unsafe("42")
        42
    """
    return instance(cls).constructor(fn or cls)


def enum(base: Type, *values: Any) -> Enum:
    return _require_type(base).enum(*values)


def sum_of(left: Type, right: Type, *more: Type) -> Sum:
    """Left-to-right union: ``sum_of(a, b, c)`` is ``(a | b) | c``."""
    result = Sum(_require_type(left), _require_type(right))
    for branch in more:
        result = Sum(result, _require_type(branch))
    return result


def array_of(member: Type) -> ArrayOf:
    return ArrayOf(_require_type(member))


def hash_schema(
    fields: Mapping[str, Type | Key] | Iterable[Key],
    *,
    strict: bool = False,
) -> HashSchema:
    """A dict schema; names ending in ``?`` are optional keys."""
    return HashSchema(fields, strict=strict)


def map_of(key_type: Type, value_type: Type) -> Map:
    return Map(_require_type(key_type), _require_type(value_type))


def optional(base: Type) -> Sum:
    return _require_type(base).optional


def maybe(base: Type) -> MaybeType:
    if _require_type(base).is_optional:
        return MaybeType(base)
    return base.maybe


def _require_type(obj: Any) -> Type:
    if not isinstance(obj, Type):
        msg = f"Expected a type descriptor, got {obj!r}"
        raise DefinitionError(msg)
    return obj
