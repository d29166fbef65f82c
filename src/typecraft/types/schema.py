"""Hash schemas: per-key types applied to a mapping.

Key names ending in ``?`` are optional (``{"nickname?": STRING}``).
Missing required keys fail with ``MissingKeyError``; a missing key whose
type has a default gets the default. Unknown keys are dropped from the
output, or rejected one ``UnknownKeyError`` each when the schema is strict.

Every key is checked; failures accumulate, keyed by field name.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from typecraft.core.errors import (
    AggregateError,
    DefinitionError,
    MissingKeyError,
    NotCollectionError,
    UnknownKeyError,
    ValidationFailure,
)
from typecraft.core.result import Failure, Result, Success
from typecraft.core.undefined import Undefined
from typecraft.types.base import Type, freeze_meta

OPTIONAL_SUFFIX = "?"


@dataclass(frozen=True)
class Key:
    """One schema entry."""

    name: str
    value_type: Type
    required: bool = True

    def optional(self) -> Key:
        return replace(self, required=False)

    @property
    def lax(self) -> Key:
        return replace(self, value_type=self.value_type.lax)

    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        return ("key", (self.name, self.required, self.value_type.to_ast(meta=meta)))


def parse_keys(fields: Mapping[str, Type | Key] | Iterable[Key]) -> tuple[Key, ...]:
    """Normalize a field definition into keys.

    Raises:
        DefinitionError: On duplicate names or values that are not types.
    """
    if isinstance(fields, Mapping):
        items: list[Key] = []
        for raw_name, value in fields.items():
            if isinstance(value, Key):
                items.append(value)
                continue
            if not isinstance(value, Type):
                msg = f"Schema field {raw_name!r} must be a type, got {value!r}"
                raise DefinitionError(msg)
            name = str(raw_name)
            if name.endswith(OPTIONAL_SUFFIX):
                items.append(Key(name[: -len(OPTIONAL_SUFFIX)], value, required=False))
            else:
                items.append(Key(name, value))
    else:
        items = list(fields)
        for item in items:
            if not isinstance(item, Key):
                msg = f"Schema keys must be Key instances, got {item!r}"
                raise DefinitionError(msg)

    seen: set[str] = set()
    for key in items:
        if key.name in seen:
            msg = f"Duplicate schema key {key.name!r}"
            raise DefinitionError(msg)
        seen.add(key.name)
    return tuple(items)


@dataclass(frozen=True, eq=False, repr=False)
class HashSchema(Type):
    """A dict with declared keys; ``strict`` closes it to unknown keys."""

    keys: tuple[Key, ...] | Mapping[str, Type | Key] = ()
    strict: bool = field(default=False, kw_only=True)
    meta: Mapping[str, Any] = field(default_factory=dict, kw_only=True)

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", parse_keys(self.keys))
        object.__setattr__(self, "meta", freeze_meta(self.meta))

    @property
    def primitive(self) -> type:
        return dict

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(k.name for k in self.keys)  # type: ignore[union-attr]

    @property
    def field_types(self) -> Mapping[str, Type]:
        return MappingProxyType({k.name: k.value_type for k in self.keys})  # type: ignore[union-attr]

    def key(self, name: str) -> Key:
        """Look up a key by name.

        Raises:
            KeyError: If the schema does not declare *name*.
        """
        for key in self.keys:  # type: ignore[union-attr]
            if key.name == name:
                return key
        msg = f"Schema has no key {name!r}"
        raise KeyError(msg)

    def schema(self, fields: Mapping[str, Type | Key] | Iterable[Key]) -> HashSchema:
        """Extend with more keys; a redeclared name replaces the old key."""
        extra = parse_keys(fields)
        replaced = {k.name for k in extra}
        kept = tuple(k for k in self.keys if k.name not in replaced)  # type: ignore[union-attr]
        return replace(self, keys=kept + extra)

    def as_strict(self) -> HashSchema:
        return replace(self, strict=True)

    def as_open(self) -> HashSchema:
        return replace(self, strict=False)

    def _try(self, input: Any) -> Result:
        if not isinstance(input, Mapping):
            return Failure(input, NotCollectionError(input, "a hash"))

        output: dict[str, Any] = {}
        errors: dict[str, ValidationFailure] = {}
        for key in self.keys:  # type: ignore[union-attr]
            if key.name in input:
                result = key.value_type.try_apply(input[key.name])
            elif key.value_type.is_default:
                result = key.value_type.try_apply(Undefined)
            elif key.required:
                errors[key.name] = MissingKeyError(input, key.name)
                continue
            else:
                continue

            if result.failure:
                errors[key.name] = result.error
                output[key.name] = result.output
            elif result.value is not Undefined:
                output[key.name] = result.value

        if self.strict:
            declared = set(self.names)
            for name in input:
                if name not in declared:
                    errors[name] = UnknownKeyError(input, name)

        if errors:
            return Failure(input, AggregateError(input, errors), output)
        return Success(input, output)

    def _eq_fields(self) -> tuple[Any, ...]:
        return (self.keys, self.strict)

    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        return (
            "schema",
            (
                tuple(k.to_ast(meta=meta) for k in self.keys),  # type: ignore[union-attr]
                {"strict": self.strict},
                dict(self.meta) if meta else {},
            ),
        )

    @property
    def lax(self) -> Type:
        from typecraft.types.lax import Lax

        return Lax(replace(self, keys=tuple(k.lax for k in self.keys)))  # type: ignore[union-attr]
