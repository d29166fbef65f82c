"""Exception taxonomy for type definition and validation failures.

Two families:
- ``DefinitionError``: raised while *building* a type (bad enum mapping,
  unknown predicate, default applied after ``enum``).
- ``ValidationFailure`` and subclasses: describe why an input was
  rejected. ``try_apply`` returns them unraised inside a ``Failure``;
  ``apply_unsafe`` raises the same instance.

INVARIANT: a failure's message is derived from its structure only, so the
raise, safe and try paths render identical text.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar

# Raised by user functions and predicates handed input they cannot handle.
INPUT_ERRORS = (TypeError, ValueError, AttributeError, LookupError, ArithmeticError)


class TypecraftError(Exception):
    """Root of every exception raised by typecraft."""


class DefinitionError(TypecraftError, ValueError):
    """A type could not be constructed from the given definition."""


class ValidationFailure(TypecraftError, TypeError):
    """Base class for input rejections.

    Attributes:
        input: The offending input value.
        message: Human-readable description of the failure.
    """

    code: ClassVar[str] = "invalid"

    def __init__(self, input: Any, message: str) -> None:
        super().__init__(message)
        self.input = input
        self.message = message

    def __str__(self) -> str:
        return self.message


class CoercionError(ValidationFailure):
    """A constructor function could not transform the input."""

    code: ClassVar[str] = "coercion"

    def __init__(self, input: Any, message: str | None = None) -> None:
        super().__init__(input, message or f"{input!r} could not be coerced")


class NotApplicableError(CoercionError):
    """A supplied input produced no value at all."""

    code: ClassVar[str] = "not_applicable"

    def __init__(self, input: Any) -> None:
        super().__init__(input, f"{input!r} produced no value")


class NotCollectionError(CoercionError):
    """A container type received something that is not a container."""

    code: ClassVar[str] = "not_a_collection"

    def __init__(self, input: Any, expected: str) -> None:
        super().__init__(input, f"{input!r} is not {expected}")
        self.expected = expected


def render_argument(arg: Any) -> str:
    """Render a predicate argument; classes by name, everything else by repr."""
    if isinstance(arg, type):
        return arg.__qualname__
    return repr(arg)


class ConstraintError(ValidationFailure):
    """A value failed a named predicate.

    Attributes:
        predicate: Name of the failing predicate (e.g. ``"gt"``).
        arguments: Arguments the predicate was configured with.
        value: The value the predicate was evaluated against.
    """

    code: ClassVar[str] = "constraint"

    def __init__(self, value: Any, predicate: str, args: tuple[Any, ...]) -> None:
        call = ", ".join(render_argument(a) for a in (*args, value))
        super().__init__(value, f"{value!r} violates constraints ({predicate}({call}) failed)")
        self.predicate = predicate
        self.arguments = args
        self.value = value


class SumError(ValidationFailure):
    """Every branch of a sum type rejected the input."""

    code: ClassVar[str] = "sum"

    def __init__(self, input: Any, left: ValidationFailure, right: ValidationFailure) -> None:
        super().__init__(input, f"{input!r} matches no branch (left: {left}; right: {right})")
        self.left = left
        self.right = right

    @property
    def branches(self) -> tuple[ValidationFailure, ValidationFailure]:
        return (self.left, self.right)


def format_path_key(key: Any) -> str:
    """Render an aggregate key: ``[0]`` for indexes, the name for fields."""
    if isinstance(key, int) and not isinstance(key, bool):
        return f"[{key}]"
    return str(key)


class AggregateError(ValidationFailure):
    """One or more members of a container failed.

    INVARIANT: sibling failures are never discarded. ``errors`` holds one
    entry per offending index, field, or map key, in input order.
    """

    code: ClassVar[str] = "aggregate"

    def __init__(self, input: Any, errors: Mapping[Any, ValidationFailure]) -> None:
        details = "; ".join(f"{format_path_key(k)}: {e}" for k, e in errors.items())
        super().__init__(input, f"invalid members ({details})")
        self.errors: Mapping[Any, ValidationFailure] = MappingProxyType(dict(errors))


class MissingKeyError(ValidationFailure):
    """A required schema key is absent from the input mapping."""

    code: ClassVar[str] = "missing_key"

    def __init__(self, input: Any, key: str) -> None:
        super().__init__(input, f"{key!r} is missing in hash input")
        self.key = key


class UnknownKeyError(ValidationFailure):
    """A strict schema received a key it does not declare."""

    code: ClassVar[str] = "unknown_key"

    def __init__(self, input: Any, key: Any) -> None:
        super().__init__(input, f"unexpected key {key!r} in hash input")
        self.key = key
