"""typecraft: composable runtime type checking and coercion.

Build type descriptors once, then validate loosely-typed data with them:

- ``apply_unsafe(value)`` returns the coerced value or raises.
- ``apply_safe(value, on_failure)`` never raises.
- ``try_apply(value)`` returns ``Success`` / ``Failure``.

Example::

    from typecraft import builder as t

    Port = t.coercible(int).constrained(gt=0, lteq=65535)
    Port.apply_unsafe("8080")  # 8080
    Port.try_apply("0").message  # '0 violates constraints (gt(0, 0) failed)'
"""

from typecraft.core.errors import (
    AggregateError,
    CoercionError,
    ConstraintError,
    DefinitionError,
    MissingKeyError,
    NotApplicableError,
    NotCollectionError,
    SumError,
    TypecraftError,
    UnknownKeyError,
    ValidationFailure,
)
from typecraft.core.maybe import NOTHING, Some
from typecraft.core.result import Failure, Result, Success
from typecraft.core.undefined import Undefined
from typecraft.types import Type

__version__ = "0.1.0"

__all__ = [
    "NOTHING",
    "AggregateError",
    "CoercionError",
    "ConstraintError",
    "DefinitionError",
    "Failure",
    "MissingKeyError",
    "NotApplicableError",
    "NotCollectionError",
    "Result",
    "Some",
    "Success",
    "SumError",
    "Type",
    "TypecraftError",
    "Undefined",
    "UnknownKeyError",
    "ValidationFailure",
]
