"""Type descriptors: nominal, decorators, sums, enums, aggregates.

This layer depends on ``typecraft.core`` and ``typecraft.telemetry`` only.
"""

from typecraft.types.array import ArrayOf
from typecraft.types.base import Type
from typecraft.types.constrained import Constrained
from typecraft.types.constructor import Constructor
from typecraft.types.decorator import Decorator
from typecraft.types.default import Default
from typecraft.types.enum import Enum
from typecraft.types.lax import Lax
from typecraft.types.map import Map
from typecraft.types.maybe import MaybeType
from typecraft.types.nominal import ANY, NIL, Nominal
from typecraft.types.schema import HashSchema, Key
from typecraft.types.sum import Sum

__all__ = [
    "ANY",
    "NIL",
    "ArrayOf",
    "Constrained",
    "Constructor",
    "Decorator",
    "Default",
    "Enum",
    "HashSchema",
    "Key",
    "Lax",
    "Map",
    "MaybeType",
    "Nominal",
    "Sum",
    "Type",
]
