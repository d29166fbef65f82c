"""Sum types: "left or right", tried in declared order.

The first branch that accepts the input wins. When both reject it the
``SumError`` keeps both branch failures.

Equality is order-sensitive: ``a | b != b | a`` even though both accept
the same set of inputs.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from typecraft.core.errors import SumError
from typecraft.core.result import Failure, Result
from typecraft.types.base import Type, freeze_meta
from typecraft.types.nominal import NoneType


def _flatten(primitive: type | tuple[type, ...]) -> tuple[type, ...]:
    return primitive if isinstance(primitive, tuple) else (primitive,)


@dataclass(frozen=True, eq=False, repr=False)
class Sum(Type):
    """Ordered union of two types."""

    left: Type
    right: Type
    meta: Mapping[str, Any] = field(default_factory=dict, kw_only=True)

    def __post_init__(self) -> None:
        object.__setattr__(self, "meta", freeze_meta(self.meta))

    @property
    def primitive(self) -> tuple[type, ...]:
        left = _flatten(self.left.primitive)  # type: ignore[attr-defined]
        right = _flatten(self.right.primitive)  # type: ignore[attr-defined]
        return left + tuple(p for p in right if p not in left)

    def _try(self, input: Any) -> Result:
        left = self.left.try_apply(input)
        if left.success:
            return left
        right = self.right.try_apply(input)
        if right.success:
            return right
        return Failure(input, SumError(input, left.error, right.error))

    def _eq_fields(self) -> tuple[Any, ...]:
        return (self.left, self.right)

    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        return (
            "sum",
            (
                self.left.to_ast(meta=meta),
                self.right.to_ast(meta=meta),
                dict(self.meta) if meta else {},
            ),
        )

    @property
    def is_optional(self) -> bool:
        return self.left.primitive is NoneType  # type: ignore[attr-defined]

    @property
    def lax(self) -> Type:
        return Sum(self.left.lax, self.right.lax, meta=self.meta)
