"""Lax types: never fail, fall back to the partially coerced output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from typecraft.core.result import Result, Success
from typecraft.types.base import Type
from typecraft.types.decorator import Decorator


@dataclass(frozen=True, eq=False, repr=False)
class Lax(Decorator):
    """Return what the wrapped type managed to coerce instead of failing."""

    def _try(self, input: Any) -> Result:
        result = self.wrapped.try_apply(input)
        if result.success:
            return result
        return Success(input, result.output)

    def _eq_fields(self) -> tuple[Any, ...]:
        return (self.wrapped,)

    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        return ("lax", self.wrapped.to_ast(meta=meta))

    @property
    def lax(self) -> Type:
        return self
