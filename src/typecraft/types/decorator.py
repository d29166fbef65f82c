"""Decorator: a type built on top of another type.

A decorator overrides a few behaviors (coercion, default substitution,
enum translation...) and delegates everything else to ``wrapped``.

INVARIANT: builder calls that reshape the wrapped type are re-wrapped in
the same decorator kind. ``Constructor(t).constrained(gt=0)`` is
``Constructor(t.constrained(gt=0))``, never a bare ``Constrained``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, Self

from typecraft.types.base import Type


@dataclass(frozen=True, eq=False, repr=False)
class Decorator(Type):
    """Base for types wrapping another type."""

    wrapped: Type

    def _rewrap(self, inner: Type) -> Self:
        return replace(self, wrapped=inner)

    # --- Delegated introspection ----------------------------------------

    @property
    def primitive(self) -> type | tuple[type, ...]:
        return self.wrapped.primitive  # type: ignore[attr-defined]

    @property
    def meta(self) -> Mapping[str, Any]:
        return self.wrapped.meta  # type: ignore[attr-defined]

    @property
    def is_default(self) -> bool:
        return self.wrapped.is_default

    @property
    def is_optional(self) -> bool:
        return self.wrapped.is_optional

    @property
    def is_constrained(self) -> bool:
        return self.wrapped.is_constrained

    @property
    def member(self) -> Type:
        """Member type of a wrapped array type."""
        return self.wrapped.member  # type: ignore[attr-defined]

    @property
    def keys(self) -> Any:
        """Schema keys of a wrapped hash schema."""
        return self.wrapped.keys  # type: ignore[attr-defined]

    @property
    def key_type(self) -> Type:
        return self.wrapped.key_type  # type: ignore[attr-defined]

    @property
    def value_type(self) -> Type:
        return self.wrapped.value_type  # type: ignore[attr-defined]

    # --- Re-wrapping builders --------------------------------------------

    def constrained(self, **predicates: Any) -> Type:
        if not predicates:
            return self
        return self._rewrap(self.wrapped.constrained(**predicates))

    def with_meta(self, **meta: Any) -> Self:
        return self._rewrap(self.wrapped.with_meta(**meta))

    def pristine(self) -> Self:
        return self._rewrap(self.wrapped.pristine())

    @property
    def lax(self) -> Type:
        return self._rewrap(self.wrapped.lax)
