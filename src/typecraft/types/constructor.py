"""Constructor types: coerce the input before the wrapped type checks it.

A constructor function may return ``Undefined`` to say "no value": the
chain stops there and aggregates drop the member. A function that raises
``TypeError``, ``ValueError``, ``AttributeError``, ``LookupError`` or
``ArithmeticError`` produces a ``CoercionError`` failure, so ``try_apply``
still never raises for ill-typed input.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from typecraft.core.errors import (
    INPUT_ERRORS,
    CoercionError,
    DefinitionError,
    ValidationFailure,
)
from typecraft.core.result import Failure, Result, Success
from typecraft.core.undefined import Undefined
from typecraft.types.base import Type
from typecraft.types.decorator import Decorator

logger = logging.getLogger(__name__)


def _callable_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


@dataclass(frozen=True, eq=False, repr=False)
class Constructor(Decorator):
    """A wrapped type plus a chain of transform functions, applied in order."""

    fns: tuple[Callable[[Any], Any], ...] | Callable[[Any], Any] = ()

    def __post_init__(self) -> None:
        fns = (self.fns,) if callable(self.fns) else tuple(self.fns)
        if not fns:
            msg = "Constructor requires at least one function"
            raise DefinitionError(msg)
        for fn in fns:
            if not callable(fn):
                msg = f"Constructor function must be callable, got {fn!r}"
                raise DefinitionError(msg)
        object.__setattr__(self, "fns", fns)

    def _try(self, input: Any) -> Result:
        if input is Undefined:
            return self.wrapped.try_apply(input)

        value = input
        for fn in self.fns:  # type: ignore[union-attr]
            try:
                value = fn(value)
            except ValidationFailure as exc:
                return Failure(input, exc)
            except INPUT_ERRORS as exc:
                logger.debug("Coercion by %s failed for %r", _callable_name(fn), input)
                return Failure(input, CoercionError(input, f"{input!r} could not be coerced: {exc}"))
            if value is Undefined:
                return Success(input, Undefined)

        result = self.wrapped.try_apply(value)
        if result.failure:
            return Failure(input, result.error, result.output)
        return Success(input, result.value)

    def _eq_fields(self) -> tuple[Any, ...]:
        return (self.wrapped, self.fns)

    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        fns = tuple(("callable", _callable_name(fn)) for fn in self.fns)  # type: ignore[union-attr]
        return ("constructor", (self.wrapped.to_ast(meta=meta), fns))

    def constructor(self, fn: Callable[[Any], Any]) -> Constructor:
        """Append *fn*: it runs after the existing functions."""
        return replace(self, fns=(*self.fns, fn))  # type: ignore[misc]

    def prepend(self, fn: Callable[[Any], Any]) -> Constructor:
        """Prepend *fn*: it runs before the existing functions."""
        return replace(self, fns=(fn, *self.fns))  # type: ignore[misc]

    @property
    def lax(self) -> Type:
        from typecraft.types.lax import Lax

        return Lax(Constructor(self.wrapped.lax, self.fns))
