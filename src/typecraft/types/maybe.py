"""Maybe types: results wrapped in ``Some`` / ``NOTHING``."""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from typecraft.core.errors import DefinitionError
from typecraft.core.maybe import NOTHING, Nothing, Some, maybe_of
from typecraft.core.result import Result, Success
from typecraft.core.undefined import Undefined
from typecraft.types.decorator import Decorator


def _some_factory(factory: Callable[[], Any]) -> Callable[[], Any]:
    @functools.wraps(factory)
    def produce() -> Any:
        value = factory()
        if isinstance(value, Some | Nothing):
            return value
        return maybe_of(value)

    return produce


@dataclass(frozen=True, eq=False, repr=False)
class MaybeType(Decorator):
    """Wraps an optional type (``NIL | T``).

    ``None`` and missing input become ``NOTHING``; a valid value becomes
    ``Some(value)``; values that are already ``Some``/``NOTHING`` pass
    through untouched.
    """

    def _try(self, input: Any) -> Result:
        if isinstance(input, Some | Nothing):
            return Success(input, input)
        if input is Undefined:
            return Success(input, NOTHING)
        result = self.wrapped.try_apply(input)
        if result.failure:
            return result
        return Success(input, maybe_of(result.value))

    def _eq_fields(self) -> tuple[Any, ...]:
        return (self.wrapped,)

    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        return ("maybe", self.wrapped.to_ast(meta=meta))

    @property
    def is_default(self) -> bool:
        return True

    def default(self, value: Any = Undefined, *, factory: Callable[[], Any] | None = None) -> Any:
        if value is None:
            msg = "None cannot be used as a default of a maybe type"
            raise DefinitionError(msg)
        if value is not Undefined:
            value = maybe_of(value)
        if factory is not None and callable(factory):
            factory = _some_factory(factory)
        return super().default(value, factory=factory)
