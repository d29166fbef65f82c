"""Success and Failure: the universal result of ``try_apply``.

INVARIANT: ``try_apply`` never raises. Every type composes its children
through these values instead of catching exceptions, and ``apply_unsafe``
is exactly ``try_apply(input).value_or_raise()``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal, NoReturn

from typecraft.core.errors import AggregateError, ValidationFailure
from typecraft.core.undefined import Undefined

if TYPE_CHECKING:
    from typecraft.reports import FailureReport


@dataclass(frozen=True)
class Success:
    """A validated (and possibly coerced) value.

    Attributes:
        input: The raw input the type received.
        value: The output; ``Undefined`` when a constructor dropped it.
    """

    input: Any
    value: Any

    @property
    def success(self) -> Literal[True]:
        return True

    @property
    def failure(self) -> Literal[False]:
        return False

    def value_or_raise(self) -> Any:
        return self.value

    def value_or(self, fallback: Any) -> Any:
        return self.value

    def map(self, fn: Callable[[Any], Any]) -> Success:
        """Transform the value, keeping the original input."""
        return Success(self.input, fn(self.value))


@dataclass(frozen=True)
class Failure:
    """A rejected input together with the reason tree.

    Attributes:
        input: The raw input the type received.
        error: The unraised failure describing why.
        output: Partially coerced value (aggregates coerce the members that
            passed); defaults to ``input``.
    """

    input: Any
    error: ValidationFailure
    output: Any = field(default=Undefined)

    def __post_init__(self) -> None:
        if self.output is Undefined:
            object.__setattr__(self, "output", self.input)

    @property
    def success(self) -> Literal[False]:
        return False

    @property
    def failure(self) -> Literal[True]:
        return True

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def errors(self) -> Mapping[Any, ValidationFailure]:
        """Per-member failures for aggregate errors, empty otherwise."""
        if isinstance(self.error, AggregateError):
            return self.error.errors
        return {}

    def value_or_raise(self) -> NoReturn:
        raise self.error

    def value_or(self, fallback: Any) -> Any:
        return fallback

    def map(self, fn: Callable[[Any], Any]) -> Failure:
        return self

    def to_report(self) -> FailureReport:
        """Render the failure tree as a serializable report."""
        from typecraft.reports import build_report

        return build_report(self.error)

    def __str__(self) -> str:
        return self.error.message


Result = Success | Failure
