"""Optional values: ``Some(value)`` or ``NOTHING``.

A self-contained two-variant wrapper used by maybe types. ``None`` maps
to ``NOTHING``; everything else is wrapped in ``Some``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final


@dataclass(frozen=True)
class Some:
    """A present value."""

    value: Any

    @property
    def is_some(self) -> bool:
        return True

    @property
    def is_nothing(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> Maybe:
        """Apply *fn* to the value; a ``None`` result becomes ``NOTHING``."""
        return maybe_of(fn(self.value))

    def bind(self, fn: Callable[[Any], Maybe]) -> Maybe:
        return fn(self.value)

    def value_or(self, fallback: Any) -> Any:
        return self.value

    def unwrap(self) -> Any:
        return self.value


class Nothing:
    """The absent value. Use the :data:`NOTHING` singleton."""

    _instance: Nothing | None = None

    def __new__(cls) -> Nothing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOTHING"

    def __bool__(self) -> bool:
        return False

    @property
    def is_some(self) -> bool:
        return False

    @property
    def is_nothing(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], Any]) -> Maybe:
        return self

    def bind(self, fn: Callable[[Any], Maybe]) -> Maybe:
        return self

    def value_or(self, fallback: Any) -> Any:
        return fallback

    def unwrap(self) -> Any:
        msg = "Cannot unwrap NOTHING"
        raise ValueError(msg)


NOTHING: Final = Nothing()

Maybe = Some | Nothing


def maybe_of(value: Any) -> Maybe:
    """Wrap *value*: ``None`` -> ``NOTHING``, anything else -> ``Some``.

    Examples:
        >>> maybe_of(1)
        Some(value=1)
        >>> maybe_of(None)
        NOTHING
    """
    if value is None:
        return NOTHING
    return Some(value)
