"""The ``Undefined`` sentinel: "no input supplied" and "no value produced".

``None`` is a legitimate input value, so absence needs its own marker.
Constructor functions return ``Undefined`` to drop a value; aggregates
filter such members out of their output.
"""

from __future__ import annotations

from typing import Any, Final


class _UndefinedType:
    """Singleton type of :data:`Undefined`."""

    _instance: _UndefinedType | None = None

    def __new__(cls) -> _UndefinedType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Undefined"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _UndefinedType:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _UndefinedType:
        return self

    def __reduce__(self) -> str:
        return "Undefined"


Undefined: Final = _UndefinedType()


def is_undefined(value: object) -> bool:
    """Return True when *value* is the :data:`Undefined` sentinel."""
    return value is Undefined


def default_if_undefined(value: Any, fallback: Any) -> Any:
    """Return *fallback* when *value* is :data:`Undefined`, else *value*.

    Examples:
        >>> default_if_undefined(Undefined, 1)
        1
        >>> default_if_undefined(None, 1) is None
        True
    """
    return fallback if value is Undefined else value
