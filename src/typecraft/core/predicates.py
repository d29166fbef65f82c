"""Named predicates and the predicate registry.

A predicate is a plain function ``fn(*args, value) -> bool``. Constrained
types refer to predicates by name (``constrained(gt=0)``) and the
constraint evaluator resolves the name here.

Built-in names are reserved; applications add their own with
:func:`register_predicate`.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Collection, Sized
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Predicate:
    """A registered predicate.

    Attributes:
        name: Registry key used in ``constrained(name=...)``.
        fn: Callable taking ``arity`` configuration arguments then the value.
        arity: Number of configuration arguments (0 for flag predicates such
            as ``filled``).
    """

    name: str
    fn: Callable[..., bool]
    arity: int = 1

    def __call__(self, *args: Any) -> bool:
        return bool(self.fn(*args))


PREDICATE_REGISTRY: dict[str, Predicate] = {}


def get_predicate(name: str) -> Predicate:
    """Look up a predicate by name.

    Raises:
        KeyError: If no predicate is registered under *name*.
    """
    try:
        return PREDICATE_REGISTRY[name]
    except KeyError:
        msg = f"No predicate registered for name={name!r}"
        raise KeyError(msg) from None


def register_predicate(name: str, fn: Callable[..., bool], arity: int = 1) -> Predicate:
    """Register a custom predicate.

    Built-in names are reserved and cannot be overridden. Registering the
    same function twice under one name is a no-op.
    """
    normalized_name = name.strip()
    if not normalized_name:
        msg = "Predicate name must not be empty"
        raise ValueError(msg)
    if arity < 0:
        msg = f"Predicate {normalized_name!r} arity must be >= 0"
        raise ValueError(msg)
    if normalized_name in _BUILTIN_NAMES:
        msg = f"Predicate {normalized_name!r} is built-in and cannot be overridden"
        raise ValueError(msg)

    existing = PREDICATE_REGISTRY.get(normalized_name)
    if existing is not None:
        if existing.fn is fn and existing.arity == arity:
            return existing
        msg = f"Predicate {normalized_name!r} is already registered"
        raise ValueError(msg)

    predicate = Predicate(normalized_name, fn, arity)
    PREDICATE_REGISTRY[normalized_name] = predicate
    logger.debug("Registered predicate: %s", normalized_name)
    return predicate


# ---------------------------------------------------------------------------
# Built-in predicates
# ---------------------------------------------------------------------------


def _size(size: int | range | tuple[int, int], value: Sized) -> bool:
    length = len(value)
    if isinstance(size, range):
        return length in size
    if isinstance(size, tuple):
        low, high = size
        return low <= length <= high
    return length == size


def _is_instance(cls: type | tuple[type, ...], value: Any) -> bool:
    """``isinstance`` that does not count ``True``/``False`` as ``int``."""
    if isinstance(value, bool):
        classes = cls if isinstance(cls, tuple) else (cls,)
        return any(c is not int and isinstance(value, c) for c in classes)
    return isinstance(value, cls)


def _filled(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, Sized):
        return len(value) > 0
    return True


def _format(pattern: str | re.Pattern[str], value: str) -> bool:
    return re.search(pattern, value) is not None


def _included_in(options: Collection[Any], value: Any) -> bool:
    return value in options


def _builtin_predicates() -> dict[str, Predicate]:
    """Return the built-in predicate set keyed by name."""
    return {
        p.name: p
        for p in (
            Predicate("type", _is_instance),
            Predicate("eql", lambda expected, v: v == expected),
            Predicate("is", lambda obj, v: v is obj),
            Predicate("gt", lambda n, v: v > n),
            Predicate("gteq", lambda n, v: v >= n),
            Predicate("lt", lambda n, v: v < n),
            Predicate("lteq", lambda n, v: v <= n),
            Predicate("size", _size),
            Predicate("min_size", lambda n, v: len(v) >= n),
            Predicate("max_size", lambda n, v: len(v) <= n),
            Predicate("included_in", _included_in),
            Predicate("excluded_from", lambda options, v: v not in options),
            Predicate("includes", lambda item, v: item in v),
            Predicate("excludes", lambda item, v: item not in v),
            Predicate("format", _format),
            Predicate("filled", _filled, arity=0),
            Predicate("empty", lambda v: not _filled(v), arity=0),
            Predicate("odd", lambda v: v % 2 == 1, arity=0),
            Predicate("even", lambda v: v % 2 == 0, arity=0),
            Predicate("true", lambda v: v is True, arity=0),
            Predicate("false", lambda v: v is False, arity=0),
            Predicate("none", lambda v: v is None, arity=0),
        )
    }


_BUILTINS = _builtin_predicates()
_BUILTIN_NAMES = frozenset(_BUILTINS)
PREDICATE_REGISTRY.update(_BUILTINS)
