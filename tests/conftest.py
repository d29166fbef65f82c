"""Shared pytest fixtures for typecraft tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from typecraft.builder import coercible, instance
from typecraft.core.predicates import PREDICATE_REGISTRY
from typecraft.types import Constructor, Type


@pytest.fixture
def strict_int() -> Type:
    """``int`` instances only, no coercion."""
    return instance(int)


@pytest.fixture
def strict_str() -> Type:
    return instance(str)


@pytest.fixture
def coercible_int() -> Constructor:
    """``int(value)`` then an ``int`` instance check."""
    return coercible(int)


@pytest.fixture
def predicate_registry() -> Generator[dict[str, object]]:
    """Restore the predicate registry after a test registers custom ones."""
    snapshot = dict(PREDICATE_REGISTRY)
    yield PREDICATE_REGISTRY
    PREDICATE_REGISTRY.clear()
    PREDICATE_REGISTRY.update(snapshot)
