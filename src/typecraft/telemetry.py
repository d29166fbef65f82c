"""Validation tracing: Span, trace_span, tracing.

Near-zero overhead when disabled (single ContextVar.get per call).
When enabled, every ``try_apply`` call records a span, so one validation
produces a tree mirroring the layers the input passed through. Inside
:func:`tracing` the tree hangs off the yielded root; otherwise each outermost
call is its own root, logged on completion and then dropped.
"""

from __future__ import annotations

import time
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

import structlog

# ── Context variables ────────────────────────────────────────────────

_tracing_enabled: ContextVar[bool] = ContextVar("_tracing_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


# ── Span ─────────────────────────────────────────────────────────────


@dataclass
class Span:
    """Hierarchical timing span for one validation layer."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "duration_ms": round(self.duration_ms, 3),
        }
        if self.annotations:
            result["annotations"] = self.annotations
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


# ── trace_span context manager ───────────────────────────────────────


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Create a span under the current span.

    Yields None when tracing is disabled. With no current span the new span
    is a root: it is logged when it ends and nothing keeps a reference to it.
    """
    if not _tracing_enabled.get():
        yield None
        return

    parent = _current_span.get()
    span = Span(name=name, parent=parent)
    if parent is not None:
        parent.children.append(span)

    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)
        if parent is None:
            _log_span(span)


def _log_span(span: Span) -> None:
    log = structlog.get_logger("typecraft.telemetry")
    log.debug(
        "span.complete",
        span_name=span.name,
        duration_ms=round(span.duration_ms, 3),
        children=len(span.children),
    )


@contextmanager
def tracing(name: str = "validation") -> Generator[Span]:
    """Enable tracing for the block and yield the root span.

    Usage::

        with tracing() as root:
            schema.try_apply(payload)
        root.to_dict()
    """
    enabled_token = _tracing_enabled.set(True)
    root = Span(name=name)
    span_token = _current_span.set(root)
    try:
        yield root
    finally:
        root.end()
        _current_span.reset(span_token)
        _tracing_enabled.reset(enabled_token)
        _log_span(root)


# ── Public helpers ───────────────────────────────────────────────────


def enable_tracing() -> None:
    """Enable tracing in the current context.

    Only the flag is set. Spans are collected under an enclosing
    :func:`tracing` block, or else logged per outermost call and dropped.
    """
    _tracing_enabled.set(True)


def disable_tracing() -> None:
    """Disable tracing in the current context."""
    _tracing_enabled.set(False)


def is_tracing_enabled() -> bool:
    return _tracing_enabled.get()


def get_current_span() -> Span | None:
    """Get the current active span (for manual annotation)."""
    if not _tracing_enabled.get():
        return None
    return _current_span.get()
