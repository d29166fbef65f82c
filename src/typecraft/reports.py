"""FailureReport: serializable rendering of a failure tree.

Every ``ValidationFailure`` converts into a frozen pydantic model carrying
a stable ``code``, the message, the path from the outermost input, and the
nested child reports (sum branches, aggregate members). ``leaves()``
flattens the tree into attributable entries for custom rendering.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

from typecraft.core.errors import (
    AggregateError,
    ConstraintError,
    MissingKeyError,
    NotCollectionError,
    SumError,
    UnknownKeyError,
    ValidationFailure,
    render_argument,
)


class FailureReport(BaseModel):
    """Structured failure payload.

    Attributes:
        code: Failure kind (``"constraint"``, ``"aggregate"``, ...).
        message: Same text the raised error carries.
        path: Indexes and field names leading to this failure.
        detail: Kind-specific data (predicate name, missing key...).
        children: Nested reports for sums and aggregates.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    path: list[str | int] = Field(default_factory=list)
    detail: dict[str, Any] = Field(default_factory=dict)
    children: list[FailureReport] = Field(default_factory=list)

    def leaves(self) -> list[FailureReport]:
        """Return the reports with no children, depth-first."""
        if not self.children:
            return [self]
        found: list[FailureReport] = []
        for child in self.children:
            found.extend(child.leaves())
        return found


def _detail(error: ValidationFailure) -> dict[str, Any]:
    if isinstance(error, ConstraintError):
        return {
            "predicate": error.predicate,
            "args": [render_argument(a) for a in error.arguments],
            "value": repr(error.value),
        }
    if isinstance(error, MissingKeyError | UnknownKeyError):
        return {"key": error.key}
    if isinstance(error, NotCollectionError):
        return {"expected": error.expected, "value": repr(error.input)}
    return {"value": repr(error.input)}


def build_report(error: ValidationFailure, path: Sequence[str | int] = ()) -> FailureReport:
    """Convert *error* (and everything nested in it) into a report."""
    base_path = list(path)
    children: list[FailureReport] = []
    if isinstance(error, SumError):
        children = [build_report(branch, base_path) for branch in error.branches]
    elif isinstance(error, AggregateError):
        children = [
            build_report(child, [*base_path, key if isinstance(key, int) else str(key)])
            for key, child in error.errors.items()
        ]

    return FailureReport(
        code=error.code,
        message=error.message,
        path=base_path,
        detail=_detail(error),
        children=children,
    )
