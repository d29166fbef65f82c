"""Constrained types: named predicates on top of a base type.

Fails closed: the input must pass every rule (in declared order, first
failure wins) before the wrapped type sees it.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from typecraft.core.constraints import Rule, build_rules, evaluate
from typecraft.core.result import Result
from typecraft.types.base import Type
from typecraft.types.decorator import Decorator


@dataclass(frozen=True, eq=False, repr=False)
class Constrained(Decorator):
    """A wrapped type plus an ordered tuple of rules."""

    rules: tuple[Rule, ...] = ()

    def _try(self, input: Any) -> Result:
        checked = evaluate(input, self.rules)
        if checked.failure:
            return checked
        return self.wrapped.try_apply(input)

    def _eq_fields(self) -> tuple[Any, ...]:
        return (self.wrapped, self.rules)

    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        return (
            "constrained",
            (self.wrapped.to_ast(meta=meta), tuple(r.to_ast() for r in self.rules)),
        )

    @property
    def is_constrained(self) -> bool:
        return True

    def constrained(self, **predicates: Any) -> Type:
        """Append rules to this layer instead of nesting another one."""
        if not predicates:
            return self
        return replace(self, rules=self.rules + build_rules(predicates))

    @property
    def lax(self) -> Type:
        return self.wrapped.lax
