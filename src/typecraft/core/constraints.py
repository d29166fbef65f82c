"""Constraint rules and the constraint evaluator.

A :class:`Rule` pairs a predicate name with its configured arguments.
:func:`evaluate` checks rules in declared order and stops at the first
failing one; aggregate types accumulate across members instead.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from typecraft.core.errors import INPUT_ERRORS, ConstraintError, DefinitionError
from typecraft.core.predicates import get_predicate
from typecraft.core.result import Failure, Result, Success


@dataclass(frozen=True)
class Rule:
    """A single named predicate with its arguments."""

    predicate: str
    args: tuple[Any, ...] = ()

    def check(self, value: Any) -> bool:
        """Return whether *value* passes.

        A predicate that cannot handle the value (one of ``INPUT_ERRORS``,
        e.g. ``gt`` on a string) counts as a failure.
        """
        predicate = get_predicate(self.predicate)
        try:
            return predicate(*self.args, value)
        except INPUT_ERRORS:
            return False

    def to_ast(self) -> tuple[str, tuple[Any, ...]]:
        return ("predicate", (self.predicate, self.args))


def _freeze_arg(arg: Any) -> Any:
    """Make list/set/dict arguments hashable so rules stay hashable."""
    if isinstance(arg, list):
        return tuple(arg)
    if isinstance(arg, set):
        return frozenset(arg)
    if isinstance(arg, Mapping):
        return tuple(arg.items())
    return arg


def build_rules(predicates: Mapping[str, Any]) -> tuple[Rule, ...]:
    """Build rules from ``{predicate_name: argument}`` pairs.

    Flag predicates (arity 0) take ``True``; multi-argument predicates take
    a tuple of exactly ``arity`` items.

    Raises:
        DefinitionError: On unknown predicate names or malformed arguments.

    Examples:
        >>> build_rules({"gt": 2})
        (Rule(predicate='gt', args=(2,)),)
        >>> build_rules({"filled": True})
        (Rule(predicate='filled', args=()),)
    """
    rules: list[Rule] = []
    for name, arg in predicates.items():
        try:
            predicate = get_predicate(name)
        except KeyError as exc:
            msg = f"Unknown predicate {name!r}"
            raise DefinitionError(msg) from exc

        if predicate.arity == 0:
            if arg is not True:
                msg = f"Predicate {name!r} takes no arguments; pass {name}=True"
                raise DefinitionError(msg)
            args: tuple[Any, ...] = ()
        elif predicate.arity == 1:
            args = (_freeze_arg(arg),)
        else:
            if not isinstance(arg, tuple) or len(arg) != predicate.arity:
                msg = f"Predicate {name!r} takes a tuple of {predicate.arity} arguments"
                raise DefinitionError(msg)
            args = tuple(_freeze_arg(a) for a in arg)
        rules.append(Rule(name, args))
    return tuple(rules)


def evaluate(value: Any, rules: Iterable[Rule]) -> Result:
    """Check *value* against *rules* in order, failing fast.

    Returns:
        ``Success(value, value)`` when every rule passes, else a ``Failure``
        whose ``ConstraintError`` names the first failing predicate.
    """
    for rule in rules:
        if not rule.check(value):
            return Failure(value, ConstraintError(value, rule.predicate, rule.args))
    return Success(value, value)
