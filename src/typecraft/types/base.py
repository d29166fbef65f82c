"""Type: abstract base of every type descriptor.

Every variant implements one primitive, ``_try(input) -> Result``. The
three public entry points are defined once here on top of it:

- ``try_apply``: returns ``Success``/``Failure``, never raises.
- ``apply_unsafe``: ``try_apply(input).value_or_raise()``.
- ``apply_safe``: failure -> ``on_failure(failure)`` or ``Undefined``.

INVARIANT: descriptors are immutable. Builder methods (``constrained``,
``constructor``, ``default``, ``enum``, ``optional``, ``|``...) return new
descriptors that reference, never copy, the receiver.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Self

from typecraft.core.errors import DefinitionError, NotApplicableError
from typecraft.core.result import Failure, Result
from typecraft.core.undefined import Undefined
from typecraft.telemetry import trace_span

if TYPE_CHECKING:
    from typecraft.types.constrained import Constrained
    from typecraft.types.constructor import Constructor
    from typecraft.types.default import Default
    from typecraft.types.enum import Enum
    from typecraft.types.maybe import MaybeType
    from typecraft.types.sum import Sum

FailureHandler = Callable[[Failure], Any]


def primitive_name(primitive: type | tuple[type, ...]) -> str:
    """Render a primitive as a qualified class name.

    Examples:
        >>> primitive_name(int)
        'int'
        >>> primitive_name((type(None), str))
        'NoneType | str'
    """
    if isinstance(primitive, tuple):
        return " | ".join(primitive_name(p) for p in primitive)
    module = getattr(primitive, "__module__", "builtins")
    qualname = getattr(primitive, "__qualname__", repr(primitive))
    return qualname if module == "builtins" else f"{module}.{qualname}"


def _hashable(value: Any) -> Any:
    if isinstance(value, Mapping):
        return tuple((k, _hashable(v)) for k, v in value.items())
    if isinstance(value, list | tuple):
        return tuple(_hashable(v) for v in value)
    if isinstance(value, set | frozenset):
        return frozenset(_hashable(v) for v in value)
    return value


def freeze_meta(meta: Mapping[str, Any] | None) -> Mapping[str, Any]:
    """Return a read-only copy of *meta*."""
    return MappingProxyType(dict(meta or {}))


class Type(ABC):
    """A type descriptor: validates and coerces inputs of one shape.

    Concrete variants are frozen dataclasses. Non-decorator variants carry
    their own ``meta`` mapping; decorators delegate it to ``wrapped``.
    ``meta`` never takes part in equality.
    """

    # --- Variant contract ------------------------------------------------

    @abstractmethod
    def _try(self, input: Any) -> Result:
        """Validate *input*; must not raise."""

    @abstractmethod
    def _eq_fields(self) -> tuple[Any, ...]:
        """Defining attributes compared by ``==`` (``meta`` excluded)."""

    @abstractmethod
    def to_ast(self, meta: bool = True) -> tuple[str, Any]:
        """Order-preserving ``(tag, payload)`` tree describing the composition."""

    # --- Dispatch --------------------------------------------------------

    def try_apply(self, input: Any = Undefined) -> Result:
        with trace_span(type(self).__name__) as span:
            result = self._try(input)
            if span is not None:
                span.annotate("ok", result.success)
        return result

    def apply_unsafe(self, input: Any = Undefined) -> Any:
        """Return the coerced value or raise the structured failure."""
        return self.try_apply(input).value_or_raise()

    def apply_safe(self, input: Any = Undefined, on_failure: FailureHandler | None = None) -> Any:
        """Return the coerced value; on failure defer to *on_failure*.

        Without a handler a failure yields the ``Undefined`` sentinel.
        """
        result = self.try_apply(input)
        if result.success:
            return result.value
        if on_failure is None:
            return Undefined
        return on_failure(result)

    def __call__(self, input: Any = Undefined, on_failure: FailureHandler | None = None) -> Any:
        """Apply the type as an outermost call.

        Unsafe without *on_failure*, safe with it. A supplied input that
        produces no value is reported as ``NotApplicableError``.
        """
        result = self.try_apply(input)
        if result.success and result.value is Undefined and input is not Undefined:
            result = Failure(input, NotApplicableError(input))
        if result.success:
            return result.value
        if on_failure is None:
            result.value_or_raise()
        return on_failure(result)

    def is_valid(self, value: Any = Undefined) -> bool:
        return self.try_apply(value).success

    # --- Introspection ---------------------------------------------------

    @property
    def name(self) -> str:
        return primitive_name(self.primitive)  # type: ignore[attr-defined]

    def primitive_matches(self, value: Any) -> bool:
        """Check *value* against the primitive class (no coercion)."""
        return isinstance(value, self.primitive)  # type: ignore[attr-defined]

    @property
    def is_default(self) -> bool:
        return False

    @property
    def is_optional(self) -> bool:
        return False

    @property
    def is_constrained(self) -> bool:
        return False

    @property
    def lax(self) -> Type:
        """This type with every constraint stripped, failing softly."""
        return self

    def with_meta(self, **meta: Any) -> Self:
        return replace(self, meta={**self.meta, **meta})  # type: ignore[attr-defined,type-var]

    def pristine(self) -> Self:
        """This type without meta."""
        return replace(self, meta={})  # type: ignore[type-var]

    # --- Builder ---------------------------------------------------------

    def constrained(self, **predicates: Any) -> Type | Constrained:
        """Wrap in a constrained type, e.g. ``constrained(gt=0, lt=10)``."""
        from typecraft.core.constraints import build_rules
        from typecraft.types.constrained import Constrained

        if not predicates:
            return self
        return Constrained(self, build_rules(predicates))

    def constructor(self, fn: Callable[[Any], Any]) -> Constructor:
        """Apply *fn* to inputs before this type sees them."""
        from typecraft.types.constructor import Constructor

        return Constructor(self, fn)

    def default(self, value: Any = Undefined, *, factory: Callable[[], Any] | None = None) -> Default:
        """Substitute *value* (or ``factory()``) when no input is supplied."""
        from typecraft.types.default import Default

        return Default.build(self, value, factory)

    def enum(self, *values: Any) -> Enum:
        """Restrict to *values*, or to the labels of a single mapping argument.

        ``enum("draft", "published")`` maps each label to itself;
        ``enum({"draft": 0, "published": 1})`` additionally accepts the
        raw values and translates them to labels.
        """
        from typecraft.types.enum import Enum

        if len(values) == 1 and isinstance(values[0], Mapping):
            mapping = dict(values[0])
        else:
            try:
                unique = set(values)
            except TypeError as exc:
                msg = f"Enum values must be hashable: {values!r}"
                raise DefinitionError(msg) from exc
            if len(unique) != len(values):
                msg = f"Enum values must be unique: {values!r}"
                raise DefinitionError(msg)
            mapping = {v: v for v in values}
        if not mapping:
            msg = "Enum requires at least one value"
            raise DefinitionError(msg)
        return Enum(self.constrained(included_in=tuple(mapping)), mapping)

    @property
    def optional(self) -> Sum:
        """``None`` or this type."""
        from typecraft.types.nominal import NIL
        from typecraft.types.sum import Sum

        return Sum(NIL, self)

    @property
    def maybe(self) -> MaybeType:
        """Wrap results in ``Some``/``NOTHING``."""
        from typecraft.types.maybe import MaybeType

        return MaybeType(self.optional)

    def __or__(self, other: Type) -> Sum:
        from typecraft.types.sum import Sum

        if not isinstance(other, Type):
            return NotImplemented
        return Sum(self, other)

    # --- Identity --------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._eq_fields() == other._eq_fields()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, _hashable(self._eq_fields())))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.to_ast(meta=False)[1]!r}>"
