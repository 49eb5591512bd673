"""Core abstractions: the base schema type, the type registry, shared helpers.

Nothing here depends on a concrete caster — the built-in element types live
in ``schematypes`` and are wired into a registry by ``factory``.

Casting flow::

    declaration ("Number", int, {"type": str, ...}, [Schema], …)
      │
      ▼
    TypeRegistry.resolve(...)  → caster class        ← once, at schema build
      │
      ▼
    caster = CasterClass(path, options)
      │
      ├── caster.cast(value, doc, init)               ← document values
      └── caster.cast_for_query(value)                ← bare predicate value
          caster.cast_for_query("$op", value)         ← keyed operator
                └── conditional_handlers["$op"](caster, value)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Mapping, Optional

from .errors import UnsupportedOperatorError

logger = logging.getLogger(__name__)

#: Sentinel separating the one- and two-argument forms of ``cast_for_query``.
MISSING = object()

#: Signature of a keyed query-operator handler: ``(caster, value) → query value``.
ConditionalFn = Callable[[Any, Any], Any]


# ─────────────────────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────────────────────


def is_exportable(value: Any) -> bool:
    """True if *value* can be flattened to plain data via ``to_object()``."""
    return callable(getattr(value, "to_object", None))


def is_sequence(value: Any) -> bool:
    """Ordered sequences accepted as array input (lists and tuples, not strings)."""
    return isinstance(value, (list, tuple))


# ─────────────────────────────────────────────────────────────────────────────
# SchemaType — base element caster
# ─────────────────────────────────────────────────────────────────────────────


class SchemaType(ABC):
    """Base class for every schema type / element caster.

    Subclasses implement ``cast`` and may extend ``conditional_handlers``
    with the query operators they understand.

    Recognised options:

    * ``default``  – literal value or zero-argument callable
    * ``get``      – getter callable (``value → value``)
    * ``required`` – consulted by the owning document layer
    * ``ref``      – population marker (name of the referenced collection)
    """

    type_name: str = "SchemaType"
    conditional_handlers: Mapping[str, ConditionalFn] = {}

    def __init__(self, path: Optional[str] = None, options: Optional[Mapping[str, Any]] = None) -> None:
        self.path = path
        self.options: dict[str, Any] = dict(options) if options else {}
        self.getters: list[Callable[[Any], Any]] = []
        self.default_value: Any = None

        if "default" in self.options:
            self.default(self.options["default"])
        if "get" in self.options:
            self.get(self.options["get"])

    def __repr__(self) -> str:
        return f"<{type(self).__name__} path={self.path!r}>"

    # -- configuration ------------------------------------------------------

    def default(self, value: Any) -> 'SchemaType':
        """Set the default value (literal or zero-argument callable)."""
        self.default_value = value
        return self

    def get(self, fn: Callable[[Any], Any]) -> 'SchemaType':
        """Register a getter."""
        self.getters.append(fn)
        return self

    # -- document values ----------------------------------------------------

    @abstractmethod
    def cast(self, value: Any, doc: Any = None, init: bool = False) -> Any:
        """Convert a document value to this type.  Raises ``CastError`` on failure."""

    def get_default(self, scope: Any = None, init: bool = False) -> Any:
        """Produce the default for a new document, cast to this type."""
        value = self.default_value() if callable(self.default_value) else self.default_value
        if value is not None:
            value = self.cast(value, scope, init)
        return value

    def apply_getters(self, value: Any, scope: Any = None) -> Any:
        """Run registered getters, last-registered first."""
        for fn in reversed(self.getters):
            value = fn(value)
        return value

    def check_required(self, value: Any) -> bool:
        return value is not None

    # -- query values -------------------------------------------------------

    def cast_for_query(self, conditional: Any, value: Any = MISSING) -> Any:
        """Cast a query predicate value.

        * ``cast_for_query(value)``        – bare equality value, cast as-is.
        * ``cast_for_query("$op", value)`` – dispatched to ``conditional_handlers``.
        """
        if value is MISSING:
            return self.cast(conditional)

        handler = self.conditional_handlers.get(conditional)
        if handler is None:
            logger.debug("unsupported operator %s for %s at %r", conditional, self.type_name, self.path)
            raise UnsupportedOperatorError(conditional, self.path, self.type_name)
        return handler(self, value)


# ─────────────────────────────────────────────────────────────────────────────
# TypeRegistry — name / python type → caster class
# ─────────────────────────────────────────────────────────────────────────────


class TypeRegistry:
    """Lookup table from type names and Python types to caster classes.

    ::

        registry = TypeRegistry()
        registry.register("Number", NumberCaster, aliases=(int, float))
        registry.resolve("Number")  → NumberCaster
        registry.resolve(float)     → NumberCaster
        registry.resolve("Nope")    → None
    """

    def __init__(self) -> None:
        self._types: dict[Any, type] = {}
        self._names: list[str] = []

    # -- registration -------------------------------------------------------

    def register(self, name: str, caster_cls: type, aliases: Iterable[Any] = ()) -> None:
        """Register *caster_cls* under *name* and every alias.

        Re-registering a name replaces the previous caster.
        """
        if name not in self._types:
            self._names.append(name)
        self._types[name] = caster_cls
        for alias in aliases:
            self._types[alias] = caster_cls

    # -- lookup -------------------------------------------------------------

    def resolve(self, key: Any) -> Optional[type]:
        """Return the caster class for *key*, or ``None`` if unknown."""
        try:
            return self._types.get(key)
        except TypeError:
            # unhashable declarations are never registry keys
            return None

    def __contains__(self, key: Any) -> bool:
        return self.resolve(key) is not None

    def names(self) -> list[str]:
        """Registered type names, in registration order."""
        return list(self._names)
