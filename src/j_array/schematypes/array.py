"""``SchemaArray`` — the schema type for "array of T" fields.

Resolution (once, when the field is declared)::

    None                      → untyped: elements are stored unchanged
    "Number" / int / float    → registry caster
    {"type": X, **options}    → caster for X, built with *options*
    {...} without "type"      → Mixed
    [inner]                   → nested SchemaArray
    Schema                    → EmbeddedCaster bound to that schema
    any other class           → used as the caster class itself

Document values (``cast``)::

    scalar         → cast([scalar])
    list / tuple   → TypedArray bound to (doc, path), elements cast in place

Query values (``cast_for_query``)::

    cast_for_query("$op", value) → ARRAY_HANDLERS["$op"](array, value)
    cast_for_query(value)        → element-wise cast, flattened to plain data
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..core import MISSING, SchemaType, TypeRegistry, is_exportable, is_sequence
from ..errors import CastError
from ..factory import default_registry
from ..handler_groups import ARRAY_HANDLERS
from ..types import TypedArray
from .embedded import EmbeddedCaster

logger = logging.getLogger(__name__)

#: Default nesting cap for ``$geometry`` coordinate trees.
COORDINATES_MAX_DEPTH = 32


def _flatten(value: Any) -> Any:
    return value.to_object() if is_exportable(value) else value


class SchemaArray(SchemaType):
    """Array field descriptor.

    Args:
        key:     Dot-path of the field within its schema.
        cast:    Element type declaration (see module docstring).
        options: Field options (``default``, ``get``, ``required``, …).
        registry: Type registry used to resolve names; defaults to the
                  shared ``default_registry()``.
        coordinates_max_depth: Nesting cap for geo coordinate trees.

    Attributes:
        caster_constructor: Resolved element caster class (``None`` if untyped).
        caster:             Element caster instance, shared by every document
                            and query built against this field.
    """

    type_name = "Array"
    conditional_handlers = ARRAY_HANDLERS

    def __init__(
            self,
            key: Optional[str],
            cast: Any = None,
            options: Optional[Mapping[str, Any]] = None,
            *,
            registry: Optional[TypeRegistry] = None,
            coordinates_max_depth: int = COORDINATES_MAX_DEPTH,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.coordinates_max_depth = coordinates_max_depth
        self.caster_constructor: Optional[type] = None
        self.caster: Any = None
        self._path: Optional[str] = None

        if cast is not None:
            self.caster_constructor, self.caster = self._resolve_caster(key, cast)

        super().__init__(key, options)

    # -- declaration --------------------------------------------------------

    def _resolve_caster(self, key: Optional[str], cast: Any) -> tuple[type, Any]:
        """Turn an element declaration into ``(caster class, caster instance)``."""
        from ..schema import Schema

        cast_options: dict[str, Any] = {}
        if isinstance(cast, Mapping):
            if "type" in cast:
                cast_options = dict(cast)
                cast = cast_options.pop("type")
            else:
                cast = "Mixed"

        if is_sequence(cast):
            inner = cast[0] if cast else None
            caster = SchemaArray(
                None, inner, cast_options,
                registry=self.registry,
                coordinates_max_depth=self.coordinates_max_depth,
            )
            return SchemaArray, caster

        if isinstance(cast, Schema):
            caster_cls = cast.embedded_caster
        else:
            caster_cls = self.registry.resolve(cast)
            if caster_cls is None:
                if not isinstance(cast, type):
                    raise TypeError(f"Invalid array element type {cast!r} for path {key!r}")
                caster_cls = cast

        logger.debug("array %r resolved element caster %s", key, caster_cls.__name__)
        return caster_cls, caster_cls(None, cast_options)

    @property
    def path(self) -> Optional[str]:
        return self._path

    @path.setter
    def path(self, value: Optional[str]) -> None:
        self._path = value
        if self.caster is not None and not isinstance(self.caster, EmbeddedCaster):
            self.caster.path = value

    @property
    def number_caster(self) -> SchemaType:
        """The registry's ``Number`` caster, reporting at this field's path."""
        return self.registry.resolve("Number")(self.path)

    # -- document values ----------------------------------------------------

    def get_default(self, scope: Any = None, init: bool = False) -> TypedArray:
        """Fresh ``TypedArray`` for a new document.

        The configured default (literal list or zero-argument callable) is
        copied, so no two documents share a default list; without a default
        the array starts empty.
        """
        default = self.default_value
        values = default() if callable(default) else default
        if values is None:
            values = []
        if is_sequence(values):
            values = TypedArray(values, self.path, scope)
        return self.cast(values, scope, init)

    def check_required(self, value: Any) -> bool:
        return bool(value is not None and is_sequence(value) and len(value))

    def apply_getters(self, value: Any, scope: Any = None) -> Any:
        """Populated references (``ref`` on the element caster) skip the getters."""
        caster_options = getattr(self.caster, "options", None)
        if caster_options and caster_options.get("ref"):
            return value
        return super().apply_getters(value, scope)

    def cast(self, value: Any, doc: Any = None, init: bool = False) -> TypedArray:
        """Cast *value* to a ``TypedArray`` of the element type.

        A non-sequence (``None`` included) becomes a one-element array.
        Any element failure is re-raised as ``CastError`` at this field's path,
        keeping the inner error's kind.
        """
        if not is_sequence(value):
            return self.cast([value], doc, init)

        if not isinstance(value, TypedArray):
            value = TypedArray(value, self.path, doc)

        if self.caster is not None:
            try:
                for i, item in enumerate(value):
                    # plain list assignment: casting is not a user modification
                    list.__setitem__(value, i, self.caster.cast(item, doc, init))
            except Exception as exc:
                kind = exc.kind if isinstance(exc, CastError) else self.type_name
                logger.debug("array %r element cast failed (%s): %s", self.path, kind, exc)
                raise CastError(kind, value, self.path) from exc

        return value

    # -- query values -------------------------------------------------------

    def cast_for_query(self, conditional: Any, value: Any = MISSING) -> Any:
        """Normalize a query predicate for this field.

        * ``cast_for_query("$op", value)`` – operator from ``ARRAY_HANDLERS``;
          unknown operators raise ``UnsupportedOperatorError``.
        * ``cast_for_query(value)`` – equality / membership value: each item
          of a sequence (or the scalar itself) goes through the element
          caster's ``cast_for_query`` (or ``cast`` if it has none).

        Exportable results are flattened with ``to_object()`` so no
        document wrapper ends up inside a query.
        """
        if value is not MISSING:
            return _flatten(super().cast_for_query(conditional, value))

        method = None
        if self.caster is not None:
            method = getattr(self.caster, "cast_for_query", None) or self.caster.cast

        result = conditional
        if is_sequence(result):
            result = [_flatten(method(v) if method else v) for v in result]
        elif method is not None:
            result = method(result)

        return _flatten(result)
