"""``Schema`` — field name → schema type mapping built from a declaration.

::

    comment = Schema({"body": str, "votes": {"type": int, "default": 0}})

    post = Schema({
        "title": "String",
        "tags": [str],                                   # SchemaArray of String
        "scores": {"type": [float], "default": [0]},     # SchemaArray with options
        "comments": [comment],                           # array of sub-documents
        "meta": {"views": int},                          # flattened to "meta.views"
        "extra": {},                                     # Mixed
    })
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .core import SchemaType, TypeRegistry, is_sequence
from .factory import default_registry
from .schematypes.array import SchemaArray
from .schematypes.embedded import EmbeddedCaster


class Schema:
    """Compiled set of field paths.

    Args:
        definition: Mapping of field name → declaration.
        registry:   Type registry for name resolution (defaults to the
                    shared ``default_registry()``).
    """

    def __init__(self, definition: Mapping[str, Any], *, registry: Optional[TypeRegistry] = None) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.paths: dict[str, SchemaType] = {}
        self._embedded_caster: Optional[type] = None
        self.add(definition)

    # -- declaration --------------------------------------------------------

    def add(self, definition: Mapping[str, Any], prefix: str = "") -> None:
        """Compile *definition* into ``paths``; nested mappings become dotted paths."""
        for key, decl in definition.items():
            path = prefix + key

            if is_sequence(decl):
                self.paths[path] = self._array(path, decl, {})
            elif isinstance(decl, Mapping) and "type" in decl:
                options = dict(decl)
                type_ = options.pop("type")
                if is_sequence(type_):
                    self.paths[path] = self._array(path, type_, options)
                else:
                    self.paths[path] = self._scalar(path, type_, options)
            elif isinstance(decl, Mapping) and decl:
                self.add(decl, prefix=path + ".")
            elif isinstance(decl, Mapping):
                self.paths[path] = self._scalar(path, "Mixed", {})
            else:
                self.paths[path] = self._scalar(path, decl, {})

    def _array(self, path: str, decl: Any, options: dict[str, Any]) -> SchemaArray:
        element = decl[0] if decl else None
        return SchemaArray(path, element, options, registry=self.registry)

    def _scalar(self, path: str, type_: Any, options: dict[str, Any]) -> SchemaType:
        if isinstance(type_, Schema):
            raise TypeError(f"Embedded schema at {path!r} must be declared inside an array")
        caster_cls = self.registry.resolve(type_)
        if caster_cls is None:
            if not isinstance(type_, type):
                raise TypeError(f"Invalid type {type_!r} for path {path!r}")
            caster_cls = type_
        return caster_cls(path, options)

    # -- lookup -------------------------------------------------------------

    def path(self, name: str) -> Optional[SchemaType]:
        """Schema type at *name*, or ``None``."""
        return self.paths.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.paths

    @property
    def embedded_caster(self) -> type:
        """``EmbeddedCaster`` subclass bound to this schema (created once)."""
        if self._embedded_caster is None:
            self._embedded_caster = type("EmbeddedCaster", (EmbeddedCaster,), {"schema": self})
        return self._embedded_caster

    def __repr__(self) -> str:
        return f"Schema({sorted(self.paths)!r})"
