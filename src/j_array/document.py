"""Minimal documents that own typed values.

``Document`` is the owner context threaded through ``SchemaType.cast`` and
the target of change notifications from ``TypedArray``.  It applies
defaults, casts assigned values through its schema and exports itself back
to plain data with ``to_object``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .core import is_exportable


class Document:
    """A schema-bound document.

    ::

        doc = Document(schema, {"tags": "a"})
        doc.get("tags")          → TypedArray(["a"])
        doc.get("tags").append("b")
        doc.is_modified("tags")  → True

    Args:
        schema: The ``Schema`` describing the fields.
        data:   Initial values.
        init:   ``True`` when hydrating stored data — values are cast with
                ``init=True`` and nothing is marked as modified.
    """

    def __init__(self, schema: Any, data: Optional[Mapping[str, Any]] = None, *, init: bool = False) -> None:
        self.schema = schema
        self._doc: dict[str, Any] = {}
        self._modified: set[str] = set()

        for path, schema_type in schema.paths.items():
            value = schema_type.get_default(self, init)
            if value is not None:
                self._doc[path] = value

        for path, value in (data or {}).items():
            self.set(path, value, init=init)

    # -- field access -------------------------------------------------------

    def get(self, path: str) -> Any:
        """Read *path*, applying the schema type's getters."""
        value = self._doc.get(path)
        schema_type = self.schema.path(path)
        if schema_type is None:
            return value
        return schema_type.apply_getters(value, self)

    def set(self, path: str, value: Any, *, init: bool = False) -> None:
        """Cast *value* through the schema type at *path* and store it.

        Paths unknown to the schema are stored as given.
        """
        schema_type = self.schema.path(path)
        if schema_type is not None:
            value = schema_type.cast(value, self, init)
        self._doc[path] = value
        if not init:
            self.mark_modified(path)

    def __getitem__(self, path: str) -> Any:
        return self.get(path)

    def __setitem__(self, path: str, value: Any) -> None:
        self.set(path, value)

    def __contains__(self, path: str) -> bool:
        return path in self._doc

    # -- change tracking ----------------------------------------------------

    def mark_modified(self, path: str) -> None:
        self._modified.add(path)

    def is_modified(self, path: Optional[str] = None) -> bool:
        if path is None:
            return bool(self._modified)
        return path in self._modified

    def modified_paths(self) -> list[str]:
        return sorted(self._modified)

    # -- export -------------------------------------------------------------

    def to_object(self) -> dict[str, Any]:
        """Plain ``dict`` copy of the document, recursively flattened."""
        return {k: v.to_object() if is_exportable(v) else v for k, v in self._doc.items()}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_object()!r})"


class EmbeddedDocument(Document):
    """A document stored inside another document's array; *parent* is the owner."""

    def __init__(
            self,
            schema: Any,
            data: Optional[Mapping[str, Any]] = None,
            *,
            parent: Optional[Document] = None,
            init: bool = False,
    ) -> None:
        self.parent = parent
        super().__init__(schema, data, init=init)
