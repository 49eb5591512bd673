"""Exception types raised while casting document values and query predicates.

Exports
-------
JArrayError
    Common base class.

CastError
    A value could not be converted to its declared type.  Carries the
    failure ``kind``, the offending ``value`` and the dot-``path``.

UnsupportedOperatorError
    A query operator is not handled by the schema type it was used with.

GeoShapeError
    A geospatial literal (``$box``, ``$polygon``, coordinate tree) is
    malformed.  Also a ``TypeError``.
"""

from __future__ import annotations

from typing import Any


class JArrayError(Exception):
    """Base class for every error raised by this package."""


class CastError(JArrayError):
    """Raised when *value* cannot be cast to *kind* at *path*.

    Attributes:
        kind:  Name of the failing type (``"number"``, ``"embedded"``, …).
               When an array re-tags a nested failure the inner kind is kept.
        value: The raw value that was being cast.
        path:  Dot-path of the field, or ``None`` for detached casters.
    """

    def __init__(self, kind: str, value: Any, path: str | None = None) -> None:
        self.kind = kind
        self.value = value
        self.path = path
        super().__init__(
            f"Cast to {kind} failed for value {value!r} at path \"{path}\""
        )


class UnsupportedOperatorError(JArrayError):
    """Raised when ``cast_for_query`` receives an operator it has no handler for."""

    def __init__(self, conditional: str, path: str | None, type_name: str) -> None:
        self.conditional = conditional
        self.path = path
        self.type_name = type_name
        super().__init__(f"Can't use {conditional} with {type_name} (path \"{path}\")")


class GeoShapeError(JArrayError, TypeError):
    """Raised for geo-shape literals that do not have the expected structure."""
