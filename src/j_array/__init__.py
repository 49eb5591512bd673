from .core import MISSING, SchemaType, TypeRegistry, is_exportable, is_sequence
from .errors import CastError, GeoShapeError, JArrayError, UnsupportedOperatorError
from .types import TypedArray
from .document import Document, EmbeddedDocument
from .query import QUERY_MAX_DEPTH, Query
from .schematypes import (
    BooleanCaster,
    BufferCaster,
    DateCaster,
    EmbeddedCaster,
    IdentifierCaster,
    MixedCaster,
    NumberCaster,
    StringCaster,
)
from .schematypes.array import COORDINATES_MAX_DEPTH, SchemaArray
from .schema import Schema
from .casters import BUILTIN_CASTERS, PYTHON_TYPE_CASTERS
from .factory import build_default_registry, default_registry
from .handler_groups import (
    ARRAY_HANDLERS,
    ARRAY_ELEMENT_HANDLERS,
    ARRAY_STRUCTURE_HANDLERS,
    COMPARISON_HANDLERS,
    GEO_HANDLERS,
    NUMBER_HANDLERS,
    SET_HANDLERS,
    STRING_HANDLERS,
)

__all__ = [
    # core
    "MISSING",
    "SchemaType",
    "TypeRegistry",
    "is_exportable",
    "is_sequence",
    # errors
    "JArrayError",
    "CastError",
    "UnsupportedOperatorError",
    "GeoShapeError",
    # values
    "TypedArray",
    "Document",
    "EmbeddedDocument",
    # query
    "Query",
    "QUERY_MAX_DEPTH",
    # schema types
    "SchemaArray",
    "COORDINATES_MAX_DEPTH",
    "EmbeddedCaster",
    "MixedCaster",
    "NumberCaster",
    "StringCaster",
    "BooleanCaster",
    "DateCaster",
    "IdentifierCaster",
    "BufferCaster",
    "Schema",
    # registry
    "BUILTIN_CASTERS",
    "PYTHON_TYPE_CASTERS",
    "build_default_registry",
    "default_registry",
    # handler groups
    "ARRAY_HANDLERS",
    "ARRAY_ELEMENT_HANDLERS",
    "ARRAY_STRUCTURE_HANDLERS",
    "COMPARISON_HANDLERS",
    "GEO_HANDLERS",
    "NUMBER_HANDLERS",
    "SET_HANDLERS",
    "STRING_HANDLERS",
]
