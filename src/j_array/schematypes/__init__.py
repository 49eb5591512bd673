"""Schema types — element casters, grouped by kind.

primitives – Mixed, Number, String, Boolean, Date, Identifier, Buffer
embedded   – sub-document caster generated per ``Schema``
array      – ``SchemaArray``, the array field descriptor (import it from
             ``j_array.schematypes.array``; it depends on the registry factory)
"""

from .embedded import EmbeddedCaster
from .primitives import (
    BooleanCaster,
    BufferCaster,
    DateCaster,
    IdentifierCaster,
    MixedCaster,
    NumberCaster,
    StringCaster,
)

__all__ = [
    "EmbeddedCaster",
    "MixedCaster",
    "NumberCaster",
    "StringCaster",
    "BooleanCaster",
    "DateCaster",
    "IdentifierCaster",
    "BufferCaster",
]
