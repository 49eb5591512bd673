"""Built-in element types for array (and scalar) field declarations.

This module defines the standard name → caster table used to resolve
declarations such as ``["Number"]``, ``[{"type": "String"}]`` or ``[int]``.

Exports
-------
BUILTIN_CASTERS
    Dictionary mapping type names to caster classes.
    Default types: Mixed, Number, String, Boolean, Date, Identifier, Buffer.

PYTHON_TYPE_CASTERS
    Python types accepted in place of the names (``int`` → Number, …).

Custom types can be registered by passing a custom casters dict to
``build_default_registry(casters=...)``.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from .schematypes.primitives import (
    BooleanCaster,
    BufferCaster,
    DateCaster,
    IdentifierCaster,
    MixedCaster,
    NumberCaster,
    StringCaster,
)

# ─────────────────────────────────────────────────────────────────────────────
# Built-in casters
# ─────────────────────────────────────────────────────────────────────────────

BUILTIN_CASTERS: dict[str, type] = {
    "Mixed": MixedCaster,
    "Number": NumberCaster,
    "String": StringCaster,
    "Boolean": BooleanCaster,
    "Date": DateCaster,
    "Identifier": IdentifierCaster,
    "Buffer": BufferCaster,
}

PYTHON_TYPE_CASTERS: dict[type, str] = {
    object: "Mixed",
    dict: "Mixed",
    int: "Number",
    float: "Number",
    str: "String",
    bool: "Boolean",
    datetime: "Date",
    date: "Date",
    uuid.UUID: "Identifier",
    bytes: "Buffer",
    bytearray: "Buffer",
}
