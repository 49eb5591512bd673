"""Element caster for embedded structures (arrays of sub-documents).

One ``EmbeddedCaster`` subclass is generated per ``Schema`` (see
``Schema.embedded_caster``); the subclass carries the schema as a class
attribute so the caster class itself is enough to build nested predicates.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..core import MISSING, SchemaType
from ..document import EmbeddedDocument
from ..errors import CastError, UnsupportedOperatorError
from ..query import Query


class EmbeddedCaster(SchemaType):
    """Cast mappings into ``EmbeddedDocument`` instances of ``schema``.

    Sub-field paths belong to the embedded schema, so an array holding this
    caster never overwrites ``path``.
    """

    type_name = "Embedded"
    schema: Any = None

    def cast(self, value: Any, doc: Any = None, init: bool = False) -> Any:
        if isinstance(value, EmbeddedDocument) and value.schema is self.schema:
            return value
        if isinstance(value, Mapping):
            return EmbeddedDocument(self.schema, value, parent=doc, init=init)
        raise CastError("embedded", value, self.path)

    def cast_for_query(self, conditional: Any, value: Any = MISSING) -> Any:
        if value is not MISSING:
            raise UnsupportedOperatorError(conditional, self.path, self.type_name)
        if isinstance(conditional, Mapping):
            if any(str(k).startswith("$") for k in conditional):
                return conditional
            # only the keys given are cast; schema defaults stay out of the predicate
            return Query(conditional).cast(self.schema)
        return conditional
