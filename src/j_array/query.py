"""Nested predicate builder.

``Query(conditions).cast(target)`` normalizes a condition object against a
schema or a single element caster and returns the normalized conditions.
Array operators ``$all`` and ``$elemMatch`` use it to cast predicates that
are scoped to the array's element type.

Targets
-------
* ``Schema`` (or anything with a ``schema`` attribute, such as an
  ``EmbeddedCaster``) – keys are field paths of that schema.
* Element caster (class or instance) – keys are query operators applied to
  a single element value.

::

    Query({"n": {"$gt": "5"}, "tags": "a"}).cast(schema)
    → {"n": {"$gt": 5}, "tags": "a"}

    Query({"$gte": "1", "$lt": "9"}).cast(NumberCaster)
    → {"$gte": 1, "$lt": 9}
"""

from __future__ import annotations

import re
from typing import Any, Mapping

import regex

#: Default nesting cap for ``$and`` / ``$or`` / ``$elemMatch`` recursion.
QUERY_MAX_DEPTH = 64

_LOGICAL = ("$and", "$or", "$nor")
_PASSTHROUGH = ("$where", "$comment")


def _has_operators(value: Mapping[str, Any]) -> bool:
    return any(isinstance(k, str) and k.startswith("$") for k in value)


class Query:
    """Condition object plus the casting logic for it.

    Attributes:
        conditions: The raw conditions, replaced by the normalized ones
                    after ``cast``.
        max_depth:  Maximum nesting of logical / sub-document conditions.
    """

    def __init__(self, conditions: Mapping[str, Any] | None = None, *, max_depth: int = QUERY_MAX_DEPTH) -> None:
        self.conditions: dict[str, Any] = dict(conditions or {})
        self.max_depth = max_depth

    def cast(self, target: Any) -> dict[str, Any]:
        """Normalize ``conditions`` against *target* and return the result."""
        from .schema import Schema

        schema = target if isinstance(target, Schema) else getattr(target, "schema", None)
        if schema is not None:
            self.conditions = self._cast_schema(self.conditions, schema, 0)
        else:
            caster = target(None, {}) if isinstance(target, type) else target
            self.conditions = self._cast_element(self.conditions, caster, 0)
        return self.conditions

    # -- depth guard --------------------------------------------------------

    def _descend(self, depth: int) -> int:
        depth += 1
        if depth > self.max_depth:
            raise RecursionError(f"query nesting exceeds max_depth ({self.max_depth})")
        return depth

    # -- schema target ------------------------------------------------------

    def _cast_schema(self, conditions: Mapping[str, Any], schema: Any, depth: int) -> dict[str, Any]:
        depth = self._descend(depth)
        out: dict[str, Any] = {}

        for path, value in conditions.items():
            if path in _LOGICAL:
                out[path] = [self._cast_schema(sub, schema, depth) for sub in value]
                continue
            if path in _PASSTHROUGH:
                out[path] = value
                continue

            schema_type = schema.path(path)
            if schema_type is None:
                out[path] = self._cast_unknown(value, schema, depth)
            else:
                out[path] = self._cast_path(schema_type, value, depth)

        return out

    def _cast_path(self, schema_type: Any, value: Any, depth: int) -> Any:
        if value is None or isinstance(value, (re.Pattern, regex.Pattern)):
            return value
        if isinstance(value, Mapping) and _has_operators(value):
            return self._cast_operators(schema_type, value, depth)
        return schema_type.cast_for_query(value)

    def _cast_operators(self, schema_type: Any, value: Mapping[str, Any], depth: int) -> dict[str, Any]:
        depth = self._descend(depth)
        out: dict[str, Any] = {}
        for op, v in value.items():
            if op == "$not" and isinstance(v, Mapping):
                out[op] = self._cast_operators(schema_type, v, depth)
            else:
                out[op] = schema_type.cast_for_query(op, v)
        return out

    def _cast_unknown(self, value: Any, schema: Any, depth: int) -> Any:
        """Conditions on a path the schema does not know.

        Mappings are read relative to *schema*: a plain mapping is a
        sub-document literal, ``$elemMatch`` holds nested conditions.
        """
        if not isinstance(value, Mapping):
            return value
        if not _has_operators(value):
            return self._cast_schema(value, schema, depth)

        out: dict[str, Any] = {}
        for op, v in value.items():
            if op == "$elemMatch" and isinstance(v, Mapping):
                out[op] = self._cast_schema(v, schema, depth)
            else:
                out[op] = v
        return out

    # -- element target -----------------------------------------------------

    def _cast_element(self, conditions: Mapping[str, Any], caster: Any, depth: int) -> dict[str, Any]:
        depth = self._descend(depth)
        out: dict[str, Any] = {}
        for key, value in conditions.items():
            if key in _LOGICAL:
                out[key] = [self._cast_element(sub, caster, depth) for sub in value]
            elif isinstance(key, str) and key.startswith("$"):
                out[key] = caster.cast_for_query(key, value)
            else:
                out[key] = value
        return out
