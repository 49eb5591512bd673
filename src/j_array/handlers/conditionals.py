"""Query-operator handlers for array fields.

Every handler takes the ``SchemaArray`` descriptor explicitly and returns
the normalized predicate value::

    handler(array, raw_value) → query value

Exports
-------
cast_to_number
    Numeric coercion with the registry's ``Number`` rule (``$size``,
    ``$maxDistance`` and the geo handlers).

array_cast_for_query
    Element-wise cast through the element caster (``$in``, ``$ne``, …).

all_handler
    ``{"$all": [...]}`` — plain mappings become nested conditions.

elem_match_handler
    ``{"$elemMatch": {...}}`` — conditions scoped to the element type.

size_handler, options_handler
    ``$size`` (number) and ``$options`` (string).
"""

from __future__ import annotations

from typing import Any, Mapping

from ..core import is_sequence
from ..query import Query


def cast_to_number(array: Any, value: Any) -> Any:
    """Cast *value* exactly as a document value of type ``Number`` would be.

    Failures are reported at the array field's path.
    """
    return array.number_caster.cast(value)


def array_cast_for_query(array: Any, value: Any) -> Any:
    """``$ne``, ``$in``, ``$nin``, ``$regex``, ``$near``, ``$nearSphere``,
    ``$gt``, ``$gte``, ``$lt``, ``$lte`` — same as a bare predicate value.
    """
    return array.cast_for_query(value)


def all_handler(array: Any, value: Any) -> Any:
    """``$all`` construct.

    Schema::

        {"$all": [<value or sub-condition>, ...]}

    Behavior:
    * A scalar is wrapped into a one-item list
    * Each plain mapping is read as ``{array.path: item}`` and cast through
      the nested predicate builder against the element caster; the
      normalized condition replaces the item
    * The resulting list goes through the bare-value normalizer

    Examples::

        tags: [String]        {"$all": ["a", 1]}            → ["a", "1"]
        comments: [Comment]   {"$all": [{"votes": "2"}]}    → [{"votes": 2}]
    """
    if not is_sequence(value):
        value = [value]

    items = []
    for item in value:
        if isinstance(item, Mapping) and array.caster is not None:
            conditions = Query({array.path: item}).cast(array.caster)
            item = conditions[array.path]
        items.append(item)

    return array.cast_for_query(items)


def elem_match_handler(array: Any, value: Any) -> Any:
    """``$elemMatch`` construct.

    Schema::

        {"$elemMatch": {<conditions>}}

    Behavior:
    * With an ``$in`` key only that key is normalized (as ``$in`` on the
      array) and the predicate is returned with it replaced
    * Otherwise the whole predicate is cast as a condition set scoped to
      the element type and the normalized condition set is returned

    Examples::

        scores: [Number]      {"$gte": "80", "$lt": 90}     → {"$gte": 80, "$lt": 90}
        comments: [Comment]   {"votes": {"$gt": "3"}}       → {"votes": {"$gt": 3}}
    """
    if not isinstance(value, Mapping):
        raise TypeError(f"$elemMatch expects an object, received {value!r}")

    if "$in" in value:
        value["$in"] = array.cast_for_query("$in", value["$in"])
        return value

    if array.caster is None:
        return value
    return Query(value).cast(array.caster)


def size_handler(array: Any, value: Any) -> Any:
    """``$size`` — number of elements, cast as a number."""
    return cast_to_number(array, value)


def options_handler(array: Any, value: Any) -> str:
    """``$options`` — flags companion of ``$regex``, stringified."""
    return str(value)
