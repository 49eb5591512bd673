"""Query-operator handlers shared by the primitive element casters.

Each handler is a ``ConditionalFn``: ``(caster, value) → query value``.
They are grouped into per-type tables in ``handler_groups``.
"""

from __future__ import annotations

import re
from typing import Any

import regex

from ..core import is_sequence


def cast_single(caster: Any, value: Any) -> Any:
    """``$ne``, ``$gt``, ``$gte``, ``$lt``, ``$lte`` — cast one value.

    Examples::

        Number: {"$gt": "5"}  → 5
        Date:   {"$lt": "2020-01-01"} → datetime(2020, 1, 1)
    """
    return caster.cast_for_query(value)


def cast_each(caster: Any, value: Any) -> list:
    """``$in``, ``$nin``, ``$all`` — cast every item; a scalar becomes a one-item list."""
    if not is_sequence(value):
        value = [value]
    return [caster.cast_for_query(v) for v in value]


def cast_mod(caster: Any, value: Any) -> list:
    """``$mod`` — ``[divisor, remainder]``, each cast as a number."""
    if not is_sequence(value):
        value = [value]
    return [caster.cast(v) for v in value]


def cast_regex(caster: Any, value: Any) -> Any:
    """``$regex`` — compiled patterns (``re`` or ``regex``) are kept, anything else is stringified."""
    if isinstance(value, (re.Pattern, regex.Pattern)):
        return value
    return caster.cast(value)


def cast_options(caster: Any, value: Any) -> str:
    """``$options`` — regex flags, stringified."""
    return str(value)


def keep(caster: Any, value: Any) -> Any:
    """Return *value* untouched (``Mixed``)."""
    return value
