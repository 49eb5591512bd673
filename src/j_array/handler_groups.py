"""Pre-defined groups of query-operator handlers.

Schema types pick the groups they support as their ``conditional_handlers``
table.  Groups can also be merged to build custom casters::

    from j_array.core import SchemaType
    from j_array.handler_groups import COMPARISON_HANDLERS, SET_HANDLERS

    class Money(SchemaType):
        type_name = "Money"
        conditional_handlers = {**COMPARISON_HANDLERS, **SET_HANDLERS}

        def cast(self, value, doc=None, init=False):
            ...
"""
from .handlers.conditionals import (
    all_handler, elem_match_handler, size_handler, options_handler,
    cast_to_number, array_cast_for_query,
)
from .handlers.geo import within_handler, geo_intersects_handler
from .handlers.scalar import cast_single, cast_each, cast_mod, cast_regex, cast_options

# ─────────────────────────────────────────────────────────────────────────────
# Primitive element types
# ─────────────────────────────────────────────────────────────────────────────

COMPARISON_HANDLERS = {
    "$ne": cast_single,
    "$gt": cast_single,
    "$gte": cast_single,
    "$lt": cast_single,
    "$lte": cast_single,
}

SET_HANDLERS = {
    "$in": cast_each,
    "$nin": cast_each,
    "$all": cast_each,
}

NUMBER_HANDLERS = {
    **COMPARISON_HANDLERS,
    **SET_HANDLERS,
    "$mod": cast_mod,
}

STRING_HANDLERS = {
    **COMPARISON_HANDLERS,
    **SET_HANDLERS,
    "$regex": cast_regex,
    "$options": cast_options,
}

# ─────────────────────────────────────────────────────────────────────────────
# Array fields
# ─────────────────────────────────────────────────────────────────────────────

ARRAY_ELEMENT_HANDLERS = {
    "$ne": array_cast_for_query,
    "$in": array_cast_for_query,
    "$nin": array_cast_for_query,
    "$regex": array_cast_for_query,
    "$near": array_cast_for_query,
    "$nearSphere": array_cast_for_query,
    "$gt": array_cast_for_query,
    "$gte": array_cast_for_query,
    "$lt": array_cast_for_query,
    "$lte": array_cast_for_query,
}

ARRAY_STRUCTURE_HANDLERS = {
    "$all": all_handler,
    "$elemMatch": elem_match_handler,
    "$size": size_handler,
    "$options": options_handler,
}

GEO_HANDLERS = {
    "$within": within_handler,
    "$geoIntersects": geo_intersects_handler,
    "$maxDistance": cast_to_number,
}

ARRAY_HANDLERS = {
    **ARRAY_STRUCTURE_HANDLERS,
    **ARRAY_ELEMENT_HANDLERS,
    **GEO_HANDLERS,
}
