"""Handlers sub-package — query-operator handlers, grouped by logical system.

scalar       – operators of the primitive element types (``$gt``, ``$in``, ``$regex``, …)
conditionals – array operators (``$all``, ``$elemMatch``, ``$size``, …) and numeric coercion
geo          – ``$within`` and ``$geoIntersects`` shape normalization
"""

from .conditionals import (
    all_handler, elem_match_handler, size_handler, options_handler,
    cast_to_number, array_cast_for_query,
)
from .geo import (
    GEOMETRY_KINDS, within_handler, geo_intersects_handler,
    cast_coordinates, cast_geometry,
)
from .scalar import cast_single, cast_each, cast_mod, cast_regex, cast_options, keep

__all__ = [
    # conditionals
    "all_handler",
    "elem_match_handler",
    "size_handler",
    "options_handler",
    "cast_to_number",
    "array_cast_for_query",
    # geo
    "GEOMETRY_KINDS",
    "within_handler",
    "geo_intersects_handler",
    "cast_coordinates",
    "cast_geometry",
    # scalar
    "cast_single",
    "cast_each",
    "cast_mod",
    "cast_regex",
    "cast_options",
    "keep",
]
