"""Geospatial query-operator handlers: ``$within`` and ``$geoIntersects``.

Shapes are normalized in place: every coordinate is replaced by its numeric
cast and the (same) predicate mapping is returned.

Shape literals
--------------
* ``$box`` / ``$polygon``         – sequence of coordinate pairs
* ``$center`` / ``$centerSphere`` – sequence of (coordinate pair | radius)
* ``$geometry``                   – ``{"type": <kind>, "coordinates": <tree>}``
  where ``<kind>`` is one of ``GEOMETRY_KINDS``; other kinds are passed
  through without validation.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..core import is_sequence
from ..errors import GeoShapeError
from .conditionals import cast_to_number

logger = logging.getLogger(__name__)

GEOMETRY_KINDS = ("Polygon", "LineString", "Point")


def _number_list(array: Any, values: Any) -> list:
    if isinstance(values, tuple):
        values = list(values)
    for i, v in enumerate(values):
        values[i] = cast_to_number(array, v)
    return values


def _shape_list(key: str, shape: Any) -> list:
    # lists are updated in place; tuples are replaced
    if isinstance(shape, tuple):
        return list(shape)
    if not isinstance(shape, list):
        raise GeoShapeError(f"Invalid $within {key} argument. Expected an array, received {shape!r}")
    return shape


def cast_coordinates(array: Any, coordinates: Any, depth: int = 0) -> list:
    """Cast every leaf of a nested coordinate tree to a number, in place.

    Lists are mutated and returned; tuples are replaced by lists.  Nesting
    deeper than ``array.coordinates_max_depth`` (which also catches cyclic
    input) raises ``GeoShapeError``.
    """
    if depth > array.coordinates_max_depth:
        raise GeoShapeError(
            f"Invalid $geometry coordinates. Nesting exceeds {array.coordinates_max_depth} levels"
        )
    if isinstance(coordinates, tuple):
        coordinates = list(coordinates)
    for i, v in enumerate(coordinates):
        if is_sequence(v):
            coordinates[i] = cast_coordinates(array, v, depth + 1)
        else:
            coordinates[i] = cast_to_number(array, v)
    return coordinates


def cast_geometry(array: Any, geometry: Any) -> None:
    """Normalize the coordinates of a ``$geometry`` literal of a known kind."""
    if not isinstance(geometry, Mapping):
        raise GeoShapeError(f"Invalid $geometry. Expected an object, received {geometry!r}")

    kind = geometry.get("type")
    if kind not in GEOMETRY_KINDS:
        # unknown kinds are left for the storage engine to validate
        logger.debug("passing through $geometry of kind %r at %r", kind, array.path)
        return

    coordinates = geometry.get("coordinates")
    if not is_sequence(coordinates):
        raise GeoShapeError(
            f"Invalid $geometry coordinates. Expected an array, received {coordinates!r}"
        )
    geometry["coordinates"] = cast_coordinates(array, coordinates)


def within_handler(array: Any, value: Any) -> Any:
    """``$within`` construct.

    Schema::

        {"$within": {"$box": [[x1, y1], [x2, y2]]}}
        {"$within": {"$polygon": [[x1, y1], [x2, y2], [x3, y3]]}}
        {"$within": {"$center": [[x, y], radius], "$maxDistance": d}}
        {"$within": {"$centerSphere": [[x, y], radius]}}
        {"$within": {"$geometry": {"type": "Polygon", "coordinates": [...]}}}

    Behavior:
    * ``$maxDistance`` is cast to a number when present
    * Only the first present shape is normalized, in the order
      box/polygon, center/centerSphere, geometry
    * A box/polygon entry that is not a sequence raises ``GeoShapeError``
    """
    if not isinstance(value, Mapping):
        raise GeoShapeError(f"$within expects an object, received {value!r}")

    if "$maxDistance" in value:
        value["$maxDistance"] = cast_to_number(array, value["$maxDistance"])

    if value.get("$box") or value.get("$polygon"):
        key = "$box" if value.get("$box") else "$polygon"
        shape = value[key] = _shape_list(key, value[key])
        for i, pair in enumerate(shape):
            if not is_sequence(pair):
                raise GeoShapeError(
                    f"Invalid $within {key} argument. Expected an array, received {pair!r}"
                )
            shape[i] = _number_list(array, pair)

    elif value.get("$center") or value.get("$centerSphere"):
        key = "$center" if value.get("$center") else "$centerSphere"
        shape = value[key] = _shape_list(key, value[key])
        for i, item in enumerate(shape):
            if is_sequence(item):
                shape[i] = _number_list(array, item)
            else:
                shape[i] = cast_to_number(array, item)

    elif value.get("$geometry"):
        cast_geometry(array, value["$geometry"])

    return value


def geo_intersects_handler(array: Any, value: Any) -> Any:
    """``$geoIntersects`` construct.

    Schema::

        {"$geoIntersects": {"$geometry": {"type": "Point", "coordinates": [x, y]}}}

    Returns ``None`` when there is no ``$geometry``; otherwise the predicate
    with its coordinates cast to numbers.
    """
    geometry = value.get("$geometry") if isinstance(value, Mapping) else None
    if not geometry:
        return None

    cast_geometry(array, geometry)
    return value
