"""Tests for $within and $geoIntersects shape normalization."""

import pytest

from j_array import CastError, GeoShapeError, SchemaArray
from j_array.handlers.geo import cast_coordinates


@pytest.fixture
def loc():
    """Array field holding coordinates at path ``loc``."""
    return SchemaArray("loc", "Number")


class TestWithinBoxPolygon:
    """$box and $polygon."""

    def test_box_coerced(self, loc):
        """Coordinate strings become numbers."""
        result = loc.cast_for_query("$within", {"$box": [[1, "2"], [3, 4]]})

        assert result == {"$box": [[1, 2], [3, 4]]}

    def test_box_pairs_mutated_in_place(self, loc):
        """Inner coordinate pairs are updated, not copied."""
        pair = ["1", "2"]

        loc.cast_for_query("$within", {"$box": [pair, [3, 4]]})

        assert pair == [1, 2]

    def test_polygon_coerced(self, loc):
        """$polygon follows the same rules."""
        result = loc.cast_for_query("$within", {"$polygon": [["0", 0], [1, "1"], (2, "0")]})

        assert result == {"$polygon": [[0, 0], [1, 1], [2, 0]]}

    def test_box_entry_not_a_sequence(self, loc):
        """Non-sequence entries are a malformed shape."""
        with pytest.raises(GeoShapeError, match=r"Invalid \$within \$box argument"):
            loc.cast_for_query("$within", {"$box": ["not-an-array", [1, 2]]})

    def test_malformed_shape_is_type_error(self, loc):
        """GeoShapeError is a TypeError."""
        with pytest.raises(TypeError):
            loc.cast_for_query("$within", {"$polygon": [[1, 2], 3]})

    def test_bad_coordinate(self, loc):
        """Non-numeric coordinates fail at the array path."""
        with pytest.raises(CastError) as exc_info:
            loc.cast_for_query("$within", {"$box": [[1, "x"], [3, 4]]})

        assert exc_info.value.path == "loc"


class TestWithinCenter:
    """$center, $centerSphere and $maxDistance."""

    def test_center(self, loc):
        """Pairs are coerced element-wise, the radius directly."""
        result = loc.cast_for_query("$within", {"$center": [[1, "2"], "10"]})

        assert result == {"$center": [[1, 2], 10]}

    def test_center_sphere(self, loc):
        """$centerSphere follows the same rules."""
        result = loc.cast_for_query("$within", {"$centerSphere": [["1.5", 2], "0.1"]})

        assert result == {"$centerSphere": [[1.5, 2], 0.1]}

    def test_max_distance(self, loc):
        """$maxDistance is coerced next to any shape."""
        result = loc.cast_for_query("$within", {"$center": [[0, 0], 1], "$maxDistance": "5"})

        assert result["$maxDistance"] == 5

    def test_zero_max_distance(self, loc):
        """A zero distance is still coerced."""
        assert loc.cast_for_query("$within", {"$maxDistance": "0"}) == {"$maxDistance": 0}

    def test_requires_mapping(self, loc):
        """$within expects an object."""
        with pytest.raises(GeoShapeError):
            loc.cast_for_query("$within", [1, 2])


class TestGeometry:
    """$geometry inside $within and $geoIntersects."""

    def test_polygon_tree_in_place(self, loc):
        """Every leaf of the nested tree is coerced in place."""
        ring = [["0", "0"], ["1", "0"], ["1", "1"], ["0", "0"]]
        coordinates = [ring]
        predicate = {"$geometry": {"type": "Polygon", "coordinates": coordinates}}

        result = loc.cast_for_query("$within", predicate)

        assert result is predicate
        assert predicate["$geometry"]["coordinates"] is coordinates
        assert ring == [[0, 0], [1, 0], [1, 1], [0, 0]]

    def test_line_string(self, loc):
        """LineString coordinates are coerced."""
        result = loc.cast_for_query(
            "$within", {"$geometry": {"type": "LineString", "coordinates": [["1", "2"], ["3", "4"]]}}
        )

        assert result["$geometry"]["coordinates"] == [[1, 2], [3, 4]]

    def test_geo_intersects_point(self, loc):
        """Point coordinates become numbers; the kind is untouched."""
        result = loc.cast_for_query(
            "$geoIntersects", {"$geometry": {"type": "Point", "coordinates": ["1.5", "2.5"]}}
        )

        assert result == {"$geometry": {"type": "Point", "coordinates": [1.5, 2.5]}}

    def test_geo_intersects_without_geometry(self, loc):
        """No $geometry: nothing is returned and nothing fails."""
        assert loc.cast_for_query("$geoIntersects", {}) is None

    @pytest.mark.parametrize("op", ["$within", "$geoIntersects"])
    def test_unknown_kind_passes_through(self, loc, op):
        """Unrecognized geometry kinds are not validated."""
        geometry = {"type": "MultiPoint", "coordinates": [["a", "b"]]}

        result = loc.cast_for_query(op, {"$geometry": geometry})

        assert result == {"$geometry": {"type": "MultiPoint", "coordinates": [["a", "b"]]}}

    def test_tuple_coordinates(self, loc):
        """Tuples in the tree are replaced by lists."""
        result = loc.cast_for_query(
            "$geoIntersects", {"$geometry": {"type": "LineString", "coordinates": (("1", 2), ("3", 4))}}
        )

        assert result["$geometry"]["coordinates"] == [[1, 2], [3, 4]]

    def test_missing_coordinates(self, loc):
        """Known kinds need a coordinate sequence."""
        with pytest.raises(GeoShapeError, match="Expected an array"):
            loc.cast_for_query("$geoIntersects", {"$geometry": {"type": "Point"}})


class TestCoordinateDepth:
    """Recursion guard on coordinate trees."""

    def test_cyclic_tree(self, loc):
        """Self-referencing input fails instead of recursing forever."""
        coordinates = [1]
        coordinates.append(coordinates)

        with pytest.raises(GeoShapeError, match="Nesting exceeds"):
            cast_coordinates(loc, coordinates)

    def test_custom_depth(self):
        """The cap is configurable per field."""
        shallow = SchemaArray("loc", "Number", coordinates_max_depth=1)
        geometry = {"type": "Polygon", "coordinates": [[[["1", "2"]]]]}

        with pytest.raises(GeoShapeError):
            shallow.cast_for_query("$geoIntersects", {"$geometry": geometry})

    def test_within_depth(self, loc):
        """Trees within the cap are fully coerced."""
        assert cast_coordinates(loc, [[[["1"]]]]) == [[[[1]]]]


class TestMalformedGeometry:
    """$geometry values that are not objects."""

    @pytest.mark.parametrize("op", ["$within", "$geoIntersects"])
    def test_non_mapping_geometry(self, loc, op):
        """A list in place of the geometry object is a malformed shape."""
        with pytest.raises(GeoShapeError, match="Expected an object"):
            loc.cast_for_query(op, {"$geometry": [1, 2]})

    def test_non_sequence_shape(self, loc):
        """A scalar shape argument is a malformed shape."""
        with pytest.raises(GeoShapeError, match=r"Invalid \$within \$center argument"):
            loc.cast_for_query("$within", {"$center": "far"})


class TestShapeIdentity:
    """Shape lists are updated in place."""

    @pytest.mark.parametrize("key", ["$box", "$polygon"])
    def test_outer_list_kept(self, loc, key):
        """The caller's shape list holds the coerced pairs afterwards."""
        shape = [["1", "2"], [3, "4"]]

        result = loc.cast_for_query("$within", {key: shape})

        assert result[key] is shape
        assert shape == [[1, 2], [3, 4]]

    def test_center_list_kept(self, loc):
        """$center items are coerced inside the caller's list."""
        shape = [["1", "2"], "10"]

        result = loc.cast_for_query("$within", {"$center": shape})

        assert result["$center"] is shape
        assert shape == [[1, 2], 10]

    def test_tuple_shape_replaced(self, loc):
        """Tuple shapes are replaced by lists."""
        result = loc.cast_for_query("$within", {"$box": (("1", 2), (3, 4))})

        assert result["$box"] == [[1, 2], [3, 4]]
        assert type(result["$box"]) is list
