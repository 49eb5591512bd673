"""Tests for SchemaArray element-type resolution, defaults and getters."""

import pytest

from j_array import (
    EmbeddedCaster,
    MixedCaster,
    NumberCaster,
    SchemaArray,
    StringCaster,
    TypedArray,
    build_default_registry,
)


class UpperCaster:
    """Duck-typed element caster without cast_for_query."""

    def __init__(self, path, options):
        self.path = path
        self.options = options

    def cast(self, value, doc=None, init=False):
        return str(value).upper()


class TestElementResolution:
    """Declaration → element caster."""

    def test_untyped(self):
        """No declaration means no element caster."""
        arr = SchemaArray("xs")

        assert arr.caster is None
        assert arr.caster_constructor is None

    def test_name(self):
        """Registry names resolve to built-in casters."""
        arr = SchemaArray("nums", "Number")

        assert arr.caster_constructor is NumberCaster
        assert isinstance(arr.caster, NumberCaster)

    def test_python_type(self):
        """Python types resolve through their registry aliases."""
        assert SchemaArray("a", int).caster_constructor is NumberCaster
        assert SchemaArray("b", float).caster_constructor is NumberCaster
        assert SchemaArray("c", str).caster_constructor is StringCaster

    def test_type_key_with_options(self):
        """{type: X, ...} uses X and passes the other keys as caster options."""
        arr = SchemaArray("authors", {"type": "Identifier", "ref": "User"})

        assert arr.caster.options == {"ref": "User"}

    def test_options_are_cloned(self):
        """Mutating the declaration afterwards does not affect the caster."""
        decl = {"type": "String", "ref": "Tag"}
        arr = SchemaArray("tags", decl)
        decl["ref"] = "Other"

        assert arr.caster.options["ref"] == "Tag"
        assert decl["type"] == "String"

    def test_mapping_without_type_is_mixed(self):
        """A mapping without a type key stores arbitrary values."""
        arr = SchemaArray("bag", {"anything": True})

        assert arr.caster_constructor is MixedCaster
        assert arr.cast([{"a": 1}, 2]) == [{"a": 1}, 2]

    def test_custom_caster_class(self):
        """Unknown classes are used as the caster class."""
        arr = SchemaArray("codes", UpperCaster)

        assert arr.caster_constructor is UpperCaster
        assert arr.cast(["ab", "cd"]) == ["AB", "CD"]

    def test_invalid_declaration(self):
        """Unknown names raise TypeError."""
        with pytest.raises(TypeError, match="Invalid array element type"):
            SchemaArray("x", "NoSuchType")

    def test_custom_registry(self):
        """Names resolve against the registry given to the array."""
        registry = build_default_registry(casters={"Upper": UpperCaster})
        arr = SchemaArray("codes", "Upper", registry=registry)

        assert arr.cast("x") == ["X"]


class TestPathPropagation:
    """Field path handling for element casters."""

    def test_primitive_caster_gets_array_path(self, numbers):
        """Primitive casters report errors at the array path."""
        assert numbers.caster.path == "nums"

    def test_custom_caster_gets_array_path(self):
        """Duck-typed casters get the array path too."""
        assert SchemaArray("codes", UpperCaster).caster.path == "codes"

    def test_embedded_caster_keeps_own_path(self, comments):
        """Embedded casters manage their own paths."""
        assert isinstance(comments.caster, EmbeddedCaster)
        assert comments.caster.path is None

    def test_nested_array(self):
        """[[T]] resolves to a nested SchemaArray sharing the field path."""
        arr = SchemaArray("grid", ["Number"])

        assert arr.caster_constructor is SchemaArray
        assert arr.caster.path == "grid"
        assert arr.caster.caster.path == "grid"


class TestDefaults:
    """Default-value factory."""

    def test_empty_when_no_default(self, numbers, owner):
        """Without a default a new document gets an empty array."""
        value = numbers.get_default(owner)

        assert value == []
        assert isinstance(value, TypedArray)
        assert value.owner is owner
        assert value.path == "nums"

    def test_literal_default_is_cast(self):
        """Literal defaults are cast to the element type."""
        arr = SchemaArray("nums", "Number", {"default": [1, "2"]})

        assert arr.get_default() == [1, 2]

    def test_literal_default_not_shared(self):
        """Each document gets its own copy of a literal default."""
        literal = [1, 2]
        arr = SchemaArray("nums", "Number", {"default": literal})

        first = arr.get_default()
        second = arr.get_default()
        first.append(3)

        assert first is not second
        assert second == [1, 2]
        assert literal == [1, 2]

    def test_callable_default(self):
        """Zero-argument callables are invoked per document."""
        arr = SchemaArray("nums", "Number", {"default": lambda: ["3"]})

        assert arr.get_default() == [3]


class TestRequiredAndGetters:
    """check_required and the population special case."""

    def test_check_required(self, numbers):
        """Only non-empty arrays satisfy required."""
        assert numbers.check_required([1]) is True
        assert numbers.check_required([]) is False
        assert numbers.check_required(None) is False

    def test_getters_applied(self):
        """Getters run for ordinary arrays."""
        arr = SchemaArray("nums", "Number", {"get": lambda v: len(v)})

        assert arr.apply_getters([1, 2]) == 2

    def test_ref_bypasses_getters(self):
        """Arrays of references return populated values untouched."""
        arr = SchemaArray("authors", {"type": "Identifier", "ref": "User"}, {"get": lambda v: "changed"})
        populated = [{"name": "Alice"}]

        assert arr.apply_getters(populated) is populated
