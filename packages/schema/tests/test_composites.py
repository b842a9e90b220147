"""Tests for list, tuple, union, object and record schemas."""

from types import MappingProxyType

import pytest

import dataknobs_schema as s
from dataknobs_schema import Ok, SchemaConfigurationError, Seq


class TestListOf:
    """Test list_of()."""

    def test_valid(self):
        """Test a list of matching elements."""
        result = s.list_of(s.string()).parse(["a", "b"])
        assert result == Ok(Seq(["a", "b"]))
        assert isinstance(result.unwrap(), Seq)

    def test_empty(self):
        """Test an empty list is valid."""
        assert s.list_of(s.number()).parse([]).unwrap().is_empty()

    def test_tuple_input(self):
        """Test tuples are accepted as arrays."""
        assert s.list_of(s.number()).parse((1, 2)).unwrap() == [1, 2]

    @pytest.mark.parametrize("value", ["ab", {"0": "a"}, None, 1, {"a"}])
    def test_not_an_array(self, value):
        """Test non-array inputs fail with an empty path."""
        error = s.list_of(s.string()).parse(value).unwrap_err()
        assert error.expected == "list"
        assert error.path == ()

    def test_element_error_path(self):
        """Test the failing index is prepended."""
        error = s.list_of(s.string()).parse(["hello", 2]).unwrap_err()
        assert error.path == ("1",)
        assert error.value == 2
        assert error.message == "Expected string, but got number"

    def test_stops_at_first_failure(self):
        """Test elements after the first failure are not reported."""
        error = s.list_of(s.string()).parse(["a", 1, 2]).unwrap_err()
        assert error.path == ("1",)

    def test_nested_path(self):
        """Test paths accumulate through nested composites."""
        schema = s.list_of(s.obj({"tags": s.list_of(s.string())}))
        error = schema.parse([{"tags": []}, {"tags": ["a", 1]}]).unwrap_err()
        assert error.path == ("1", "tags", "1")
        assert str(error) == "1.tags.1: Expected string, but got number"

    def test_override_message(self):
        """Test the override applies to the list's own check only."""
        schema = s.list_of(s.string(), "Need a list")
        assert schema.parse("x").unwrap_err().message == "Need a list"
        assert schema.parse([1]).unwrap_err().message == "Expected string, but got number"


class TestTupleOf:
    """Test tuple_of()."""

    def test_valid(self):
        """Test positional validation."""
        schema = s.tuple_of([s.string(), s.number()])
        assert schema.parse(["hello", 1]) == Ok(("hello", 1))

    def test_position_error(self):
        """Test the failing position is prepended."""
        error = s.tuple_of([s.string(), s.number()]).parse(["hello", True]).unwrap_err()
        assert error.path == ("1",)
        assert error.message == "Expected number, but got boolean"

    @pytest.mark.parametrize("value", [["hello"], ["hello", 1, 2], "ab", None])
    def test_wrong_shape(self, value):
        """Test wrong lengths and non-arrays fail as a whole."""
        error = s.tuple_of([s.string(), s.number()]).parse(value).unwrap_err()
        assert error.expected == "tuple"
        assert error.path == ()

    def test_requires_schemas(self):
        """Test an empty tuple schema is a configuration error."""
        with pytest.raises(SchemaConfigurationError):
            s.tuple_of([])


class TestUnion:
    """Test union()."""

    def test_first_match_wins(self):
        """Test alternatives are tried in order."""
        schema = s.union([s.coerce(s.number()), s.string()])
        assert schema.parse("12") == Ok(12)
        assert s.union([s.string(), s.coerce(s.number())]).parse("12") == Ok("12")

    def test_all_fail(self):
        """Test the synthesized error joins alternative tags."""
        error = s.union([s.string(), s.number()]).parse(True).unwrap_err()
        assert error.expected == "string | number"
        assert error.actual == "boolean"
        assert error.message == "Expected string | number, but got boolean"
        assert error.path == ()

    def test_nested_failures_discarded(self):
        """Test the alternatives' own paths are not reported."""
        schema = s.union([s.obj({"a": s.string()}), s.list_of(s.string())])
        error = schema.parse({"a": 1}).unwrap_err()
        assert error.path == ()
        assert error.expected == "object | list"

    def test_override_message(self):
        """Test the override message."""
        error = s.union([s.string(), s.number()], "Bad").parse(None).unwrap_err()
        assert error.message == "Bad"
        assert error.expected == "string | number"

    def test_requires_schemas(self):
        """Test an empty union is a configuration error."""
        with pytest.raises(SchemaConfigurationError):
            s.union([])


class TestObj:
    """Test obj()."""

    def test_valid(self, user_schema):
        """Test declared properties are validated and returned."""
        assert user_schema.parse({"id": 1, "name": "Jane"}) == Ok({"id": 1, "name": "Jane"})

    def test_extra_keys_dropped(self, user_schema):
        """Test undeclared keys do not appear in the output."""
        data = {"id": 1, "name": "Jane", "admin": True}
        assert user_schema.parse(data).unwrap() == {"id": 1, "name": "Jane"}

    def test_output_is_new(self, user_schema):
        """Test the input mapping is not returned or modified."""
        data = {"id": 1, "name": "Jane"}
        result = user_schema.parse(data).unwrap()
        assert result is not data
        assert data == {"id": 1, "name": "Jane"}

    def test_missing_key(self):
        """Test absent keys are validated as null."""
        schema = s.obj({"name": s.string(), "age": s.number()})
        error = schema.parse({"name": "John"}).unwrap_err()
        assert error.path == ("age",)
        assert error.actual == "null"
        assert error.message == "Expected number, but got null"

    def test_first_declared_failure(self):
        """Test properties are checked in declaration order."""
        schema = s.obj({"a": s.string(), "b": s.string()})
        assert schema.parse({"b": 1, "a": 2}).unwrap_err().path == ("a",)

    @pytest.mark.parametrize("value", [[], "x", None, 3])
    def test_not_an_object(self, value):
        """Test non-mapping inputs."""
        error = s.obj({}).parse(value).unwrap_err()
        assert error.expected == "object"

    def test_mapping_input(self, user_schema):
        """Test any mapping is accepted."""
        data = MappingProxyType({"id": 2, "name": "Ann"})
        assert user_schema.parse(data).unwrap() == {"id": 2, "name": "Ann"}

    def test_props_read_only(self, user_schema):
        """Test props cannot be mutated after construction."""
        with pytest.raises(TypeError):
            user_schema.props["extra"] = s.string()

    def test_props_must_be_schemas(self):
        """Test non-schema properties are rejected."""
        with pytest.raises(SchemaConfigurationError, match="'name'"):
            s.obj({"name": str})


class TestRecord:
    """Test record()."""

    def test_valid(self):
        """Test keys and values are both validated."""
        schema = s.record(s.string(), s.number())
        assert schema.parse({"a": 1, "b": 2}) == Ok({"a": 1, "b": 2})

    def test_value_error_path(self):
        """Test the raw key is prepended to value errors."""
        error = s.record(s.string(), s.number()).parse({"a": 1, "b": "x"}).unwrap_err()
        assert error.path == ("b",)
        assert error.value == "x"

    def test_key_error_path(self):
        """Test key failures are reported at the key itself."""
        error = s.record(s.string(), s.number()).parse({1: 2}).unwrap_err()
        assert error.path == ("1",)
        assert error.value == 1
        assert error.expected == "string"

    def test_key_transformation(self):
        """Test parsed keys are used in the output."""
        schema = s.record(s.pipe(s.string(), s.steps.upcase()), s.number())
        assert schema.parse({"a": 1}).unwrap() == {"A": 1}

    def test_not_an_object(self):
        """Test non-mapping input."""
        assert s.record(s.string(), s.number()).parse([]).unwrap_err().expected == "record"
