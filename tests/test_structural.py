"""Tests for array and object validators."""

from collections import OrderedDict
from types import MappingProxyType

import pytest

import dataknobs_shapes as shapes
from dataknobs_shapes import ArrayMode, ValidatorDefinitionError


def paths(report):
    return [violation.path for violation in report.violations]


def codes(report):
    return [violation.code for violation in report.violations]


class TestArrayPlain:
    """Test array() with no arguments."""

    @pytest.mark.parametrize("subject", [[], [1, "x", None], ()])
    def test_accepts_sequences(self, subject):
        assert shapes.array()(subject).valid

    @pytest.mark.parametrize("subject", ["abc", {"a": 1}, None, 3, {1, 2}])
    def test_rejects_non_sequences(self, subject):
        report = shapes.array()(subject)
        assert codes(report) == ["not_type_a"]
        assert report.violations[0].a == "array"

    def test_mode(self):
        assert shapes.array().mode is ArrayMode.ANY


class TestArrayElements:
    """Test array(element, length)."""

    def test_every_element_checked(self):
        """Test that element violations carry their index."""
        validator = shapes.array(shapes.integer())
        assert validator([1, 2, 3]).valid

        report = validator([1, "two", 3, None])
        assert paths(report) == [(1,), (3,)]
        assert codes(report) == ["not_type_a", "not_type_a"]

    def test_length_validator(self):
        """Test that the length check adds no path segment."""
        validator = shapes.array(shapes.string(), shapes.integer(1, 2))
        assert validator(["a"]).valid

        report = validator([])
        assert codes(report) == ["out_of_range"]
        assert paths(report) == [()]

    def test_element_violations_precede_length(self):
        validator = shapes.array(shapes.string(), 1)
        report = validator([1, 2])
        assert paths(report) == [(0,), (1,), ()]
        assert codes(report) == ["not_type_a", "not_type_a", "not_literal"]

    def test_plain_element_is_literal(self):
        validator = shapes.array(0)
        assert validator([0, 0]).valid
        assert paths(validator([0, 1])) == [(1,)]

    def test_rest_not_allowed(self):
        with pytest.raises(ValidatorDefinitionError):
            shapes.array(shapes.string(), None, shapes.string())

    def test_mode(self):
        assert shapes.array(shapes.string()).mode is ArrayMode.ELEMENTS


class TestArrayPositional:
    """Test array([v0, v1, ...], length, rest)."""

    def test_matching_tuple(self):
        validator = shapes.array([shapes.boolean(), shapes.string()])
        assert validator([True, "x"]).violations == []
        assert validator((False, "")).valid

    def test_exact_length_by_default(self):
        """Test that a missing member is one length violation."""
        report = shapes.array([shapes.boolean(), shapes.string()])([True])
        assert len(report.violations) == 1
        violation = report.violations[0]
        assert violation.code == "not_literal"
        assert (violation.a, violation.b) == (2, 1)
        assert violation.path == ()

    def test_too_long_without_length_validator(self):
        """Test that surplus members are only a length problem."""
        report = shapes.array([shapes.boolean()])([True, "x", 3])
        assert codes(report) == ["not_literal"]

    def test_positional_violations(self):
        report = shapes.array([shapes.boolean(), shapes.string()])(["x", True])
        assert paths(report) == [(0,), (1,)]

    def test_rest_validator(self):
        """Test that surplus members conform to rest."""
        validator = shapes.array([shapes.string()], shapes.integer(1), shapes.integer())
        assert validator(["head", 1, 2, 3]).valid
        assert paths(validator(["head", 1, "x"])) == [(2,)]

    def test_cyclic_reuse(self):
        """Test that surplus members reuse the sequence cyclically."""
        validator = shapes.array([shapes.string(), shapes.integer()], shapes.any())
        assert validator(["a", 1, "b", 2, "c"]).valid

        report = validator(["a", 1, 2, "b", "c"])
        assert paths(report) == [(2,), (3,)]
        assert codes(report) == ["not_type_a", "not_type_a"]

    def test_shorter_with_length_validator(self):
        validator = shapes.array([shapes.string(), shapes.integer()], shapes.integer(0, 2))
        assert validator(["a"]).valid
        assert validator([]).valid

    def test_empty_sequence(self):
        """Test that an empty sequence means an empty array."""
        validator = shapes.array([])
        assert validator([]).valid
        assert codes(validator([1])) == ["not_literal"]

    def test_empty_sequence_with_rest(self):
        validator = shapes.array([], shapes.any(), shapes.integer())
        assert validator([1, 2]).valid
        assert paths(validator([1, "x"])) == [(1,)]

    def test_empty_sequence_needs_rest_when_surplus_possible(self):
        """Test the construction-time fault for an unusable configuration."""
        with pytest.raises(ValidatorDefinitionError):
            shapes.array([], shapes.integer(0, 5))

    def test_plain_values_are_literals(self):
        validator = shapes.array(["point", shapes.number(), shapes.number()])
        assert validator(["point", 1, 2.5]).valid
        assert paths(validator(["line", 1, 2])) == [(0,)]

    def test_mode(self):
        assert shapes.array([shapes.any()]).mode is ArrayMode.POSITIONAL


class TestObjectProperties:
    """Test object(required, optional, allow_strays)."""

    def test_required_and_optional(self):
        validator = shapes.object({"id": shapes.string()}, {"note": shapes.string()})
        assert validator({"id": "a"}).valid
        assert validator({"id": "a", "note": "b"}).valid

    def test_strays_rejected_by_default(self):
        """Test that unknown keys are reported under their own key."""
        validator = shapes.object({"id": shapes.string()}, {"note": shapes.string()})
        report = validator({"id": "a", "extra": 1})
        assert len(report.violations) == 1
        assert report.violations[0].path == ("extra",)
        assert report.violations[0].code == "unexpected_property"

    def test_strays_allowed(self):
        validator = shapes.object({"id": shapes.string()}, {"note": shapes.string()}, True)
        assert validator({"id": "a", "extra": 1}).violations == []

    def test_missing_required(self):
        report = shapes.object({"id": shapes.string()})({})
        assert codes(report) == ["missing_property"]
        assert paths(report) == [("id",)]

    def test_invalid_values(self):
        validator = shapes.object({"id": shapes.string()}, {"note": shapes.string()})
        report = validator({"id": 1, "note": 2})
        assert paths(report) == [("id",), ("note",)]

    def test_optional_only(self):
        validator = shapes.object(None, {"note": shapes.string()})
        assert isinstance(validator, shapes.PropertiesValidator)
        assert validator({}).valid
        assert paths(validator({"other": 1})) == [("other",)]

    def test_report_order(self):
        """Test required, then optional, then strays."""
        validator = shapes.object(
            {"a": shapes.string(), "b": shapes.string()}, {"c": shapes.string()}
        )
        report = validator(OrderedDict([("z", 0), ("c", 0), ("a", 0)]))
        assert paths(report) == [("a",), ("b",), ("c",), ("z",)]
        assert codes(report) == [
            "not_type_a",
            "missing_property",
            "not_type_a",
            "unexpected_property",
        ]

    def test_key_in_both_maps_is_required(self):
        validator = shapes.object({"a": shapes.string()}, {"a": shapes.integer()})
        assert validator({"a": "x"}).valid
        assert codes(validator({})) == ["missing_property"]

    def test_plain_property_values_are_literals(self):
        validator = shapes.object({"kind": "user", "id": shapes.string()})
        assert validator({"kind": "user", "id": "u1"}).valid
        assert paths(validator({"kind": "admin", "id": "u1"})) == [("kind",)]

    @pytest.mark.parametrize("subject", [None, [], ["id"], "id", 3])
    def test_rejects_non_mappings(self, subject):
        report = shapes.object({"id": shapes.string()})(subject)
        assert codes(report) == ["not_type_a"]
        assert report.violations[0].a == "object"

    def test_accepts_any_mapping(self):
        validator = shapes.object({"id": shapes.string()})
        assert validator(MappingProxyType({"id": "a"})).valid

    def test_configuration_is_frozen(self):
        """Test that later changes to the caller's dict do not leak in."""
        required = {"id": shapes.string()}
        validator = shapes.object(required)
        required["extra"] = shapes.string()
        assert validator({"id": "a"}).valid

    def test_invalid_property_maps(self):
        with pytest.raises(ValidatorDefinitionError):
            shapes.properties(["id"])
        with pytest.raises(ValidatorDefinitionError):
            shapes.object("id", {"note": shapes.string()})


class TestObjectEntries:
    """Test object(key_validator, value_validator)."""

    def test_no_constraints(self):
        validator = shapes.object()
        assert isinstance(validator, shapes.EntriesValidator)
        assert validator({}).valid
        assert validator({1: None, "x": [1]}).valid
        assert not validator([]).valid

    def test_key_and_value_validators(self):
        validator = shapes.object(shapes.string(r"^[a-z]+$"), shapes.integer())
        assert validator({"a": 1, "b": 2}).valid

        report = validator({"a": "x", "B": 2})
        assert paths(report) == [("a",), ("B",)]
        assert codes(report) == ["not_type_a", "no_match"]

    def test_key_then_value_per_entry(self):
        validator = shapes.object(shapes.string(), shapes.string())
        report = validator({1: 2})
        assert paths(report) == [(1,), (1,)]

    def test_values_only(self):
        validator = shapes.object(None, shapes.boolean())
        assert validator({"a": True}).valid
        assert paths(validator({"a": 1})) == [("a",)]

    def test_allow_strays_not_accepted(self):
        with pytest.raises(ValidatorDefinitionError):
            shapes.object(shapes.string(), None, True)


class TestNesting:
    """Test path composition across nested validators."""

    def test_nested_path(self):
        validator = shapes.object(
            {"people": shapes.array(shapes.object({"age": shapes.integer(0, 150)}))}
        )
        report = validator({"people": [{"age": -5}]})
        assert len(report.violations) == 1
        assert report.violations[0].path == ("people", 0, "age")
        assert report.messages() == ["people[0].age: -5 is outside 0..150"]

    def test_custom_validator_nests(self, even):
        """Test that hand-written validators interoperate with combinators."""
        validator = shapes.object({"counts": shapes.array(even)})
        assert validator({"counts": [2, 4]}).valid

        report = validator({"counts": [2, 3]})
        assert paths(report) == [("counts", 1)]
        assert report.violations[0].code == "not_even"

    def test_subject_is_not_modified(self, person):
        subject = {"name": "Ada", "age": 200, "tags": ["x", 1], "extra": True}
        snapshot = {"name": "Ada", "age": 200, "tags": ["x", 1], "extra": True}
        person(subject)
        assert subject == snapshot

    def test_reusable(self, person):
        """Test that a validator gives the same answer on every call."""
        subject = {"name": "", "age": 1}
        first = person(subject)
        second = person(subject)
        assert first == second
        assert first is not second
