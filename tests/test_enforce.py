"""Tests for conforms and assert_conforms."""

import pytest

import dataknobs_shapes as shapes
from dataknobs_shapes import NonConformingError, ShapesError


class TestConforms:
    """Test conforms()."""

    def test_conforms(self, person):
        assert shapes.conforms(person, {"name": "Ada", "age": 36}) is True
        assert shapes.conforms(person, {"name": "Ada"}) is False

    def test_custom_validator(self, even):
        assert shapes.conforms(even, 2)
        assert not shapes.conforms(even, 3)


class TestAssertConforms:
    """Test assert_conforms()."""

    def test_returns_subject(self, person):
        subject = {"name": "Ada", "age": 36}
        assert shapes.assert_conforms(person, subject) is subject

    def test_raises_with_report(self, person):
        """Test the exception carries the report and serialized violations."""
        with pytest.raises(NonConformingError) as exc_info:
            shapes.assert_conforms(person, {"name": "Ada", "age": -1}, label="person")

        error = exc_info.value
        assert isinstance(error, ShapesError)
        assert str(error) == "person does not conform: age: -1 is outside 0..150"
        assert error.report.violations[0].path == ("age",)
        assert error.context["label"] == "person"
        assert error.context["violations"][0]["path"] == ["age"]

    def test_default_label(self):
        with pytest.raises(NonConformingError, match="^value does not conform"):
            shapes.assert_conforms(shapes.boolean(), 1)
