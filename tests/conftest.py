"""Pytest configuration and fixtures for shapes tests."""

import pytest

import dataknobs_shapes as shapes


@pytest.fixture
def even():
    """A hand-written validator returning the plain report wire shape."""

    def _even(subject):
        if isinstance(subject, int) and subject % 2 == 0:
            return {"violations": []}
        return {
            "violations": [
                {"message": "expected an even number", "code": "not_even", "a": subject}
            ]
        }

    return _even


@pytest.fixture
def person():
    """Person validator with required, optional and nested properties."""
    return shapes.object(
        {
            "name": shapes.string(shapes.integer(1, 40)),
            "age": shapes.integer(0, 150),
        },
        {
            "email": shapes.string(r"^[^@\s]+@[^@\s]+$"),
            "tags": shapes.array(shapes.string()),
        },
    )


@pytest.fixture
def person_spec():
    """Declarative spec equivalent to the person fixture."""
    return {
        "type": "object",
        "required": {
            "name": {"type": "string", "length": {"type": "integer", "min": 1, "max": 40}},
            "age": {"type": "integer", "min": 0, "max": 150},
        },
        "optional": {
            "email": {"type": "string", "pattern": r"^[^@\s]+@[^@\s]+$"},
            "tags": {"type": "array", "element": {"type": "string"}},
        },
    }
