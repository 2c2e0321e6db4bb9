"""Custom exceptions for the shapes package.

This module defines exception types for the shapes package, built on the
common exception framework from dataknobs_common.

Validators never raise for a nonconforming subject; every nonconformity is
reported through a ``Report``. The exceptions here are reserved for misuse
of the package itself:

- ``ValidatorDefinitionError`` when a validator is assembled incorrectly
  (bad factory arguments, malformed declarative specs, a custom validator
  returning something that is not a report)
- ``NonConformingError`` raised only by the opt-in ``assert_conforms`` helper
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

from dataknobs_common import (
    ConfigurationError,
    DataknobsError,
    ValidationError,
)

if TYPE_CHECKING:
    from .report import Report


class ShapesError(DataknobsError):
    """Base exception for the shapes package."""

    pass


class ValidatorDefinitionError(ShapesError, ConfigurationError):
    """Raised when a validator is assembled incorrectly.

    This is a programmer error in how a validator was built, not a property
    of any subject, so it surfaces immediately at construction time.

    Example:
        ```python
        raise ValidatorDefinitionError(
            "array() needs a rest validator when the validator sequence is empty",
            context={"length": repr(length)}
        )
        ```
    """

    pass


class NonConformingError(ShapesError, ValidationError):
    """Raised by ``assert_conforms`` when a subject does not conform.

    Attributes:
        report: The report produced by the failing validator
    """

    def __init__(
        self,
        message: str,
        report: Report,
        context: Dict[str, Any] | None = None,
    ):
        self.report = report
        super().__init__(message, context=context)
