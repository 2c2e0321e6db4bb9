"""Helpers for callers that want a yes/no answer or an exception.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from .base import ValidatorLike, run
from .exceptions import NonConformingError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def conforms(validator: ValidatorLike, subject: Any) -> bool:
    """Return True when ``subject`` produces no violations."""
    return run(validator, subject).valid


def assert_conforms(validator: ValidatorLike, subject: T, label: str | None = None) -> T:
    """Return ``subject`` unchanged if it conforms, otherwise raise.

    Args:
        validator: Validator to apply
        subject: Value to check
        label: Optional name for the subject used in the error message

    Returns:
        The subject itself

    Raises:
        NonConformingError: With the report attached and the serialized
            violations in its context
    """
    report = run(validator, subject)
    if report.valid:
        return subject
    name = label or "value"
    count = len(report.violations)
    logger.debug(f"{name} failed validation with {count} violation(s)")
    summary = "; ".join(report.messages())
    raise NonConformingError(
        f"{name} does not conform: {summary}",
        report,
        context={
            "label": name,
            "violations": [violation.to_dict() for violation in report.violations],
        },
    )
