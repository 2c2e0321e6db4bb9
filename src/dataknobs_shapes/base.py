"""Base class for built-in validators with composable operators.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Union

from .report import Report, as_report

if TYPE_CHECKING:
    from .logical import AllOfValidator, WunOfValidator

ValidatorLike = Union["Validator", Callable[[Any], Any]]


class Validator(ABC):
    """A pure, reusable function from a subject to a ``Report``.

    Subclasses are immutable: all configuration is resolved when the
    validator is constructed and never changes afterwards, so one instance can
    be shared freely across calls and threads.
    """

    def __call__(self, subject: Any) -> Report:
        return self.validate(subject)

    @abstractmethod
    def validate(self, subject: Any) -> Report:
        """Inspect a subject and report every nonconformity.

        Args:
            subject: Value to validate; never modified

        Returns:
            Report whose violations are empty when the subject conforms
        """

    def __and__(self, other: ValidatorLike) -> AllOfValidator:
        """Combine with AND: both validators must pass."""
        from .logical import AllOfValidator
        from .primitives import ensure_validator

        left = self.validators if _plain_all_of(self) else (self,)
        right = (
            other.validators if _plain_all_of(other) else (ensure_validator(other),)
        )
        return AllOfValidator(left + right)

    def __or__(self, other: ValidatorLike) -> WunOfValidator:
        """Combine with OR: at least one validator must pass."""
        from .logical import WunOfValidator
        from .primitives import ensure_validator

        left = self.alternatives if isinstance(self, WunOfValidator) else (self,)
        right = (
            other.alternatives
            if isinstance(other, WunOfValidator)
            else (ensure_validator(other),)
        )
        return WunOfValidator(left + right)


def _plain_all_of(validator: Any) -> bool:
    from .logical import AllOfValidator

    return isinstance(validator, AllOfValidator) and not validator.exhaustive


def run(validator: ValidatorLike, subject: Any) -> Report:
    """Call any validator, built-in or hand-written, and normalize its result."""
    return as_report(validator(subject))
