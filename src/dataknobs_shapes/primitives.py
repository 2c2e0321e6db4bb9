"""Leaf validators for scalar subjects.
"""

from __future__ import annotations

import inspect
import math
import numbers
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .base import Validator, ValidatorLike, run
from .exceptions import ValidatorDefinitionError
from .report import (
    NO_MATCH,
    NO_SIGNATURE,
    NOT_LITERAL,
    NOT_TYPE,
    OUT_OF_RANGE,
    Report,
    Violation,
)

# Largest integer a float holds without loss
SAFE_INTEGER_MAX = 2**53 - 1

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def not_type(type_name: str) -> Report:
    return Report.failure(
        Violation(f"expected {_article(type_name)} {type_name}", code=NOT_TYPE, a=type_name)
    )


def _article(word: str) -> str:
    return "an" if word[:1] in "aeiou" else "a"


def ensure_validator(value: Any) -> ValidatorLike:
    """Return ``value`` if it is callable, otherwise ``literal(value)``.

    Raises:
        ValidatorDefinitionError: If ``value`` is a class. Calling a class
            constructs an instance rather than a report; wrap it explicitly
            with ``literal`` to require the class object itself.
    """
    if isinstance(value, type):
        raise ValidatorDefinitionError(
            f"Expected a validator, got the class {value.__name__}",
            context={"value": repr(value)},
        )
    if callable(value):
        return value
    return LiteralValidator(value)


def is_finite_number(subject: Any) -> bool:
    if isinstance(subject, bool):
        return False
    if isinstance(subject, Decimal):
        return subject.is_finite()
    if not isinstance(subject, numbers.Real):
        return False
    if isinstance(subject, numbers.Rational):
        return True
    return math.isfinite(subject)


def is_safe_integer(subject: Any) -> bool:
    if isinstance(subject, bool):
        return False
    if isinstance(subject, numbers.Integral):
        return True
    if not is_finite_number(subject):
        return False
    if isinstance(subject, numbers.Rational):
        return subject.denominator == 1
    if isinstance(subject, Decimal):
        return subject == subject.to_integral_value()
    return float(subject).is_integer() and abs(subject) <= SAFE_INTEGER_MAX


def is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


def strictly_equal(left: Any, right: Any) -> bool:
    """Identity, or equal values of the same type; NaN equals NaN.

    Any exception raised by a comparison counts as unequal.
    """
    if left is right:
        return True
    if type(left) is not type(right):
        return False
    if is_nan(left) or is_nan(right):
        return is_nan(left) and is_nan(right)
    try:
        return bool(left == right)
    except Exception:
        return False


def declared_arity(fn: Any) -> int | None:
    """Count leading positional parameters without defaults.

    Returns None when the callable has no inspectable signature.
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return None
    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind not in _POSITIONAL or parameter.default is not parameter.empty:
            break
        count += 1
    return count


@dataclass(frozen=True)
class AnyValidator(Validator):
    """Accepts every subject."""

    def validate(self, subject: Any) -> Report:
        return Report()


@dataclass(frozen=True)
class BooleanValidator(Validator):
    """Subject must be ``True`` or ``False``."""

    def validate(self, subject: Any) -> Report:
        if isinstance(subject, bool):
            return Report()
        return not_type("boolean")


@dataclass(frozen=True)
class LiteralValidator(Validator):
    """Subject must be strictly equal to ``expected``."""

    expected: Any

    def validate(self, subject: Any) -> Report:
        if strictly_equal(subject, self.expected):
            return Report()
        return Report.failure(
            Violation(
                f"expected {self.expected!r}, got {subject!r}",
                code=NOT_LITERAL,
                a=self.expected,
                b=subject,
            )
        )


@dataclass(frozen=True)
class NumberValidator(Validator):
    """Subject must be a finite real number within optional inclusive bounds."""

    min: Any = None
    max: Any = None

    type_name = "number"

    def conforms_to_type(self, subject: Any) -> bool:
        return is_finite_number(subject)

    def validate(self, subject: Any) -> Report:
        if not self.conforms_to_type(subject):
            return not_type(self.type_name)
        if (self.min is not None and subject < self.min) or (
            self.max is not None and subject > self.max
        ):
            return Report.failure(
                Violation(
                    f"{subject!r} is {self._describe_range()}",
                    code=OUT_OF_RANGE,
                    a=self.min,
                    b=self.max,
                )
            )
        return Report()

    def _describe_range(self) -> str:
        if self.min is not None and self.max is not None:
            return f"outside {self.min}..{self.max}"
        if self.min is not None:
            return f"less than minimum {self.min}"
        return f"greater than maximum {self.max}"


@dataclass(frozen=True)
class IntegerValidator(NumberValidator):
    """Subject must be an exact integer within optional inclusive bounds."""

    type_name = "integer"

    def conforms_to_type(self, subject: Any) -> bool:
        return is_safe_integer(subject)


@dataclass(frozen=True)
class StringValidator(Validator):
    """Subject must be a string, optionally matching a pattern or a length validator.

    At most one of ``pattern`` and ``length`` is set by the ``string`` factory.
    Length violations keep their path: the length belongs to the string itself.
    """

    pattern: re.Pattern[str] | None = None
    length: ValidatorLike | None = None

    def validate(self, subject: Any) -> Report:
        if not isinstance(subject, str):
            return not_type("string")
        if self.pattern is not None and self.pattern.search(subject) is None:
            return Report.failure(
                Violation(
                    f"{subject!r} does not match pattern {self.pattern.pattern!r}",
                    code=NO_MATCH,
                    a=self.pattern.pattern,
                    b=subject,
                )
            )
        if self.length is not None:
            return run(self.length, len(subject))
        return Report()


@dataclass(frozen=True)
class FunctionValidator(Validator):
    """Subject must be callable, optionally with a conforming declared arity."""

    arity: ValidatorLike | None = None

    def validate(self, subject: Any) -> Report:
        if not callable(subject):
            return not_type("function")
        if self.arity is None:
            return Report()
        count = declared_arity(subject)
        if count is None:
            return Report.failure(
                Violation(
                    f"cannot inspect the signature of {subject!r}",
                    code=NO_SIGNATURE,
                    a=subject,
                )
            )
        return run(self.arity, count)
