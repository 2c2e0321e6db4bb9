"""Validators that traverse containers and merge per-member reports.

Every sub-report is re-rooted under the key or index it was produced for, so
paths compose into full root-relative locations however deeply validators
nest.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .base import Validator, ValidatorLike, run
from .primitives import not_type
from .report import MISSING_PROPERTY, UNEXPECTED_PROPERTY, Report, Violation

SEQUENCE_TYPES = (list, tuple)


class ArrayMode(Enum):
    """Which ``array`` overload a validator was built from."""

    ANY = "any"
    ELEMENTS = "elements"
    POSITIONAL = "positional"


@dataclass(frozen=True)
class ArrayValidator(Validator):
    """Subject must be a list or tuple, checked according to ``mode``.

    Attributes:
        mode: ANY (no member checks), ELEMENTS (every member against
            ``element``) or POSITIONAL (member ``i`` against ``positional[i]``)
        element: Validator for every member in ELEMENTS mode
        positional: Per-index validators in POSITIONAL mode
        length: Validator applied to the subject's length, if any
        rest: Validator for POSITIONAL members beyond ``positional``
        allow_surplus: Whether members beyond ``positional`` are checked;
            only true when the caller supplied ``length``
    """

    mode: ArrayMode = ArrayMode.ANY
    element: ValidatorLike | None = None
    positional: tuple[ValidatorLike, ...] = ()
    length: ValidatorLike | None = None
    rest: ValidatorLike | None = None
    allow_surplus: bool = False

    def validate(self, subject: Any) -> Report:
        if not isinstance(subject, SEQUENCE_TYPES):
            return not_type("array")
        violations: list[Violation] = []
        if self.mode is ArrayMode.ELEMENTS:
            for index, member in enumerate(subject):
                violations.extend(run(self.element, member).prefixed(index).violations)
        elif self.mode is ArrayMode.POSITIONAL:
            for index in range(self._checked_count(subject)):
                validator = self._validator_at(index)
                violations.extend(run(validator, subject[index]).prefixed(index).violations)
        if self.length is not None:
            violations.extend(run(self.length, len(subject)).violations)
        return Report(violations=violations)

    def _checked_count(self, subject: list | tuple) -> int:
        if self.allow_surplus:
            return len(subject)
        return min(len(subject), len(self.positional))

    def _validator_at(self, index: int) -> ValidatorLike:
        count = len(self.positional)
        if index < count:
            return self.positional[index]
        if self.rest is not None:
            return self.rest
        return self.positional[index % count]


@dataclass(frozen=True)
class PropertiesValidator(Validator):
    """Subject must be a mapping with the configured required/optional properties.

    ``required`` and ``optional`` map property names to validators and are
    checked in their own iteration order; stray keys follow in the subject's
    iteration order. A key present in both maps is treated as required.
    """

    required: Mapping[Any, ValidatorLike]
    optional: Mapping[Any, ValidatorLike]
    allow_strays: bool = False

    def validate(self, subject: Any) -> Report:
        if not isinstance(subject, Mapping):
            return not_type("object")
        violations: list[Violation] = []
        for key, validator in self.required.items():
            if key in subject:
                violations.extend(run(validator, subject[key]).prefixed(key).violations)
            else:
                violations.append(
                    Violation(
                        f"missing required property {key!r}",
                        path=(key,),
                        code=MISSING_PROPERTY,
                        a=key,
                    )
                )
        for key, validator in self.optional.items():
            if key in subject and key not in self.required:
                violations.extend(run(validator, subject[key]).prefixed(key).violations)
        if not self.allow_strays:
            for key in subject:
                if key not in self.required and key not in self.optional:
                    violations.append(
                        Violation(
                            f"unexpected property {key!r}",
                            path=(key,),
                            code=UNEXPECTED_PROPERTY,
                            a=key,
                        )
                    )
        return Report(violations=violations)


@dataclass(frozen=True)
class EntriesValidator(Validator):
    """Subject must be a mapping whose keys and values conform."""

    keys: ValidatorLike | None = None
    values: ValidatorLike | None = None

    def validate(self, subject: Any) -> Report:
        if not isinstance(subject, Mapping):
            return not_type("object")
        violations: list[Violation] = []
        for key, value in subject.items():
            if self.keys is not None:
                violations.extend(run(self.keys, key).prefixed(key).violations)
            if self.values is not None:
                violations.extend(run(self.values, value).prefixed(key).violations)
        return Report(violations=violations)
