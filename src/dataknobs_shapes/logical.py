"""Validators combining several validators against the same subject.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .base import Validator, ValidatorLike, run
from .report import NO_ALTERNATIVE, Report, Violation


@dataclass(frozen=True)
class WunOfValidator(Validator):
    """At least one alternative must pass (OR logic), tried in order.

    On failure the single ``no_alternative`` violation carries the number of
    alternatives in ``a`` and, in ``b``, one tuple of violations per
    alternative so callers can explain why each one was rejected.
    """

    alternatives: tuple[ValidatorLike, ...]

    def validate(self, subject: Any) -> Report:
        attempts = []
        for alternative in self.alternatives:
            report = run(alternative, subject)
            if report.valid:
                return Report()
            attempts.append(tuple(report.violations))
        return Report.failure(
            Violation(
                "no alternative matched",
                code=NO_ALTERNATIVE,
                a=len(self.alternatives),
                b=tuple(attempts),
            )
        )


@dataclass(frozen=True)
class AllOfValidator(Validator):
    """Every validator must pass (AND logic), run in order.

    Stops at the first failing validator unless ``exhaustive`` is set, in
    which case all violations are collected in validator order.
    """

    validators: tuple[ValidatorLike, ...]
    exhaustive: bool = False

    def validate(self, subject: Any) -> Report:
        violations: list[Violation] = []
        for validator in self.validators:
            report = run(validator, subject)
            if report.valid:
                continue
            if not self.exhaustive:
                return Report(
                    violations=list(report.violations), extras=dict(report.extras)
                )
            violations.extend(report.violations)
        return Report(violations=violations)
