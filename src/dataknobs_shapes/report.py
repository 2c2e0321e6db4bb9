"""Report and violation types shared by every validator.

A validator is any callable ``subject -> Report``. Built-in validators return
``Report`` instances; hand-written validators may also return the plain wire
shape ``{"violations": [{"message": ..., "path": [...], ...}]}``, which
``as_report`` converts so both kinds compose freely.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Union

from .exceptions import ValidatorDefinitionError

PathKey = Union[str, int, Hashable]

# Stable violation codes
NOT_TYPE = "not_type_a"
OUT_OF_RANGE = "out_of_range"
NO_MATCH = "no_match"
NOT_LITERAL = "not_literal"
MISSING_PROPERTY = "missing_property"
UNEXPECTED_PROPERTY = "unexpected_property"
NO_ALTERNATIVE = "no_alternative"
NO_SIGNATURE = "no_signature"


@dataclass(frozen=True)
class Violation:
    """One way in which a subject fails to conform.

    Attributes:
        message: Human-readable description
        path: Keys and indexes leading from the root subject to the offending value
        code: Machine-readable violation kind
        a: First contextual exhibit (e.g. the expected type name or bound)
        b: Second contextual exhibit (e.g. the actual value or upper bound)
    """

    message: str
    path: tuple[PathKey, ...] = ()
    code: str | None = None
    a: Any = None
    b: Any = None

    def prefixed(self, key: PathKey) -> Violation:
        """Return a copy located one level deeper, under ``key``."""
        return replace(self, path=(key,) + self.path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "path": list(self.path),
            "code": self.code,
            "a": self.a,
            "b": self.b,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Violation:
        """Build a violation from its wire shape.

        Args:
            data: Mapping with a required ``message`` and optional
                ``path``, ``code``, ``a`` and ``b``

        Returns:
            Violation instance

        Raises:
            ValidatorDefinitionError: If ``message`` is missing
        """
        if "message" not in data:
            raise ValidatorDefinitionError(
                "Violation mapping has no 'message'",
                context={"keys": sorted(str(k) for k in data)},
            )
        return cls(
            message=str(data["message"]),
            path=_as_path(data.get("path")),
            code=data.get("code"),
            a=data.get("a"),
            b=data.get("b"),
        )

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{format_path(self.path)}: {self.message}"


@dataclass
class Report:
    """The outcome of one validation call.

    An empty ``violations`` list means the subject conformed. ``extras`` holds
    any additional diagnostic data a validator chooses to attach; consumers
    may only rely on ``violations``.
    """

    violations: list[Violation] = field(default_factory=list)
    extras: dict[str, Any] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.violations

    def __bool__(self) -> bool:
        """Allow 'if report:' usage to check validity."""
        return self.valid

    def merge(self, other: Report) -> Report:
        """Combine two reports, keeping discovery order.

        Args:
            other: Report whose violations follow this one's

        Returns:
            New Report with concatenated violations and merged extras
        """
        return Report(
            violations=self.violations + other.violations,
            extras={**self.extras, **other.extras},
        )

    def prefixed(self, key: PathKey) -> Report:
        """Return a copy with ``key`` prepended to every violation path."""
        return Report(
            violations=[violation.prefixed(key) for violation in self.violations],
            extras=dict(self.extras),
        )

    def messages(self) -> list[str]:
        """Human-readable one-line descriptions, one per violation."""
        return [str(violation) for violation in self.violations]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "violations": [violation.to_dict() for violation in self.violations]
        }
        data.update(self.extras)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Report:
        """Build a report from the wire shape ``{"violations": [...], ...}``.

        Entries of ``violations`` may be ``Violation`` instances or mappings.
        Every other key is kept in ``extras``.
        """
        raw = data.get("violations")
        if raw is None or isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
            raise ValidatorDefinitionError(
                "Report mapping needs a 'violations' sequence",
                context={"violations": repr(raw)},
            )
        violations = [
            item if isinstance(item, Violation) else Violation.from_dict(item)
            for item in raw
        ]
        extras = {key: value for key, value in data.items() if key != "violations"}
        return cls(violations=violations, extras=extras)

    @classmethod
    def success(cls) -> Report:
        return cls()

    @classmethod
    def failure(cls, *violations: Violation) -> Report:
        return cls(violations=list(violations))


def as_report(result: Any) -> Report:
    """Normalize a validator's return value into a ``Report``.

    Args:
        result: A ``Report`` or a mapping in the report wire shape

    Returns:
        Report instance

    Raises:
        ValidatorDefinitionError: If the result is neither
    """
    if isinstance(result, Report):
        return result
    if isinstance(result, Mapping):
        return Report.from_dict(result)
    raise ValidatorDefinitionError(
        f"Validator returned {type(result).__name__}, expected a report",
        context={"result": repr(result)},
    )


def _as_path(raw: Any) -> tuple[PathKey, ...]:
    if raw is None:
        return ()
    if isinstance(raw, (str, bytes)):
        return (raw,)
    return tuple(raw)


def format_path(path: Sequence[PathKey]) -> str:
    """Render a path as ``people[0].age``."""
    parts: list[str] = []
    for key in path:
        if isinstance(key, int) and not isinstance(key, bool):
            parts.append(f"[{key}]")
        elif parts:
            parts.append(f".{key}")
        else:
            parts.append(str(key))
    return "".join(parts)
