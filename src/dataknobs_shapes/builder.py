"""Build validators from declarative configuration.

Configuration Options:
    A validator spec is a mapping with a ``type`` key. Any other value (a
    scalar, a list, or a mapping without ``type``) is a literal.

    boolean, any: no options
    number, integer: min, max
    string: pattern or length
    function: arity
    literal: value
    array: element or items, plus length and rest
    object: required, optional, allow_strays, or keys, values
    wun_of: of
    all_of: of, exhaustive

Example Configuration:
    type: object
    required:
      id:
        type: string
        pattern: "^[a-z0-9-]+$"
      tags:
        type: array
        element: {type: string}
        length: {type: integer, min: 0, max: 10}
    optional:
      note: {type: string}
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import yaml

from . import factories
from .base import ValidatorLike
from .exceptions import ValidatorDefinitionError

logger = logging.getLogger(__name__)

_OPTIONS: dict[str, frozenset[str]] = {
    "boolean": frozenset(),
    "any": frozenset(),
    "number": frozenset({"min", "max"}),
    "integer": frozenset({"min", "max"}),
    "string": frozenset({"pattern", "length"}),
    "function": frozenset({"arity"}),
    "literal": frozenset({"value"}),
    "array": frozenset({"element", "items", "length", "rest"}),
    "object": frozenset({"required", "optional", "allow_strays", "keys", "values"}),
    "wun_of": frozenset({"of"}),
    "all_of": frozenset({"of", "exhaustive"}),
}


class ValidatorBuilder:
    """Turns validator specs (as loaded from YAML or JSON) into validators."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[Mapping[str, Any]], ValidatorLike]] = {
            "boolean": lambda spec: factories.boolean(),
            "any": lambda spec: factories.any(),
            "number": lambda spec: factories.number(spec.get("min"), spec.get("max")),
            "integer": lambda spec: factories.integer(spec.get("min"), spec.get("max")),
            "string": self._build_string,
            "function": lambda spec: factories.function(self._optional(spec, "arity")),
            "literal": self._build_literal,
            "array": self._build_array,
            "object": self._build_object,
            "wun_of": lambda spec: factories.wun_of(self._build_list(spec, "of")),
            "all_of": lambda spec: factories.all_of(
                self._build_list(spec, "of"), spec.get("exhaustive", False)
            ),
        }

    def build(self, spec: Any) -> ValidatorLike:
        """Build a validator from a spec.

        Args:
            spec: Validator spec mapping, or any other value for a literal

        Returns:
            Validator

        Raises:
            ValidatorDefinitionError: If the spec names an unknown type or
                has malformed options
        """
        if not isinstance(spec, Mapping) or "type" not in spec:
            return factories.literal(spec)

        kind = spec["type"]
        handler = self._handlers.get(kind) if isinstance(kind, str) else None
        if handler is None:
            raise ValidatorDefinitionError(
                f"Unknown validator type: {kind!r}",
                context={"known_types": sorted(self._handlers)},
            )

        unknown = set(spec) - {"type"} - _OPTIONS[kind]
        if unknown:
            logger.warning(f"Ignoring unknown options for {kind}: {sorted(unknown)}")

        logger.debug(f"Building {kind} validator")
        return handler(spec)

    def _optional(self, spec: Mapping[str, Any], key: str) -> ValidatorLike | None:
        if spec.get(key) is None:
            return None
        return self.build(spec[key])

    def _build_list(self, spec: Mapping[str, Any], key: str) -> list[ValidatorLike]:
        items = spec.get(key)
        if not isinstance(items, list):
            raise ValidatorDefinitionError(
                f"{spec['type']} needs a list under '{key}'",
                context={key: repr(items)},
            )
        return [self.build(item) for item in items]

    def _build_map(self, spec: Mapping[str, Any], key: str) -> dict[Any, ValidatorLike] | None:
        props = spec.get(key)
        if props is None:
            return None
        if not isinstance(props, Mapping):
            raise ValidatorDefinitionError(
                f"object needs a mapping under '{key}'",
                context={key: repr(props)},
            )
        return {name: self.build(prop) for name, prop in props.items()}

    def _build_literal(self, spec: Mapping[str, Any]) -> ValidatorLike:
        if "value" not in spec:
            raise ValidatorDefinitionError("literal needs a 'value'")
        return factories.literal(spec["value"])

    def _build_string(self, spec: Mapping[str, Any]) -> ValidatorLike:
        if spec.get("pattern") is not None and spec.get("length") is not None:
            raise ValidatorDefinitionError("string takes either 'pattern' or 'length', not both")
        if spec.get("pattern") is not None:
            pattern = spec["pattern"]
            if not isinstance(pattern, str):
                raise ValidatorDefinitionError(
                    "string 'pattern' must be a string", context={"pattern": repr(pattern)}
                )
            return factories.string(pattern)
        return factories.string(self._optional(spec, "length"))

    def _build_array(self, spec: Mapping[str, Any]) -> ValidatorLike:
        if "element" in spec and "items" in spec:
            raise ValidatorDefinitionError("array takes either 'element' or 'items', not both")
        length = self._optional(spec, "length")
        if "items" in spec:
            return factories.array(
                self._build_list(spec, "items"), length, self._optional(spec, "rest")
            )
        return factories.array(self._optional(spec, "element"), length, self._optional(spec, "rest"))

    def _build_object(self, spec: Mapping[str, Any]) -> ValidatorLike:
        by_properties = {"required", "optional", "allow_strays"} & set(spec)
        by_entries = {"keys", "values"} & set(spec)
        if by_properties and by_entries:
            raise ValidatorDefinitionError(
                "object takes property maps or keys/values, not both",
                context={"options": sorted(by_properties | by_entries)},
            )
        if by_entries:
            return factories.entries(self._optional(spec, "keys"), self._optional(spec, "values"))
        return factories.properties(
            self._build_map(spec, "required"),
            self._build_map(spec, "optional"),
            spec.get("allow_strays", False),
        )


def build_validator(spec: Any) -> ValidatorLike:
    """Build a validator from a spec with a default builder."""
    return ValidatorBuilder().build(spec)


def validator_from_yaml(text: str) -> ValidatorLike:
    """Build a validator from a YAML document."""
    return build_validator(yaml.safe_load(text))


def load_validator(path: str | Path) -> ValidatorLike:
    """Build a validator from a YAML file.

    Args:
        path: Path to a YAML (or JSON) validator spec

    Returns:
        Validator
    """
    path = Path(path)
    logger.info(f"Loading validator spec: {path}")
    with open(path) as f:
        return build_validator(yaml.safe_load(f))
