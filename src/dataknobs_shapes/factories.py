"""Factories returning configured validators.

Factories are the only place configuration is interpreted. Wherever a
parameter is documented as a validator, a plain value is accepted too and is
wrapped in ``literal`` once, here, rather than on every call.

The names ``any``, ``object`` and ``function`` shadow builtins inside this
module; import the package as a namespace (``import dataknobs_shapes as
shapes``) rather than star-importing it.

Example:
    ```python
    import dataknobs_shapes as shapes

    person = shapes.object(
        {"name": shapes.string(shapes.integer(1, 80)), "age": shapes.integer(0, 150)},
        {"email": shapes.string(r"^[^@]+@[^@]+$")},
    )
    report = person({"name": "Ada", "age": -1})
    report.messages()
    # ['age: -1 is outside 0..150']
    ```
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any as AnyType

from .base import ValidatorLike
from .exceptions import ValidatorDefinitionError
from .logical import AllOfValidator, WunOfValidator
from .primitives import (
    AnyValidator,
    BooleanValidator,
    FunctionValidator,
    IntegerValidator,
    LiteralValidator,
    NumberValidator,
    StringValidator,
    ensure_validator,
    is_finite_number,
)
from .structural import (
    ArrayMode,
    ArrayValidator,
    EntriesValidator,
    PropertiesValidator,
)


def boolean() -> BooleanValidator:
    return BooleanValidator()


def number(min: AnyType = None, max: AnyType = None) -> NumberValidator:
    """Finite real numbers within optional inclusive bounds."""
    _check_bounds("number", min, max)
    return NumberValidator(min, max)


def integer(min: AnyType = None, max: AnyType = None) -> IntegerValidator:
    """Exact integers within optional inclusive bounds."""
    _check_bounds("integer", min, max)
    return IntegerValidator(min, max)


def string(constraint: AnyType = None) -> StringValidator:
    """Strings, optionally constrained by a pattern or a length validator.

    Args:
        constraint: A regex (``str`` or compiled pattern) the string must
            contain a match for, or a validator applied to the string's
            length (a plain int means an exact length)

    Returns:
        StringValidator instance
    """
    if constraint is None:
        return StringValidator()
    if isinstance(constraint, re.Pattern):
        if isinstance(constraint.pattern, bytes):
            raise ValidatorDefinitionError(
                "string() needs a str pattern, got a bytes pattern",
                context={"pattern": repr(constraint.pattern)},
            )
        return StringValidator(pattern=constraint)
    if isinstance(constraint, str):
        try:
            return StringValidator(pattern=re.compile(constraint))
        except re.error as e:
            raise ValidatorDefinitionError(
                f"Invalid string pattern: {e}", context={"pattern": constraint}
            ) from e
    return StringValidator(length=ensure_validator(constraint))


def function(arity: AnyType = None) -> FunctionValidator:  # noqa: A001
    """Callables, optionally with a declared arity conforming to ``arity``."""
    if arity is None:
        return FunctionValidator()
    return FunctionValidator(arity=ensure_validator(arity))


def literal(expected: AnyType) -> LiteralValidator:
    return LiteralValidator(expected)


def any() -> AnyValidator:  # noqa: A001
    return AnyValidator()


def array(
    validators: AnyType = None,
    length: AnyType = None,
    rest: AnyType = None,
) -> ArrayValidator:
    """Lists and tuples, in one of three forms chosen by the first argument.

    - ``array()``: any list or tuple
    - ``array(element, length=None)``: every member conforms to ``element``
    - ``array([v0, v1, ...], length=None, rest=None)``: member ``i`` conforms
      to ``vi``. Without ``length`` the subject must have exactly as many
      members as there are validators. When ``length`` permits more, surplus
      members conform to ``rest`` or, without it, reuse the validators
      cyclically.

    Raises:
        ValidatorDefinitionError: If ``rest`` is given outside the positional
            form, or a surplus is possible with nothing to check it against
    """
    length_validator = None if length is None else ensure_validator(length)
    if validators is None or isinstance(validators, (list, tuple)):
        if validators is None:
            if rest is not None:
                raise ValidatorDefinitionError(
                    "array() only accepts rest with a validator sequence"
                )
            return ArrayValidator(ArrayMode.ANY, length=length_validator)
        positional = tuple(ensure_validator(item) for item in validators)
        rest_validator = None if rest is None else ensure_validator(rest)
        if not positional and length_validator is not None and rest_validator is None:
            raise ValidatorDefinitionError(
                "array() with an empty validator sequence and a length "
                "validator needs a rest validator",
                context={"length": repr(length)},
            )
        if length_validator is None:
            return ArrayValidator(
                ArrayMode.POSITIONAL,
                positional=positional,
                length=LiteralValidator(len(positional)),
                rest=rest_validator,
            )
        return ArrayValidator(
            ArrayMode.POSITIONAL,
            positional=positional,
            length=length_validator,
            rest=rest_validator,
            allow_surplus=True,
        )
    if rest is not None:
        raise ValidatorDefinitionError(
            "array() only accepts rest with a validator sequence"
        )
    return ArrayValidator(
        ArrayMode.ELEMENTS,
        element=ensure_validator(validators),
        length=length_validator,
    )


def properties(
    required: Mapping[AnyType, AnyType] | None = None,
    optional: Mapping[AnyType, AnyType] | None = None,
    allow_strays: bool = False,
) -> PropertiesValidator:
    """Mappings with required and optional properties.

    Args:
        required: Property name to validator; each must be present
        optional: Property name to validator; checked when present
        allow_strays: Whether keys absent from both maps are permitted

    Returns:
        PropertiesValidator instance
    """
    return PropertiesValidator(
        required=_property_map("required", required),
        optional=_property_map("optional", optional),
        allow_strays=bool(allow_strays),
    )


def entries(keys: AnyType = None, values: AnyType = None) -> EntriesValidator:
    """Mappings whose every key conforms to ``keys`` and value to ``values``."""
    return EntriesValidator(
        keys=None if keys is None else ensure_validator(keys),
        values=None if values is None else ensure_validator(values),
    )


def object(  # noqa: A001
    first: AnyType = None,
    second: AnyType = None,
    allow_strays: bool = False,
) -> PropertiesValidator | EntriesValidator:
    """Mappings, checked either by property maps or by key/value validators.

    - ``object(required, optional=None, allow_strays=False)`` when either of
      the first two arguments is a property map; see ``properties``
    - ``object(key_validator=None, value_validator=None)`` otherwise; see
      ``entries``

    The form is decided here, once, from the argument types.
    """
    if isinstance(first, Mapping) or (first is None and isinstance(second, Mapping)):
        return properties(first, second, allow_strays)
    if isinstance(second, Mapping) and not callable(first):
        raise ValidatorDefinitionError(
            "object() needs property maps for both required and optional",
            context={"required": repr(first)},
        )
    if allow_strays:
        raise ValidatorDefinitionError(
            "object() only accepts allow_strays with property maps"
        )
    return entries(first, second)


def wun_of(alternatives: Iterable[AnyType]) -> WunOfValidator:
    """Subjects conforming to at least one of ``alternatives``."""
    return WunOfValidator(_validator_sequence("wun_of", alternatives))


def all_of(validators: Iterable[AnyType], exhaustive: bool = False) -> AllOfValidator:
    """Subjects conforming to every one of ``validators``.

    Args:
        validators: Validators run in order against the same subject
        exhaustive: Collect violations from every validator instead of
            stopping at the first failing one

    Returns:
        AllOfValidator instance
    """
    return AllOfValidator(_validator_sequence("all_of", validators), bool(exhaustive))


def _check_bounds(name: str, min: AnyType, max: AnyType) -> None:
    for label, bound in (("min", min), ("max", max)):
        if bound is not None and not is_finite_number(bound):
            raise ValidatorDefinitionError(
                f"{name}() {label} must be a finite number, got {bound!r}"
            )
    if min is not None and max is not None and min > max:
        raise ValidatorDefinitionError(
            f"{name}() min ({min}) cannot be greater than max ({max})"
        )


def _property_map(
    label: str, props: Mapping[AnyType, AnyType] | None
) -> Mapping[AnyType, ValidatorLike]:
    if props is None:
        return MappingProxyType({})
    if not isinstance(props, Mapping):
        raise ValidatorDefinitionError(
            f"{label} properties must be a mapping, got {type(props).__name__}"
        )
    return MappingProxyType({key: ensure_validator(value) for key, value in props.items()})


def _validator_sequence(name: str, items: AnyType) -> tuple[ValidatorLike, ...]:
    if callable(items) or isinstance(items, (str, bytes, Mapping)) or not isinstance(
        items, Iterable
    ):
        raise ValidatorDefinitionError(
            f"{name}() expects a sequence of validators, got {type(items).__name__}"
        )
    return tuple(ensure_validator(item) for item in items)
