"""DataKnobs Shapes package.

Composable runtime validators that report, rather than raise, every way a
value fails to conform to a declared shape:

- **Factories**: ``boolean``, ``number``, ``integer``, ``string``,
  ``function``, ``literal``, ``any``, ``array``, ``object``, ``wun_of``,
  ``all_of`` each return a validator
- **Reports**: every validator call returns a ``Report`` of ``Violation``
  records with root-relative paths
- **Configuration**: build validators from YAML or plain mappings

Example:
    ```python
    import dataknobs_shapes as shapes

    people = shapes.object({
        "people": shapes.array(shapes.object({"age": shapes.integer(0, 150)})),
    })
    report = people({"people": [{"age": -5}]})
    report.violations[0].path
    # ('people', 0, 'age')
    ```
"""

from .base import Validator, ValidatorLike
from .builder import ValidatorBuilder, build_validator, load_validator, validator_from_yaml
from .enforce import assert_conforms, conforms
from .exceptions import NonConformingError, ShapesError, ValidatorDefinitionError
from .factories import (
    all_of,
    any,
    array,
    boolean,
    entries,
    function,
    integer,
    literal,
    number,
    object,
    properties,
    string,
    wun_of,
)
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
)
from .report import Report, Violation, as_report, format_path
from .structural import ArrayMode, ArrayValidator, EntriesValidator, PropertiesValidator

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Reports
    "Report",
    "Violation",
    "as_report",
    "format_path",
    # Factories
    "boolean",
    "number",
    "integer",
    "string",
    "function",
    "literal",
    "any",
    "array",
    "object",
    "properties",
    "entries",
    "wun_of",
    "all_of",
    "ensure_validator",
    # Validator classes
    "Validator",
    "ValidatorLike",
    "AnyValidator",
    "BooleanValidator",
    "NumberValidator",
    "IntegerValidator",
    "StringValidator",
    "FunctionValidator",
    "LiteralValidator",
    "ArrayMode",
    "ArrayValidator",
    "PropertiesValidator",
    "EntriesValidator",
    "WunOfValidator",
    "AllOfValidator",
    # Configuration
    "ValidatorBuilder",
    "build_validator",
    "load_validator",
    "validator_from_yaml",
    # Enforcement
    "conforms",
    "assert_conforms",
    # Exceptions
    "ShapesError",
    "ValidatorDefinitionError",
    "NonConformingError",
]
