"""Value parsers — raw string to typed value and back.

Modules:
  port.py       — ConfigParser ABC
  validate.py   — validate_* free functions
  schema.py     — SchemaValidator (pydantic TypeAdapter), schema()
  key_parser.py — KeyParser and the built-in factories
"""

from mp_envkit.parsers.key_parser import (
    KeyParser,
    array_parser,
    bigint_parser,
    boolean_parser,
    float_parser,
    integer_parser,
    json_parser,
    semicolon_parser,
    string_parser,
    url_parser,
)
from mp_envkit.parsers.port import ConfigParser
from mp_envkit.parsers.schema import SchemaValidator, ValidateFn, Validator, as_validate_fn, schema
from mp_envkit.parsers.validate import (
    BOOLEAN_FALSE_VALUES,
    BOOLEAN_TRUE_VALUES,
    validate_bigint,
    validate_boolean,
    validate_float,
    validate_integer,
    validate_json,
    validate_semicolon,
    validate_string,
    validate_url,
)

__all__ = [
    "BOOLEAN_FALSE_VALUES",
    "BOOLEAN_TRUE_VALUES",
    "ConfigParser",
    "KeyParser",
    "SchemaValidator",
    "ValidateFn",
    "Validator",
    "array_parser",
    "as_validate_fn",
    "bigint_parser",
    "boolean_parser",
    "float_parser",
    "integer_parser",
    "json_parser",
    "schema",
    "semicolon_parser",
    "string_parser",
    "url_parser",
    "validate_bigint",
    "validate_boolean",
    "validate_float",
    "validate_integer",
    "validate_json",
    "validate_semicolon",
    "validate_string",
    "validate_url",
]
