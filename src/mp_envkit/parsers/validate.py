"""Parsers – stateless validation functions for raw variable values.

Every function takes the raw value and returns ``Ok(typed)`` or
``Err(ValueParseError)``; none of them raise.
"""
from __future__ import annotations

import json
import re
from typing import Any
from urllib.parse import unquote

from pydantic import AnyUrl, TypeAdapter, ValidationError

from mp_envkit.kernel.errors import ValueParseError
from mp_envkit.kernel.types import Err, Ok, Result
from mp_envkit.masking import KeyFormat, format_key

__all__ = [
    "BOOLEAN_FALSE_VALUES",
    "BOOLEAN_TRUE_VALUES",
    "validate_bigint",
    "validate_boolean",
    "validate_float",
    "validate_integer",
    "validate_json",
    "validate_semicolon",
    "validate_string",
    "validate_url",
]

BOOLEAN_TRUE_VALUES = frozenset({"true", "1", "yes", "y", "on"})
BOOLEAN_FALSE_VALUES = frozenset({"false", "0", "no", "n", "off"})

_INTEGER_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|\d+(?:\.\d*)?(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"
)
_WHOLE_INTEGER = re.compile(r"\s*[+-]?\d+\s*")

_url_adapter: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def validate_string(value: object) -> Result[str, ValueParseError]:
    if not isinstance(value, str):
        return Err(ValueParseError("String", value))
    return Ok(value)


def validate_boolean(value: object) -> Result[bool, ValueParseError]:
    if not isinstance(value, str):
        return Err(ValueParseError("Boolean", value))
    lowered = value.lower()
    if lowered in BOOLEAN_TRUE_VALUES:
        return Ok(True)
    if lowered in BOOLEAN_FALSE_VALUES:
        return Ok(False)
    return Err(ValueParseError("Boolean", value))


def validate_integer(value: object) -> Result[int, ValueParseError]:
    """Leading base-10 integer; trailing characters are ignored (``"3.14"`` → 3)."""
    if not isinstance(value, str):
        return Err(ValueParseError("Integer", value))
    match = _INTEGER_PREFIX.match(value)
    if match is None:
        return Err(ValueParseError("Integer", value))
    return Ok(int(match.group(1)))


def validate_float(value: object) -> Result[float, ValueParseError]:
    if not isinstance(value, str):
        return Err(ValueParseError("Float", value))
    match = _FLOAT_PREFIX.match(value)
    if match is None:
        return Err(ValueParseError("Float", value))
    return Ok(float(match.group(1).replace("Infinity", "inf")))


def validate_bigint(value: object) -> Result[int, ValueParseError]:
    """Whole decimal integers only; ``int`` input passes through."""
    if isinstance(value, int) and not isinstance(value, bool):
        return Ok(value)
    if not isinstance(value, str) or _WHOLE_INTEGER.fullmatch(value) is None:
        return Err(ValueParseError("BigInt", value))
    return Ok(int(value.strip()))


def validate_url(value: object) -> Result[AnyUrl, ValueParseError]:
    if isinstance(value, AnyUrl):
        return Ok(value)
    if not isinstance(value, str):
        return Err(ValueParseError("URL", value))
    try:
        return Ok(_url_adapter.validate_python(value))
    except ValidationError as exc:
        return Err(ValueParseError("URL", value, cause=exc))


def validate_json(value: object) -> Result[Any, ValueParseError]:
    if not isinstance(value, str):
        return Err(ValueParseError("JSON", value))
    try:
        return Ok(json.loads(value))
    except json.JSONDecodeError as exc:
        return Err(ValueParseError("JSON", value, cause=exc))


def validate_semicolon(
    value: object, key_format: KeyFormat | None = None
) -> Result[dict[str, str], ValueParseError]:
    """Parse ``key=value;flag`` into a dict; bare keys map to ``"true"``."""
    if not isinstance(value, str):
        return Err(ValueParseError("SemiColon", value))
    output: dict[str, str] = {}
    for chunk in value.split(";"):
        pair = chunk.split("=")[:2]
        key = pair[0].strip()
        raw = pair[1].strip() if len(pair) > 1 else "true"
        if key:
            key = format_key(key, key_format)
            output[key] = unquote(raw)
    return Ok(output)
