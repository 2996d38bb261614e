"""Parsers – function-backed ``KeyParser`` and the built-in factories.

Scalar factories take an optional validator that replaces the default
conversion of the raw string. ``json_parser`` and ``semicolon_parser``
decode first and hand the decoded mapping to their validator.
"""
from __future__ import annotations

import dataclasses
import json
from typing import Any, Awaitable, Callable, Iterable, TypeVar
from urllib.parse import quote

from pydantic import AnyUrl
from pydantic_core import to_jsonable_python

from mp_envkit.kernel.types import Ok, Result, result_all
from mp_envkit.masking import (
    KeyFormat,
    LogFormat,
    build_log_value,
    mask_userinfo,
    protected_keys_object,
)
from mp_envkit.parsers.port import ConfigParser
from mp_envkit.parsers.schema import ValidateFn, Validator, as_validate_fn
from mp_envkit.parsers.validate import (
    validate_bigint,
    validate_boolean,
    validate_float,
    validate_integer,
    validate_json,
    validate_semicolon,
    validate_string,
    validate_url,
)

V = TypeVar("V")

ParseFn = Callable[[str], Awaitable[Result[Any, Exception]]]


@dataclasses.dataclass(frozen=True)
class KeyParser(ConfigParser[V]):
    """A :class:`ConfigParser` assembled from plain callables."""

    name: str
    parse_fn: ParseFn
    to_string_fn: Callable[[V], str] = str
    to_log_string_fn: Callable[[V, LogFormat], str] = lambda value, fmt: build_log_value(str(value), fmt)

    async def parse(self, raw: str) -> Result[V, Exception]:
        return await self.parse_fn(raw)

    def to_string(self, value: V) -> str:
        return self.to_string_fn(value)

    def to_log_string(self, value: V, log_format: LogFormat) -> str:
        return self.to_log_string_fn(value, log_format)


def _lift(fn: ValidateFn[Any]) -> ParseFn:
    async def parse(raw: str) -> Result[Any, Exception]:
        return fn(raw)

    return parse


def _scalar_parse(validator: Validator[Any] | None, default: ValidateFn[Any]) -> ParseFn:
    return _lift(as_validate_fn(validator) or default)


def _bool_str(value: bool) -> str:
    return "true" if value else "false"


def _float_str(value: float) -> str:
    if value != value:
        return "NaN"
    if value in (float("inf"), float("-inf")):
        return "Infinity" if value > 0 else "-Infinity"
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


def _to_json(value: Any) -> str:
    return json.dumps(to_jsonable_python(value), separators=(",", ":"), ensure_ascii=False)


def _protected_log(keys: frozenset[str]) -> Callable[[Any, LogFormat], str]:
    def to_log_string(value: Any, log_format: LogFormat) -> str:
        plain = to_jsonable_python(value)
        if isinstance(plain, dict):
            plain = protected_keys_object(plain, log_format, keys)
        return json.dumps(plain, separators=(",", ":"), ensure_ascii=False)

    return to_log_string


def _semicolon_value(value: Any) -> str:
    if isinstance(value, bool):
        return _bool_str(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _semicolon_str(value: Any) -> str:
    plain = to_jsonable_python(value)
    return ";".join(f"{key}={quote(_semicolon_value(item), safe='')}" for key, item in plain.items())


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def string_parser(validator: Validator[str] | None = None) -> KeyParser[str]:
    return KeyParser(
        name="stringParser",
        parse_fn=_scalar_parse(validator, validate_string),
        to_string_fn=str,
        to_log_string_fn=build_log_value,
    )


def boolean_parser(validator: Validator[bool] | None = None) -> KeyParser[bool]:
    return KeyParser(
        name="booleanParser",
        parse_fn=_scalar_parse(validator, validate_boolean),
        to_string_fn=_bool_str,
        to_log_string_fn=lambda value, fmt: build_log_value(_bool_str(value), fmt),
    )


def integer_parser(validator: Validator[int] | None = None) -> KeyParser[int]:
    return KeyParser(name="integerParser", parse_fn=_scalar_parse(validator, validate_integer))


def float_parser(validator: Validator[float] | None = None) -> KeyParser[float]:
    return KeyParser(
        name="floatParser",
        parse_fn=_scalar_parse(validator, validate_float),
        to_string_fn=_float_str,
        to_log_string_fn=lambda value, fmt: build_log_value(_float_str(value), fmt),
    )


def bigint_parser(validator: Validator[int] | None = None) -> KeyParser[int]:
    return KeyParser(name="bigintParser", parse_fn=_scalar_parse(validator, validate_bigint))


def url_parser(validator: Validator[AnyUrl] | None = None) -> KeyParser[AnyUrl]:
    """Absolute URLs; the log form redacts only the userinfo part."""
    return KeyParser(
        name="urlEnvParser",
        parse_fn=_scalar_parse(validator, validate_url),
        to_string_fn=str,
        to_log_string_fn=lambda value, fmt: mask_userinfo(str(value), fmt),
    )


def array_parser(
    element: ConfigParser[V] | Validator[V], separator: str = ";"
) -> KeyParser[list[V]]:
    """Split on *separator* and parse every piece; the first failure wins."""
    if isinstance(element, ConfigParser):
        element_parse: ParseFn = element.parse
        element_name = element.name
        element_str: Callable[[Any], str] = element.to_string
    else:
        element_parse = _lift(as_validate_fn(element))  # type: ignore[arg-type]
        element_name = "schema"
        element_str = str

    async def parse(raw: str) -> Result[list[V], Exception]:
        return result_all([await element_parse(piece) for piece in raw.split(separator)])

    def to_string(value: list[V]) -> str:
        return separator.join(element_str(item) for item in value)

    return KeyParser(
        name=f"arrayParser[{element_name}]",
        parse_fn=parse,
        to_string_fn=to_string,
        to_log_string_fn=lambda value, fmt: build_log_value(to_string(value), fmt),
    )


def json_parser(
    validator: Validator[V] | None = None, protected_keys: Iterable[str] = ()
) -> KeyParser[V]:
    """``json.loads`` then *validator*; *protected_keys* are redacted in logs."""
    validate = as_validate_fn(validator)

    async def parse(raw: str) -> Result[V, Exception]:
        decoded = validate_json(raw)
        return decoded.flat_map(validate) if validate is not None else decoded

    return KeyParser(
        name="jsonParser",
        parse_fn=parse,
        to_string_fn=_to_json,
        to_log_string_fn=_protected_log(frozenset(protected_keys)),
    )


def semicolon_parser(
    validator: Validator[V] | None = None,
    key_format: KeyFormat | None = None,
    protected_keys: Iterable[str] = (),
) -> KeyParser[V]:
    """``key=value;flag`` pairs; logged as JSON with *protected_keys* redacted."""
    validate = as_validate_fn(validator)

    async def parse(raw: str) -> Result[V, Exception]:
        decoded = validate_semicolon(raw, key_format)
        return decoded.flat_map(validate) if validate is not None else decoded

    return KeyParser(
        name="semiColonParser",
        parse_fn=parse,
        to_string_fn=_semicolon_str,
        to_log_string_fn=_protected_log(frozenset(protected_keys)),
    )


__all__ = [
    "KeyParser",
    "ParseFn",
    "array_parser",
    "bigint_parser",
    "boolean_parser",
    "float_parser",
    "integer_parser",
    "json_parser",
    "semicolon_parser",
    "string_parser",
    "url_parser",
]
