"""Configuration errors — lookup, parse and loader failures."""

from __future__ import annotations

import json
from typing import Any

from mp_envkit.kernel.errors.base import BaseError


class ConfigError(BaseError):
    """Raised when configuration is invalid or loading failed."""

    default_code = "config_error"


class VariableError(ConfigError):
    """A backend failed while loading or looking up variables."""

    default_code = "variable_error"


class LoaderError(VariableError):
    """A specific loader failed during lookup."""

    default_code = "loader_error"

    def __init__(self, loader_type: str, message: str, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.loader_type = loader_type


class VariableLookupError(ConfigError):
    """Resolving a key failed; ``key`` names the variable."""

    default_code = "variable_lookup_error"

    def __init__(self, key: str, message: str, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.key = key


class SchemaKeyError(VariableLookupError):
    """The key is not declared in the schema."""

    default_code = "schema_key_error"

    def __init__(self, key: str, **kwargs: Any) -> None:
        super().__init__(key, f'Key "{key}" is not defined in schema', **kwargs)


class MissingRequiredValueError(VariableLookupError):
    """A required key had no value from any loader and no default."""

    default_code = "missing_required_value"

    def __init__(self, key: str, **kwargs: Any) -> None:
        super().__init__(key, f"Missing required value for key: {key}", **kwargs)


class ValueParseError(ConfigError):
    """A raw value was found but could not be converted."""

    default_code = "value_parse_error"

    def __init__(self, type_name: str, value: object, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"Invalid {type_name} value: {_repr_value(value)}", **kwargs)
        self.type_name = type_name
        self.value = value
        self.key: str | None = None

    def with_key(self, key: str) -> ValueParseError:
        """Copy of this error naming the variable that failed to parse."""
        keyed = ValueParseError(self.type_name, self.value, f"{self.message} for key: {key}", code=self.code, cause=self)
        keyed.key = key
        return keyed


def _repr_value(value: object) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)


__all__ = [
    "ConfigError",
    "LoaderError",
    "MissingRequiredValueError",
    "SchemaKeyError",
    "ValueParseError",
    "VariableError",
    "VariableLookupError",
]
