"""Kernel – framework-agnostic building blocks."""

from mp_envkit.kernel.errors import (
    BaseError,
    ConfigError,
    LoaderError,
    MissingRequiredValueError,
    SchemaKeyError,
    ValueParseError,
    VariableError,
    VariableLookupError,
)

__all__ = [
    "BaseError",
    "ConfigError",
    "LoaderError",
    "MissingRequiredValueError",
    "SchemaKeyError",
    "ValueParseError",
    "VariableError",
    "VariableLookupError",
]
