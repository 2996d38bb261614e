"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    └── ConfigError
        ├── VariableError
        │   └── LoaderError
        ├── VariableLookupError
        │   ├── SchemaKeyError
        │   └── MissingRequiredValueError
        └── ValueParseError
"""

from mp_envkit.kernel.errors.base import BaseError
from mp_envkit.kernel.errors.config import (
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
