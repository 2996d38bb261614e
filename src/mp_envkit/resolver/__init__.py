"""Resolver — EnvKit and schema declarations."""

from mp_envkit.resolver.env_kit import (
    DEFAULT_LOADER_TYPE,
    EnvKit,
    LoaderErrorPolicy,
    ResultEntry,
    ValueEntry,
)
from mp_envkit.resolver.schema import ConfigSchema, SchemaEntry

__all__ = [
    "DEFAULT_LOADER_TYPE",
    "ConfigSchema",
    "EnvKit",
    "LoaderErrorPolicy",
    "ResultEntry",
    "SchemaEntry",
    "ValueEntry",
]
