"""Resolver – per-key schema entries."""
from __future__ import annotations

import dataclasses
from typing import Any, Generic, Mapping, TypeVar

from mp_envkit.masking import LogFormat
from mp_envkit.parsers.port import ConfigParser

V = TypeVar("V")


@dataclasses.dataclass(frozen=True)
class SchemaEntry(Generic[V]):
    """How one key is parsed, defaulted and logged.

    ``default_value`` may be a plain value or a ``Loadable``; it is resolved
    only when no loader produced a value, and it takes precedence over
    ``required``.
    """

    parser: ConfigParser[V]
    default_value: Any = None
    required: bool = False
    log_format: LogFormat = "plain"


type ConfigSchema = Mapping[str, SchemaEntry[Any]]

__all__ = ["ConfigSchema", "SchemaEntry"]
