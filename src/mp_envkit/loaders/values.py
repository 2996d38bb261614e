"""Loaders – conversion of decoded documents to string maps."""
from __future__ import annotations

import json
from typing import Any, Mapping


def stringify_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def build_string_map(data: Mapping[str, Any]) -> dict[str, str]:
    """Stringify every truthy value; falsy entries are dropped."""
    return {key: stringify_value(value) for key, value in data.items() if value}


def build_string_object(data: Mapping[str, Any]) -> dict[str, str]:
    """Stringify every value except ``None``."""
    return {key: stringify_value(value) for key, value in data.items() if value is not None}


__all__ = ["build_string_map", "build_string_object", "stringify_value"]
