from __future__ import annotations

import math
from typing import Any, Iterable, Mapping
from urllib.parse import urlsplit, urlunsplit

from mp_envkit.masking.rules import KeyFormat, LogFormat

__all__ = [
    "build_log_value",
    "format_key",
    "mask_userinfo",
    "print_log_value",
    "protected_keys_object",
    "url_sanitize",
]


def _visible_characters(value: str) -> int:
    return min(3, max(1, math.floor(len(value) * 0.2)))


def build_log_value(value: str, log_format: LogFormat) -> str:
    """Render *value* for a log line according to *log_format*."""
    visible = _visible_characters(value)
    hidden = len(value) - visible
    match log_format:
        case "plain":
            return value
        case "hidden":
            return ""
        case "masked":
            return "*" * len(value)
        case "prefix":
            return value[:visible] + "*" * hidden
        case "suffix":
            return "*" * hidden + (value[-visible:] if value else "")
        case "partial":
            half = max(1, math.ceil(visible / 2))
            return value[:half] + "*" * (len(value) - half * 2) + (value[-half:] if value else "")
    raise ValueError(f"Unknown format: {log_format}")


def print_log_value(value: str, log_format: LogFormat) -> str:
    """Bracketed log segment, or ``""`` when the value must not be shown."""
    if log_format == "hidden":
        return ""
    return f" [{build_log_value(value, log_format)}]"


def format_key(key: str, key_format: KeyFormat | None = None) -> str:
    if not key:
        return key
    match key_format:
        case "UPPERCASE":
            return key.upper()
        case "lowercase":
            return key.lower()
        case "camelCase":
            return key[0].lower() + key[1:]
        case "PascalCase":
            return key[0].upper() + key[1:]
    return key


def protected_keys_object(
    value: Mapping[str, Any], log_format: LogFormat, keys: Iterable[str]
) -> dict[str, Any]:
    """Copy *value* masking only the entries named in *keys*."""
    protected = set(keys)
    return {
        k: build_log_value(str(v), log_format) if k in protected else v
        for k, v in value.items()
    }


def mask_userinfo(url: str, log_format: LogFormat) -> str:
    """Apply *log_format* to the username and password of *url*."""
    parts = urlsplit(url)
    if parts.username is None and parts.password is None:
        return url
    host = parts.netloc.rpartition("@")[2]
    userinfo = build_log_value(parts.username or "", log_format)
    if parts.password is not None:
        userinfo += ":" + build_log_value(parts.password, log_format)
    return urlunsplit((parts.scheme, f"{userinfo}@{host}", parts.path, parts.query, parts.fragment))


def url_sanitize(url: str) -> str:
    """Hide credentials in *url* before it is used as a log path."""
    try:
        return mask_userinfo(url, "masked")
    except ValueError:
        return url
