from __future__ import annotations

from typing import Literal

__all__ = ["KEY_FORMATS", "LOG_FORMATS", "KeyFormat", "LogFormat"]

LogFormat = Literal["plain", "hidden", "masked", "prefix", "suffix", "partial"]
KeyFormat = Literal["UPPERCASE", "lowercase", "camelCase", "PascalCase"]

LOG_FORMATS: tuple[LogFormat, ...] = ("plain", "hidden", "masked", "prefix", "suffix", "partial")
KEY_FORMATS: tuple[KeyFormat, ...] = ("UPPERCASE", "lowercase", "camelCase", "PascalCase")
