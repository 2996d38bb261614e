"""Observability – Logger protocol."""
from __future__ import annotations

from typing import Any, Literal, Protocol

LogLevel = Literal["debug", "info", "warning", "error"]


class Logger(Protocol):
    """Minimal logger protocol – works with structlog or stdlib."""

    def debug(self, event: str, *args: Any, **kw: Any) -> Any: ...
    def info(self, event: str, *args: Any, **kw: Any) -> Any: ...
    def warning(self, event: str, *args: Any, **kw: Any) -> Any: ...
    def error(self, event: str, *args: Any, **kw: Any) -> Any: ...


__all__ = ["LogLevel", "Logger"]
