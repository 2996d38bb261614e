"""Observability – KeyLogger, a logger routed through named log keys.

Loaders and the resolver log under semantic keys (``init``, ``get``,
``missing`` ...). A log map decides the level for each key; ``None``
silences the key entirely::

    log = KeyLogger(get_logger(__name__), {"get": None, "init": "debug"})
    log.log_key("init", "ConfigLoader[memory]: loader of type memory is initialized")
"""
from __future__ import annotations

from typing import Any, Mapping

from mp_envkit.observability.logging.protocol import Logger, LogLevel

type LogMap = Mapping[str, LogLevel | None]


class KeyLogger:
    """Dispatch messages to *logger* at the level configured per key."""

    def __init__(self, logger: Logger | None, log_map: LogMap) -> None:
        self._logger = logger
        self._log_map: dict[str, LogLevel | None] = dict(log_map)

    @property
    def logger(self) -> Logger | None:
        return self._logger

    @property
    def log_map(self) -> dict[str, LogLevel | None]:
        return dict(self._log_map)

    def set_logger(self, logger: Logger | None) -> None:
        self._logger = logger

    def set_level(self, key: str, level: LogLevel | None) -> None:
        self._log_map[key] = level

    def log_key(self, key: str, message: str, *args: Any) -> None:
        level = self._log_map.get(key)
        if level is None or self._logger is None:
            return
        getattr(self._logger, level)(message, *args)

    def debug(self, message: str, *args: Any) -> None:
        if self._logger is not None:
            self._logger.debug(message, *args)

    def info(self, message: str, *args: Any) -> None:
        if self._logger is not None:
            self._logger.info(message, *args)

    def warning(self, message: str, *args: Any) -> None:
        if self._logger is not None:
            self._logger.warning(message, *args)

    def error(self, message: str, *args: Any) -> None:
        if self._logger is not None:
            self._logger.error(message, *args)


__all__ = ["KeyLogger", "LogMap"]
