"""Observability – structured logging ports and helpers."""
from mp_envkit.observability.logging.factory import JsonLoggerFactory
from mp_envkit.observability.logging.key_logger import KeyLogger, LogMap
from mp_envkit.observability.logging.processors import get_logger
from mp_envkit.observability.logging.protocol import Logger, LogLevel

__all__ = [
    "JsonLoggerFactory",
    "KeyLogger",
    "LogLevel",
    "LogMap",
    "Logger",
    "get_logger",
]
