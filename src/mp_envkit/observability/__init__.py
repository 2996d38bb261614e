"""Observability – logging."""
from mp_envkit.observability.logging import JsonLoggerFactory, KeyLogger, Logger, get_logger

__all__ = ["JsonLoggerFactory", "KeyLogger", "Logger", "get_logger"]
