"""Parsers – ConfigParser port."""
from __future__ import annotations

import abc
from typing import Generic, TypeVar

from mp_envkit.kernel.types import Result
from mp_envkit.masking import LogFormat

V = TypeVar("V")


class ConfigParser(abc.ABC, Generic[V]):
    """Port: convert a raw string to a typed value and back.

    ``parse`` is a coroutine so that implementations may consult async
    validators; ``to_string`` must round-trip through ``parse``.
    """

    name: str

    @abc.abstractmethod
    async def parse(self, raw: str) -> Result[V, Exception]: ...

    @abc.abstractmethod
    def to_string(self, value: V) -> str: ...

    @abc.abstractmethod
    def to_log_string(self, value: V, log_format: LogFormat) -> str: ...


__all__ = ["ConfigParser"]
