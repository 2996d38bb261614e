"""Loaders – ConfigLoader port and LoaderValueResult."""
from __future__ import annotations

import abc
import dataclasses
from typing import Mapping

from mp_envkit.kernel.types import Result

type OverrideKeyMap = Mapping[str, str]


@dataclasses.dataclass(frozen=True)
class LoaderValueResult:
    """A raw value (or ``None``) and the physical location it came from."""

    value: str | None
    path: str


class ConfigLoader(abc.ABC):
    """Port: produce raw string values for lookup keys."""

    loader_type: str

    @abc.abstractmethod
    async def get_value_result(self, lookup_key: str) -> Result[LoaderValueResult | None, Exception]: ...

    @abc.abstractmethod
    async def is_loader_disabled(self) -> Result[bool, Exception]: ...


__all__ = ["ConfigLoader", "LoaderValueResult", "OverrideKeyMap"]
