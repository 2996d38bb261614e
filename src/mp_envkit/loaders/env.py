"""Loaders – process environment variables."""
from __future__ import annotations

import os

from mp_envkit.kernel.types import Ok, Result
from mp_envkit.loaders.base import BaseLoader
from mp_envkit.loaders.port import LoaderValueResult


class ProcessEnvLoader(BaseLoader):
    """Reads ``os.environ[key]`` on every lookup; nothing is cached."""

    loader_type = "process-env"
    prefix = ""

    async def get_raw_value(self, lookup_key: str) -> Result[LoaderValueResult, Exception]:
        key = f"{self.prefix}{self.get_override_key(lookup_key)}"
        return Ok(LoaderValueResult(value=os.environ.get(key), path=f"process.env.{key}"))


class ReactEnvLoader(ProcessEnvLoader):
    """Reads ``os.environ["REACT_APP_" + key]``."""

    loader_type = "react-process-env"
    prefix = "REACT_APP_"


__all__ = ["ProcessEnvLoader", "ReactEnvLoader"]
