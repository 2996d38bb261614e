"""Loaders – FileSecretsConfigLoader (one file per secret, Docker style)."""
from __future__ import annotations

import asyncio
import os
import pathlib
from typing import Any

from mp_envkit.kernel.errors import VariableError
from mp_envkit.kernel.types import Err, Ok, Result
from mp_envkit.loaders.map_loader import MapLoader
from mp_envkit.loaders.port import LoaderValueResult


class FileSecretsConfigLoader(MapLoader):
    """Read every file under *path* as ``file name → stripped content``.

    With ``file_lower_case`` the lookup key is lower-cased before it is
    matched against file names (``DB_PASSWORD`` reads ``db_password``).
    """

    loader_type = "docker-secrets"

    def __init__(
        self,
        path: str | os.PathLike[str] = "/run/secrets",
        *,
        file_lower_case: bool = False,
        is_silent: bool = True,
        loader_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if loader_type is not None:
            self.loader_type = loader_type
        self.path = pathlib.Path(path)
        self.file_lower_case = file_lower_case
        self.is_silent = is_silent

    def get_override_key(self, key: str) -> str:
        key = super().get_override_key(key)
        return key.lower() if self.file_lower_case else key

    async def get_raw_value(self, lookup_key: str) -> Result[LoaderValueResult, Exception]:
        file_name = self.get_override_key(lookup_key)
        return (await self.get(lookup_key)).map(
            lambda value: LoaderValueResult(value=value, path=str(self.path / file_name))
        )

    async def load_data(self) -> Result[bool, Exception]:
        if not self.path.is_dir():
            message = self.build_log_str(f"secrets directory {self.path} not found")
            if not self.is_silent:
                return Err(VariableError(message))
            self.logger.debug(message)
            self.init_data({})
            return Ok(False)
        try:
            data = await asyncio.get_running_loop().run_in_executor(None, self._read_all)
        except OSError as exc:
            return Err(VariableError(self.build_log_str(str(exc)), cause=exc))
        self.init_data(data)
        return Ok(True)

    def _read_all(self) -> dict[str, str]:
        return {f.name: f.read_text().strip() for f in self.path.iterdir() if f.is_file()}


__all__ = ["FileSecretsConfigLoader"]
