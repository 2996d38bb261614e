"""Loaders – DotEnvConfigLoader (``python-dotenv``)."""
from __future__ import annotations

import io
from typing import Any, Mapping

from mp_envkit.kernel.errors import VariableError
from mp_envkit.kernel.types import Err, Ok, Result
from mp_envkit.loaders.file import FileMapLoader


def _require_dotenv() -> Any:
    try:
        import dotenv  # type: ignore[import-untyped]
        return dotenv
    except ImportError as exc:
        raise ImportError("Install 'mp-envkit[dotenv]' (python-dotenv) to use DotEnvConfigLoader") from exc


class DotEnvConfigLoader(FileMapLoader):
    """Reads ``KEY=value`` pairs from a dotenv file without touching ``os.environ``."""

    loader_type = "dotenv"
    default_file_name = ".env"

    def handle_parse(self, raw: bytes) -> Result[Mapping[str, Any], Exception]:
        dotenv = _require_dotenv()
        try:
            return Ok(dict(dotenv.dotenv_values(stream=io.StringIO(raw.decode("utf-8")))))
        except UnicodeDecodeError as exc:
            return Err(VariableError(self.build_log_str(f"failed to decode {self.file_name}: {exc}"), cause=exc))


__all__ = ["DotEnvConfigLoader"]
