"""Loaders – file-backed map loaders with optional change watching.

Watching uses ``watchdog`` (install ``mp-envkit[watch]``). Filesystem
events arrive on the observer thread and are handed to the event loop,
where a 200 ms timer coalesces bursts into a single :meth:`reload`.
"""
from __future__ import annotations

import abc
import asyncio
import json
import os
import pathlib
from typing import Any, Callable, ClassVar, Mapping

from mp_envkit.kernel.errors import VariableError
from mp_envkit.kernel.types import Err, Ok, Result
from mp_envkit.loaders.map_loader import MAP_LOADER_LOG_MAP, MapLoader
from mp_envkit.loaders.values import build_string_map
from mp_envkit.observability.logging import LogLevel

FILE_LOADER_LOG_MAP: Mapping[str, LogLevel | None] = {
    **MAP_LOADER_LOG_MAP,
    "load": "debug",
    "watcher": None,
}

WATCH_DEBOUNCE_SECONDS = 0.2


def _require_watchdog() -> Any:
    try:
        from watchdog import events, observers  # type: ignore[import-untyped]
        return events, observers
    except ImportError as exc:
        raise ImportError("Install 'mp-envkit[watch]' (watchdog) to watch config files") from exc


def _read_if_exists(path: pathlib.Path) -> bytes | None:
    if not path.exists():
        return None
    return path.read_bytes()


def _build_handler(events: Any, target: pathlib.Path, callback: Callable[[], None]) -> Any:
    class _FileChangeHandler(events.FileSystemEventHandler):  # type: ignore[misc,name-defined]
        def on_any_event(self, event: Any) -> None:
            paths = [event.src_path, getattr(event, "dest_path", "")]
            if any(p and pathlib.Path(os.fsdecode(p)).resolve() == target for p in paths):
                callback()

    return _FileChangeHandler()


class FileMapLoader(MapLoader):
    """Base for loaders that parse a whole file into the cache.

    Parameters
    ----------
    file_name:
        Path of the file to read.
    is_silent:
        When true a missing or unparsable file is logged and yields no
        values; when false it is returned as an ``Err``.
    watch:
        Reload automatically when the file changes.
    """

    default_log_map: ClassVar[Mapping[str, LogLevel | None]] = FILE_LOADER_LOG_MAP
    default_file_name: ClassVar[str] = "config"

    def __init__(
        self,
        file_name: str | os.PathLike[str] | None = None,
        *,
        is_silent: bool = True,
        watch: bool = False,
        loader_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if loader_type is not None:
            self.loader_type = loader_type
        self.file_name = str(file_name or self.default_file_name)
        self.is_silent = is_silent
        self.watch = watch
        self._observer: Any = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    async def load_data(self) -> Result[bool, Exception]:
        path = pathlib.Path(self.file_name)
        try:
            raw = await asyncio.get_running_loop().run_in_executor(None, _read_if_exists, path)
        except OSError as exc:
            return Err(VariableError(str(exc), cause=exc))
        if raw is None:
            message = self.build_log_str(f"file {self.file_name} not found")
            if not self.is_silent:
                return Err(VariableError(message))
            self.logger.log_key("load", message)
            self.init_data({})
            return Ok(False)
        self.logger.log_key("load", self.build_log_str(f"loading file {self.file_name}"))
        parsed = self.handle_parse(raw)
        if parsed.is_err():
            if not self.is_silent:
                return parsed
            self.logger.error(str(parsed.error))
            parsed = Ok({})
        self.init_data(build_string_map(parsed.value))
        self._handle_file_watch()
        return Ok(True)

    async def close(self) -> Result[None, Exception]:
        """Stop watching the file, if a watcher is running."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._observer is not None:
            self.logger.debug(self.build_log_str(f"closing file watcher for {self.file_name}"))
            observer, self._observer = self._observer, None
            observer.stop()
            await asyncio.get_running_loop().run_in_executor(None, observer.join)
        return Ok()

    @abc.abstractmethod
    def handle_parse(self, raw: bytes) -> Result[Mapping[str, Any], Exception]: ...

    # ------------------------------------------------------------------
    # Watching
    # ------------------------------------------------------------------

    def _handle_file_watch(self) -> None:
        if not self.watch or self._observer is not None:
            return
        events, observers = _require_watchdog()
        self.logger.log_key("watcher", self.build_log_str(f"setting up file watcher for {self.file_name}"))
        self._loop = asyncio.get_running_loop()
        target = pathlib.Path(self.file_name).resolve()
        handler = _build_handler(events, target, self._on_fs_event)
        observer = observers.Observer()
        observer.schedule(handler, str(target.parent), recursive=False)
        observer.daemon = True
        observer.start()
        self._observer = observer

    def _on_fs_event(self) -> None:
        if self._loop is not None and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._schedule_reload)

    def _schedule_reload(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._loop is None:
            return
        self._timer = self._loop.call_later(WATCH_DEBOUNCE_SECONDS, self._start_reload)

    def _start_reload(self) -> None:
        self._timer = None
        task = asyncio.ensure_future(self._handle_file_change())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _handle_file_change(self) -> None:
        res = await self.reload()
        if res.is_ok():
            self.logger.log_key("load", self.build_log_str(f"reloaded file {self.file_name} due to change"))
        else:
            self.logger.log_key(
                "load",
                self.build_log_str(f"error reloading file {self.file_name} due to change: {res.error}"),
            )


class JsonFileConfigLoader(FileMapLoader):
    """Top-level JSON object; truthy values are stringified."""

    loader_type = "json-file"
    default_file_name = "config.json"

    def handle_parse(self, raw: bytes) -> Result[Mapping[str, Any], Exception]:
        try:
            data = json.loads(raw)
        except ValueError as exc:
            return Err(
                VariableError(
                    f"ConfigVariables[{self.loader_type}]: Failed to parse JSON from {self.file_name}: {exc}",
                    cause=exc,
                )
            )
        if not isinstance(data, dict):
            self.logger.error(f"ConfigVariables[{self.loader_type}]: Invalid JSON data from {self.file_name}")
            return Ok({})
        return Ok(data)


__all__ = [
    "FILE_LOADER_LOG_MAP",
    "FileMapLoader",
    "JsonFileConfigLoader",
    "WATCH_DEBOUNCE_SECONDS",
]
