"""Loaders – MapLoader, the caching base for backend loaders.

Values live in an in-process ``dict`` keyed by the override key. The first
access loads the backend once through :meth:`MapLoader.load_data`; later
accesses are served from the cache until :meth:`MapLoader.reload`.
"""
from __future__ import annotations

import abc
import asyncio
from typing import ClassVar, Iterable, Mapping

from mp_envkit.kernel.events import Subscription, UpdateEmitter, UpdateListener
from mp_envkit.kernel.types import Loadable, Ok, Result
from mp_envkit.loaders.base import BaseLoader
from mp_envkit.loaders.port import LoaderValueResult, OverrideKeyMap
from mp_envkit.observability.logging import KeyLogger, Logger, LogLevel, LogMap, get_logger

log = get_logger(__name__)

MAP_LOADER_LOG_MAP: Mapping[str, LogLevel | None] = {
    "get": None,
    "init": "debug",
    "missing": None,
    "set": None,
}


class MapLoader(BaseLoader):
    """Caching loader; subclasses implement :meth:`load_data`.

    ``load_data`` must populate the cache through :meth:`init_data` and
    return ``Ok(True)`` when data was loaded, ``Ok(False)`` when the backend
    had nothing to offer, or ``Err`` on failure. Errors are returned from
    ``get``, ``set``, ``size`` and ``reload`` unchanged.
    """

    default_log_map: ClassVar[Mapping[str, LogLevel | None]] = MAP_LOADER_LOG_MAP

    def __init__(
        self,
        *,
        disabled: bool | Loadable[bool] = False,
        override_keys: OverrideKeyMap | None = None,
        logger: Logger | None = log,
        log_map: LogMap | None = None,
    ) -> None:
        super().__init__(disabled=disabled, override_keys=override_keys)
        self.logger = KeyLogger(None, {**self.default_log_map, **(log_map or {})})
        self._logger_option = logger
        self._data: dict[str, str | None] = {}
        self._is_loaded = False
        self._is_initialized = False
        self._load_lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None
        self._updates = UpdateEmitter()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def init(self) -> Result[None, Exception]:
        """Attach the configured logger and log the loader state, once."""
        if self._is_initialized:
            return Ok()
        disabled = await self.is_loader_disabled()
        if disabled.is_err():
            return disabled
        if not self._is_initialized:
            self._is_initialized = True
            self.logger.set_logger(self._logger_option)
            state = "disabled" if disabled.value else "initialized"
            self.logger.log_key("init", self.build_log_str(f"loader of type {self.loader_type} is {state}"))
        return Ok()

    def is_loaded(self) -> bool:
        return self._is_loaded

    async def reload(self) -> Result[None, Exception]:
        """Drop the cache and load the backend again.

        Waits for a load already in flight, then always runs a fresh one.
        """
        res = await self.init()
        if res.is_err():
            return res
        return await self._handle_load(force=True)

    def on_update(self, listener: UpdateListener) -> Subscription:
        return self._updates.on_update(listener)

    # ------------------------------------------------------------------
    # Cache access
    # ------------------------------------------------------------------

    async def get_raw_value(self, lookup_key: str) -> Result[LoaderValueResult, Exception]:
        return (await self.get(lookup_key)).map(
            lambda value: LoaderValueResult(value=value, path=f"key:{self.get_override_key(lookup_key)}")
        )

    async def get(self, lookup_key: str) -> Result[str | None, Exception]:
        res = await self._ready()
        if res.is_err():
            return res
        key = self.get_override_key(lookup_key)
        self.logger.log_key("get", self.build_log_str(f"key {key}"))
        if key not in self._data:
            self.logger.log_key("missing", self.build_log_str(f"key {key} not found"))
        return Ok(self._data.get(key))

    async def set(self, lookup_key: str, value: str | None) -> Result[None, Exception]:
        """Write *value* into the cache; ``None`` clears the key."""
        res = await self._ready()
        if res.is_err():
            return res
        key = self.get_override_key(lookup_key)
        if value is None:
            self.logger.log_key("set", self.build_log_str(f"clear key {key}"))
        else:
            self.logger.log_key("set", self.build_log_str(f"set key {key}"))
        self._data[key] = value
        self._updates.emit()
        return Ok()

    async def clear(self) -> Result[None, Exception]:
        res = await self._ready()
        if res.is_err():
            return res
        self._data.clear()
        self._updates.emit()
        return Ok()

    async def size(self) -> Result[int, Exception]:
        res = await self._ready()
        if res.is_err():
            return res
        return Ok(len(self._data))

    def init_data(self, entries: Mapping[str, str | None] | Iterable[tuple[str, str | None]]) -> Result[None, Exception]:
        """Replace the whole cache and mark it loaded."""
        self._data = dict(entries)
        self._is_loaded = True
        self._updates.emit()
        return Ok()

    def get_data(self) -> dict[str, str]:
        """Snapshot of the cache without cleared (empty) entries."""
        return {key: value for key, value in self._data.items() if value}

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _ready(self) -> Result[None, Exception]:
        res = await self.init()
        if res.is_err():
            return res
        return await self._handle_load()

    def _get_load_lock(self) -> asyncio.Lock:
        # one lock per event loop; a loader can outlive an asyncio.run()
        loop = asyncio.get_running_loop()
        if self._load_lock is None or self._lock_loop is not loop:
            self._load_lock = asyncio.Lock()
            self._lock_loop = loop
        return self._load_lock

    async def _handle_load(self, *, force: bool = False) -> Result[None, Exception]:
        if self._is_loaded and not force:
            return Ok()
        async with self._get_load_lock():
            if force:
                self._data.clear()
                self._is_loaded = False
            elif self._is_loaded:
                return Ok()
            disabled = await self.is_loader_disabled()
            if disabled.is_err():
                return disabled
            if disabled.value:
                return Ok()
            return (await self.load_data()).map(lambda _: None)

    @abc.abstractmethod
    async def load_data(self) -> Result[bool, Exception]: ...


__all__ = ["MAP_LOADER_LOG_MAP", "MapLoader"]
