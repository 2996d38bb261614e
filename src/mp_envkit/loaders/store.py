"""Loaders – StoreConfigLoader over a pluggable durable storage driver.

Writes go to the cache first and are then persisted through the driver.
Drivers announce external changes through ``on_update``; the loader
answers by reloading in the background.
"""
from __future__ import annotations

import abc
import asyncio
import os
import pathlib
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from mp_envkit.kernel.errors import VariableError
from mp_envkit.kernel.events import Subscription, UpdateEmitter, UpdateListener
from mp_envkit.kernel.types import Err, Ok, Result
from mp_envkit.loaders.map_loader import MapLoader


class StoreDocument(BaseModel):
    """Persisted form of the store: ``{"_v": 1, "data": {...}}``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    version: Literal[1] = Field(default=1, alias="_v")
    data: dict[str, str] = Field(default_factory=dict)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class StorageDriver(abc.ABC):
    """Port: durable storage for a :class:`StoreDocument`."""

    @abc.abstractmethod
    async def hydrate(self) -> StoreDocument | None: ...

    @abc.abstractmethod
    async def store(self, document: StoreDocument) -> None: ...

    @abc.abstractmethod
    async def clear(self) -> None: ...

    @abc.abstractmethod
    def on_update(self, listener: UpdateListener) -> Subscription: ...


class FileStorageDriver(StorageDriver):
    """JSON file driver; call :meth:`notify_update` when the file changes externally."""

    def __init__(self, file_name: str | os.PathLike[str]) -> None:
        self._path = pathlib.Path(file_name)
        self._updates = UpdateEmitter()

    async def hydrate(self) -> StoreDocument | None:
        return await asyncio.get_running_loop().run_in_executor(None, self._sync_hydrate)

    def _sync_hydrate(self) -> StoreDocument | None:
        if not self._path.exists():
            return None
        return StoreDocument.model_validate_json(self._path.read_bytes())

    async def store(self, document: StoreDocument) -> None:
        await asyncio.get_running_loop().run_in_executor(None, self._sync_store, document)

    def _sync_store(self, document: StoreDocument) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(document.to_json(), encoding="utf-8")
        os.replace(tmp, self._path)

    async def clear(self) -> None:
        self._path.unlink(missing_ok=True)

    def on_update(self, listener: UpdateListener) -> Subscription:
        return self._updates.on_update(listener)

    def notify_update(self) -> None:
        self._updates.emit()


class StoreConfigLoader(MapLoader):
    """Map loader persisted through a :class:`StorageDriver`."""

    loader_type = "store"

    def __init__(self, driver: StorageDriver, *, loader_type: str | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        if loader_type is not None:
            self.loader_type = loader_type
        self._driver = driver
        self._tasks: set[asyncio.Task[None]] = set()
        self._driver_subscription = driver.on_update(self._on_driver_update)

    async def load_data(self) -> Result[bool, Exception]:
        try:
            document = await self._driver.hydrate()
        except Exception as exc:  # noqa: BLE001
            return Err(VariableError(self.build_log_str(f"failed to hydrate store: {exc}"), cause=exc))
        self.init_data(document.data if document is not None else {})
        self.logger.info(self.build_log_str(f"Loaded {len(self._data)} entries from store"))
        return Ok(True)

    async def set(self, lookup_key: str, value: str | None) -> Result[None, Exception]:
        res = await super().set(lookup_key, value)
        if res.is_err():
            return res
        return await self._write_store()

    async def clear(self) -> Result[None, Exception]:
        res = await super().clear()
        if res.is_err():
            return res
        try:
            await self._driver.clear()
        except Exception as exc:  # noqa: BLE001
            return Err(VariableError(self.build_log_str(f"failed to clear store: {exc}"), cause=exc))
        return Ok()

    async def close(self) -> None:
        """Stop following driver updates and wait for pending reloads."""
        self._driver_subscription.unsubscribe()
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    async def _write_store(self) -> Result[None, Exception]:
        document = StoreDocument(data=self.get_data())
        try:
            await self._driver.store(document)
        except Exception as exc:  # noqa: BLE001
            return Err(VariableError(self.build_log_str(f"failed to write store: {exc}"), cause=exc))
        self.logger.info(self.build_log_str(f"Stored {len(document.data)} entries to store"))
        return Ok()

    def _on_driver_update(self) -> None:
        task = asyncio.ensure_future(self._reload_from_driver())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _reload_from_driver(self) -> None:
        res = await self.reload()
        if res.is_err():
            self.logger.warning(self.build_log_str(f"failed to reload store after update: {res.error}"))


__all__ = ["FileStorageDriver", "StorageDriver", "StoreConfigLoader", "StoreDocument"]
