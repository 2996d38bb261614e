"""Redis adapter – RedisStorageDriver."""
from __future__ import annotations

import asyncio
import uuid
from typing import Any

from mp_envkit.kernel.events import Subscription, UpdateEmitter, UpdateListener
from mp_envkit.loaders.store import StorageDriver, StoreDocument


def _require_redis() -> Any:
    try:
        import redis.asyncio as aioredis
        return aioredis
    except ImportError as exc:
        raise ImportError("Install 'mp-envkit[redis]' to use the Redis adapter") from exc


class RedisStorageDriver(StorageDriver):
    """Store the config document under one Redis key.

    Every write is announced on ``<key>:updated``. After :meth:`start`,
    announcements from other writers trigger ``on_update`` listeners.
    """

    def __init__(self, url: str, key: str = "mp-envkit:config", **kwargs: Any) -> None:
        aioredis = _require_redis()
        self._client = aioredis.from_url(url, **kwargs)
        self._key = key
        self._channel = f"{key}:updated"
        self._instance_id = uuid.uuid4().hex
        self._updates = UpdateEmitter()
        self._pubsub: Any = None
        self._task: asyncio.Task[None] | None = None

    async def hydrate(self) -> StoreDocument | None:
        raw = await self._client.get(self._key)
        if raw is None:
            return None
        return StoreDocument.model_validate_json(raw)

    async def store(self, document: StoreDocument) -> None:
        await self._client.set(self._key, document.to_json())
        await self._client.publish(self._channel, self._instance_id)

    async def clear(self) -> None:
        await self._client.delete(self._key)
        await self._client.publish(self._channel, self._instance_id)

    def on_update(self, listener: UpdateListener) -> Subscription:
        return self._updates.on_update(listener)

    async def start(self) -> None:
        """Subscribe to update announcements from other writers."""
        if self._task is not None:
            return
        self._pubsub = self._client.pubsub()
        await self._pubsub.subscribe(self._channel)
        self._task = asyncio.create_task(self._listen())

    async def _listen(self) -> None:
        async for message in self._pubsub.listen():
            if message.get("type") != "message":
                continue
            sender = message.get("data")
            if isinstance(sender, bytes):
                sender = sender.decode()
            if sender != self._instance_id:
                self._updates.emit()

    async def close(self) -> None:
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._pubsub is not None:
            await self._pubsub.aclose()
            self._pubsub = None
        await self._client.aclose()


__all__ = ["RedisStorageDriver"]
