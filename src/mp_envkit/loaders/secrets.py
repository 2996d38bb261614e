"""Loaders – SecretStoreConfigLoader.

Only keys listed in the key → secret-name map are ever fetched, one secret
at a time on first lookup. A failed fetch is logged and the key resolves
to no value until the error TTL runs out.
"""
from __future__ import annotations

import time
from typing import Any, Callable, ClassVar, Mapping

from mp_envkit.config.secrets import SecretRef, SecretStore
from mp_envkit.kernel.types import Ok, Result
from mp_envkit.loaders.map_loader import MAP_LOADER_LOG_MAP, MapLoader
from mp_envkit.loaders.port import LoaderValueResult
from mp_envkit.observability.logging import LogLevel

SECRET_LOADER_LOG_MAP: Mapping[str, LogLevel | None] = {
    **MAP_LOADER_LOG_MAP,
    "secret": "info",
    "secret_error": "error",
}


class SecretStoreConfigLoader(MapLoader):
    """Resolve keys from a :class:`SecretStore`.

    Parameters
    ----------
    store:
        Backend to read secrets from.
    key_secret_map:
        Lookup key → secret name (``"path/key"``) or :class:`SecretRef`.
        Keys mapped to ``None`` or absent are never fetched.
    expire_seconds:
        Lifetime of a fetched value; ``None`` keeps it until :meth:`reload`.
    error_expire_seconds:
        Lifetime of a failed fetch; ``0`` retries on every lookup.
    """

    loader_type = "secret-store"
    default_log_map: ClassVar[Mapping[str, LogLevel | None]] = SECRET_LOADER_LOG_MAP

    def __init__(
        self,
        store: SecretStore,
        key_secret_map: Mapping[str, str | SecretRef | None],
        *,
        expire_seconds: float | None = None,
        error_expire_seconds: float | None = 0,
        loader_type: str | None = None,
        clock: Callable[[], float] = time.monotonic,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if loader_type is not None:
            self.loader_type = loader_type
        self._store = store
        self._refs: dict[str, SecretRef] = {
            key: name if isinstance(name, SecretRef) else SecretRef.parse(name)
            for key, name in key_secret_map.items()
            if name
        }
        self.expire_seconds = expire_seconds
        self.error_expire_seconds = error_expire_seconds
        self._clock = clock
        self._expires: dict[str, float | None] = {}

    async def load_data(self) -> Result[bool, Exception]:
        self._expires.clear()
        self.init_data({})
        return Ok(True)

    async def get_raw_value(self, lookup_key: str) -> Result[LoaderValueResult, Exception]:
        key = self.get_override_key(lookup_key)
        ref = self._refs.get(key)
        if ref is None:
            return Ok(LoaderValueResult(value=None, path=f"key:{key}"))
        ready = await self._ready()
        if ready.is_err():
            return ready
        if self._is_expired(key):
            await self._fetch_secret(key, ref)
        return Ok(LoaderValueResult(value=self._data.get(key), path=self._store.location(ref)))

    def _is_expired(self, key: str) -> bool:
        if key not in self._expires:
            return True
        expires_at = self._expires[key]
        return expires_at is not None and self._clock() >= expires_at

    def _expiry(self, ttl: float | None) -> float | None:
        return None if ttl is None else self._clock() + ttl

    async def _fetch_secret(self, key: str, ref: SecretRef) -> None:
        source = self._store.source
        self.logger.log_key("secret", self.build_log_str(f"getting {ref} from {source}"))
        try:
            value = await self._store.get(ref)
        except Exception as exc:  # noqa: BLE001
            self.logger.log_key(
                "secret_error",
                self.build_log_str(f'error loading secret "{ref}" from {source}: {exc}'),
            )
            self._data[key] = None
            self._expires[key] = self._expiry(self.error_expire_seconds)
            return
        self.logger.log_key("secret", self.build_log_str(f"loaded secret {ref} from {source}"))
        self._data[key] = value
        self._expires[key] = self._expiry(self.expire_seconds)


__all__ = ["SECRET_LOADER_LOG_MAP", "SecretStoreConfigLoader"]
