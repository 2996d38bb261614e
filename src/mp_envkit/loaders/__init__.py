"""Loaders — sources of raw configuration values.

Modules:
  port.py         — ConfigLoader, LoaderValueResult
  base.py         — BaseLoader (disabled flag, override keys)
  map_loader.py   — MapLoader (lazy single-flight cache)
  memory.py       — MemoryLoader
  env.py          — ProcessEnvLoader, ReactEnvLoader
  file.py         — FileMapLoader, JsonFileConfigLoader
  dotenv.py       — DotEnvConfigLoader
  fetch.py        — FetchConfigLoader, RequestCache
  secrets.py      — SecretStoreConfigLoader
  file_secrets.py — FileSecretsConfigLoader
  store.py        — StoreConfigLoader, StorageDriver, FileStorageDriver
"""

from mp_envkit.loaders.base import BaseLoader
from mp_envkit.loaders.dotenv import DotEnvConfigLoader
from mp_envkit.loaders.env import ProcessEnvLoader, ReactEnvLoader
from mp_envkit.loaders.fetch import FetchConfigLoader, RequestCache
from mp_envkit.loaders.file import FileMapLoader, JsonFileConfigLoader
from mp_envkit.loaders.file_secrets import FileSecretsConfigLoader
from mp_envkit.loaders.map_loader import MapLoader
from mp_envkit.loaders.memory import MemoryLoader
from mp_envkit.loaders.port import ConfigLoader, LoaderValueResult, OverrideKeyMap
from mp_envkit.loaders.secrets import SecretStoreConfigLoader
from mp_envkit.loaders.store import FileStorageDriver, StorageDriver, StoreConfigLoader, StoreDocument

__all__ = [
    "BaseLoader",
    "ConfigLoader",
    "DotEnvConfigLoader",
    "FetchConfigLoader",
    "FileMapLoader",
    "FileSecretsConfigLoader",
    "FileStorageDriver",
    "JsonFileConfigLoader",
    "LoaderValueResult",
    "MapLoader",
    "MemoryLoader",
    "OverrideKeyMap",
    "ProcessEnvLoader",
    "ReactEnvLoader",
    "RequestCache",
    "SecretStoreConfigLoader",
    "StorageDriver",
    "StoreConfigLoader",
    "StoreDocument",
]
