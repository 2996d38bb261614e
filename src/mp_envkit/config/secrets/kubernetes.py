"""Config secrets – KubernetesSecretStore."""
from __future__ import annotations

import asyncio
import pathlib

from mp_envkit.config.secrets.port import SecretRef, SecretStore


class KubernetesSecretStore(SecretStore):
    """Reads secrets from files mounted under *mount_root*."""

    def __init__(self, mount_root: str = "/var/run/secrets") -> None:
        self._root = pathlib.Path(mount_root)
        self.source = mount_root

    async def get(self, ref: SecretRef) -> str:
        return await asyncio.get_running_loop().run_in_executor(None, self._sync_get, ref)

    def _sync_get(self, ref: SecretRef) -> str:
        secret_path = self._root / ref.path / ref.key
        if not secret_path.is_file():
            raise FileNotFoundError(f"Secret not found: {secret_path}")
        return secret_path.read_text().strip()

    async def get_all(self, path: str) -> dict[str, str]:
        return await asyncio.get_running_loop().run_in_executor(None, self._sync_get_all, path)

    def _sync_get_all(self, path: str) -> dict[str, str]:
        base = self._root / path
        return {f.name: f.read_text().strip() for f in base.iterdir() if f.is_file()}


__all__ = ["KubernetesSecretStore"]
