"""Config secrets – SecretRef and SecretStore port."""
from __future__ import annotations

import abc
import dataclasses


@dataclasses.dataclass(frozen=True)
class SecretRef:
    """Reference to a secret stored externally."""
    path: str
    key: str
    version: str | None = None

    @classmethod
    def parse(cls, name: str) -> "SecretRef":
        """``"db/password"`` → ``SecretRef("db", "password")``; bare names have no path."""
        path, _, key = name.rpartition("/")
        return cls(path=path, key=key)

    def __str__(self) -> str:
        return f"{self.path}/{self.key}" if self.path else self.key


class SecretStore(abc.ABC):
    """Port: retrieve secrets from a backend."""

    #: Human-readable location of the backend, used in log lines and value paths.
    source: str = "secrets"

    @abc.abstractmethod
    async def get(self, ref: SecretRef) -> str: ...

    @abc.abstractmethod
    async def get_all(self, path: str) -> dict[str, str]: ...

    def location(self, ref: SecretRef) -> str:
        return f"{self.source.rstrip('/')}/{ref}"


__all__ = ["SecretRef", "SecretStore"]
