"""Loaders – BaseLoader with disabled flag and override keys."""
from __future__ import annotations

import abc

from mp_envkit.kernel.types import Loadable, Ok, Result, as_loadable, resolve_result
from mp_envkit.loaders.port import ConfigLoader, LoaderValueResult, OverrideKeyMap


class BaseLoader(ConfigLoader):
    """Shared behaviour for every loader.

    Subclasses implement :meth:`get_raw_value`; :meth:`get_value_result`
    skips it entirely while the loader is disabled. A ``disabled`` flag that
    fails to resolve also counts as disabled.
    """

    loader_type: str = "base"

    def __init__(
        self,
        *,
        disabled: bool | Loadable[bool] = False,
        override_keys: OverrideKeyMap | None = None,
    ) -> None:
        self._disabled: Loadable[bool] = as_loadable(disabled)
        self._override_keys: dict[str, str] = dict(override_keys or {})

    def set_disabled(self, disabled: bool | Loadable[bool]) -> None:
        self._disabled = as_loadable(disabled)

    async def is_loader_disabled(self) -> Result[bool, Exception]:
        return (await resolve_result(self._disabled)).map(bool)

    async def get_value_result(self, lookup_key: str) -> Result[LoaderValueResult | None, Exception]:
        if (await self.is_loader_disabled()).unwrap_or(True):
            return Ok(None)
        return await self.get_raw_value(lookup_key)

    def get_override_key(self, key: str) -> str:
        return self._override_keys.get(key) or key

    def build_log_str(self, message: str) -> str:
        return f"ConfigLoader[{self.loader_type}]: {message}"

    @abc.abstractmethod
    async def get_raw_value(self, lookup_key: str) -> Result[LoaderValueResult, Exception]: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(loader_type={self.loader_type!r})"


__all__ = ["BaseLoader"]
