"""Loaders – MemoryLoader."""
from __future__ import annotations

from typing import Any, Mapping

from mp_envkit.kernel.types import Ok, Result
from mp_envkit.loaders.map_loader import MapLoader


class MemoryLoader(MapLoader):
    """In-process loader seeded with *initial_data*.

    :meth:`reload` restores the construction-time snapshot, discarding any
    values written with :meth:`set`::

        loader = MemoryLoader({"PORT": "8080"})
        await loader.set("PORT", "9090")
        await loader.reload()   # PORT is "8080" again
    """

    def __init__(
        self,
        initial_data: Mapping[str, str] | None = None,
        *,
        loader_type: str = "memory",
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.loader_type = loader_type
        self._initial_data: dict[str, str] = dict(initial_data or {})
        self.init_data(self._initial_data)

    async def load_data(self) -> Result[bool, Exception]:
        self.init_data(self._initial_data)
        return Ok(True)


__all__ = ["MemoryLoader"]
