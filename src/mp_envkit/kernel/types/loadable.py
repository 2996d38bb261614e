"""Loadable[T] — a value known now, or one produced on demand.

Options such as a loader's ``disabled`` flag or a schema default may be
given either as a plain value or as a deferred producer. The two kinds are
declared explicitly and resolved through a single ``resolve()`` step::

    Immediate(True)
    Deferred(lambda: os.environ.get("FEATURE_OFF") == "1")
    Deferred(fetch_flag_async)
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Generic, TypeVar

from mp_envkit.kernel.types.result import Err, Ok, Result

T = TypeVar("T")


class Immediate(Generic[T]):
    """A value that is already known."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    async def resolve(self) -> T:
        return self._value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Immediate) and other._value == self._value

    def __hash__(self) -> int:
        return hash(("Immediate", self._value))

    def __repr__(self) -> str:
        return f"Immediate({self._value!r})"


class Deferred(Generic[T]):
    """A zero-argument producer, sync or async, called on every resolve."""

    __slots__ = ("_producer",)

    def __init__(self, producer: Callable[[], T | Awaitable[T]]) -> None:
        self._producer = producer

    async def resolve(self) -> T:
        value = self._producer()
        if inspect.isawaitable(value):
            return await value
        return value  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"Deferred({self._producer!r})"


type Loadable[T] = Immediate[T] | Deferred[T]


def as_loadable(value: Any) -> Loadable[Any]:
    """Wrap a plain value in :class:`Immediate`; loadables pass through."""
    if isinstance(value, (Immediate, Deferred)):
        return value
    return Immediate(value)


async def resolve_result(loadable: Loadable[T]) -> Result[T, Exception]:
    """Resolve *loadable*, capturing producer failures as ``Err``."""
    try:
        return Ok(await loadable.resolve())
    except Exception as exc:  # noqa: BLE001
        return Err(exc)


__all__ = ["Deferred", "Immediate", "Loadable", "as_loadable", "resolve_result"]
