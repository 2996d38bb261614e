"""Update notifications with first-class unsubscription."""

from __future__ import annotations

from typing import Callable

__all__ = ["Subscription", "UpdateEmitter", "UpdateListener"]

UpdateListener = Callable[[], None]


class Subscription:
    """Handle returned by :meth:`UpdateEmitter.on_update`."""

    __slots__ = ("_emitter", "_listener")

    def __init__(self, emitter: "UpdateEmitter", listener: UpdateListener) -> None:
        self._emitter: UpdateEmitter | None = emitter
        self._listener = listener

    @property
    def active(self) -> bool:
        return self._emitter is not None

    def unsubscribe(self) -> None:
        if self._emitter is not None:
            self._emitter._remove(self)
            self._emitter = None


class UpdateEmitter:
    """Calls registered listeners, in registration order, on :meth:`emit`."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def on_update(self, listener: UpdateListener) -> Subscription:
        subscription = Subscription(self, listener)
        self._subscriptions.append(subscription)
        return subscription

    def emit(self) -> None:
        for subscription in list(self._subscriptions):
            subscription._listener()

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
