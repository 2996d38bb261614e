"""Kernel – in-process update notifications."""
from mp_envkit.kernel.events.emitter import Subscription, UpdateEmitter, UpdateListener

__all__ = ["Subscription", "UpdateEmitter", "UpdateListener"]
