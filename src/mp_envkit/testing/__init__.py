"""Testing support – fakes for loader collaborators.

Usage::

    from mp_envkit.testing import FakeSecretStore, InMemoryStorageDriver
"""

from mp_envkit.testing.fakes import (
    FakeClock,
    FakeSecretStore,
    InMemoryRequestCache,
    InMemoryStorageDriver,
)

__all__ = [
    "FakeClock",
    "FakeSecretStore",
    "InMemoryRequestCache",
    "InMemoryStorageDriver",
]
