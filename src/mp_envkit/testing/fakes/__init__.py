"""Testing fakes – in-memory doubles for loader collaborators."""
from mp_envkit.testing.fakes.clock import FakeClock
from mp_envkit.testing.fakes.request_cache import InMemoryRequestCache
from mp_envkit.testing.fakes.secrets import FakeSecretStore
from mp_envkit.testing.fakes.storage import InMemoryStorageDriver

__all__ = [
    "FakeClock",
    "FakeSecretStore",
    "InMemoryRequestCache",
    "InMemoryStorageDriver",
]
