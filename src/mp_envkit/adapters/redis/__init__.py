"""Redis adapter – storage driver."""
from mp_envkit.adapters.redis.store import RedisStorageDriver

__all__ = ["RedisStorageDriver"]
