from chatcore.infrastructure.locks.in_memory_lock_manager import InMemoryLockManager
from chatcore.infrastructure.locks.redis_lock_manager import RedisLockManager

__all__ = ["InMemoryLockManager", "RedisLockManager"]
