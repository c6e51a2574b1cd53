"""
In-process lock manager: one asyncio.Lock per key.

Only serializes requests handled by the same event loop; run a single worker
with this backend or switch to LOCK_BACKEND=redis.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from chatcore.domain.ports.lock_manager import LockManager


class InMemoryLockManager(LockManager):
    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                # Nobody else holds or waits on this key
                del self._waiters[key]
                del self._locks[key]

    def active_keys(self) -> set[str]:
        return set(self._locks)
