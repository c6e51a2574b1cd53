"""
Redis lock manager: distributed locks shared by every worker process.

Uses redis-py's Lock (SET NX PX + token-checked release). A lock that cannot
be acquired within the blocking timeout surfaces as ConflictError so the
request fails with 409 instead of proceeding unserialized.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from redis.asyncio import Redis
from redis.exceptions import LockError

from chatcore.domain.exceptions import ConflictError
from chatcore.domain.ports.lock_manager import LockManager

logger = logging.getLogger(__name__)


class RedisLockManager(LockManager):
    def __init__(
        self,
        client: Redis,
        timeout: float = 10.0,
        blocking_timeout: float = 5.0,
        prefix: str = "chatcore:lock:",
    ):
        self._client = client
        self._timeout = timeout
        self._blocking_timeout = blocking_timeout
        self._prefix = prefix

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._client.lock(
            f"{self._prefix}{key}",
            timeout=self._timeout,
            blocking_timeout=self._blocking_timeout,
        )
        acquired = await lock.acquire()
        if not acquired:
            logger.warning(f"[Lock] Timed out waiting for {key}")
            raise ConflictError("Resource is busy, try again")
        try:
            yield
        finally:
            try:
                await lock.release()
            except LockError:
                # Expired before release; another holder may already own it
                logger.warning(f"[Lock] {key} expired before release")
