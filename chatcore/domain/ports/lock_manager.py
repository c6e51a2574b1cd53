"""
Lock Manager Port - Serializes read-check-write sequences.

Handlers wrap every sequence that must not interleave with a concurrent
request (last-admin checks, legacy admin claims, direct conversation
resolution, reaction toggles) in `hold(key)`.

Implementations:
- src: chatcore/infrastructure/locks/in_memory_lock_manager.py (single process)
- src: chatcore/infrastructure/locks/redis_lock_manager.py (shared across workers)
"""

from abc import ABC, abstractmethod
from typing import AsyncContextManager

from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.message_id import MessageId


class LockManager(ABC):
    @abstractmethod
    def hold(self, key: str) -> AsyncContextManager[None]: ...

    def conversation(self, conversation_id: ConversationId) -> AsyncContextManager[None]:
        return self.hold(f"conversation:{conversation_id.value}")

    def message(self, message_id: MessageId) -> AsyncContextManager[None]:
        return self.hold(f"message:{message_id.value}")

    def direct_pair(self, direct_key: str) -> AsyncContextManager[None]:
        return self.hold(f"direct:{direct_key}")
