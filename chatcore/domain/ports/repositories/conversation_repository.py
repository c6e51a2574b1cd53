"""
Conversation Repository Port - Interface for conversation persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional
from chatcore.domain.entities.conversation import Conversation
from chatcore.domain.value_objects.conversation_id import ConversationId


class ConversationRepository(ABC):
    @abstractmethod
    async def get_by_id(
        self, conversation_id: ConversationId
    ) -> Optional[Conversation]: ...

    @abstractmethod
    async def get_by_direct_key(self, direct_key: str) -> Optional[Conversation]: ...

    @abstractmethod
    async def save(self, conversation: Conversation) -> None: ...
