"""
Message Repository Port - Interface for message persistence.

Messages are never hard-deleted, so there is no delete method.
"""

from abc import ABC, abstractmethod
from typing import Optional

from chatcore.domain.entities.message import Message
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.conversation_id import ConversationId


class MessageRepository(ABC):
    @abstractmethod
    async def get_by_id(self, message_id: MessageId) -> Optional[Message]: ...

    @abstractmethod
    async def get_by_conversation(
        self, conversation_id: ConversationId
    ) -> list[Message]:
        """Full timeline, oldest first."""
        ...

    @abstractmethod
    async def save(self, message: Message) -> None: ...
