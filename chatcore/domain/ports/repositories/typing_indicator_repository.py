"""
TypingIndicator Repository Port - Interface for typing presence persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional

from chatcore.domain.entities.typing_indicator import TypingIndicator
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.user_id import UserId


class TypingIndicatorRepository(ABC):
    @abstractmethod
    async def get(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Optional[TypingIndicator]: ...

    @abstractmethod
    async def get_by_conversation(
        self, conversation_id: ConversationId
    ) -> list[TypingIndicator]: ...

    @abstractmethod
    async def save(self, indicator: TypingIndicator) -> None: ...

    @abstractmethod
    async def delete(self, indicator_id: str) -> bool: ...
