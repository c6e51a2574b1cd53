"""
Reaction Repository Port - Interface for reaction persistence.
"""

from abc import ABC, abstractmethod
from typing import Optional

from chatcore.domain.entities.reaction import Reaction
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.user_id import UserId


class ReactionRepository(ABC):
    @abstractmethod
    async def find(
        self, message_id: MessageId, user_id: UserId, emoji: str
    ) -> Optional[Reaction]: ...

    @abstractmethod
    async def get_by_message(self, message_id: MessageId) -> list[Reaction]: ...

    @abstractmethod
    async def save(self, reaction: Reaction) -> None: ...

    @abstractmethod
    async def delete(self, reaction_id: str) -> bool: ...
