"""
Membership Repository Port - Interface for conversation membership persistence.

(conversation_id, user_id) is unique; `get` relies on it.
"""

from abc import ABC, abstractmethod
from typing import Optional
from chatcore.domain.entities.membership import Membership
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.user_id import UserId


class MembershipRepository(ABC):
    @abstractmethod
    async def get(
        self, conversation_id: ConversationId, user_id: UserId
    ) -> Optional[Membership]: ...

    @abstractmethod
    async def list_by_conversation(
        self, conversation_id: ConversationId
    ) -> list[Membership]: ...

    @abstractmethod
    async def list_by_user(self, user_id: UserId) -> list[Membership]: ...

    @abstractmethod
    async def save(self, membership: Membership) -> None: ...

    @abstractmethod
    async def delete(self, membership_id: str) -> bool: ...
