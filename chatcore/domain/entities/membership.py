"""
Membership Entity - Joins one user to one conversation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.user_id import UserId


@dataclass
class Membership:
    id: str
    user_id: UserId
    conversation_id: ConversationId
    is_admin: bool = False  # groups only; direct conversations never set it
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls, user_id: UserId, conversation_id: ConversationId, is_admin: bool = False
    ) -> Membership:
        return cls(
            id=str(uuid4()),
            user_id=user_id,
            conversation_id=conversation_id,
            is_admin=is_admin,
        )

    def promote(self) -> None:
        self.is_admin = True

    def demote(self) -> None:
        self.is_admin = False
