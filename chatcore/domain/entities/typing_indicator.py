"""
TypingIndicator Entity - Short-lived "is typing" signal, expired lazily at read time.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import uuid4

from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.user_id import UserId


@dataclass
class TypingIndicator:
    id: str
    conversation_id: ConversationId
    user_id: UserId
    expires_at: datetime

    @classmethod
    def start(
        cls,
        conversation_id: ConversationId,
        user_id: UserId,
        now: datetime,
        ttl_seconds: float,
    ) -> TypingIndicator:
        return cls(
            id=str(uuid4()),
            conversation_id=conversation_id,
            user_id=user_id,
            expires_at=now + timedelta(seconds=ttl_seconds),
        )

    def refresh(self, now: datetime, ttl_seconds: float) -> None:
        self.expires_at = now + timedelta(seconds=ttl_seconds)

    def is_active(self, now: datetime) -> bool:
        return self.expires_at > now
