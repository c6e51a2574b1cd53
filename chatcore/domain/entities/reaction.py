"""
Reaction Entity - One user's emoji on one message. Inserted or deleted, never updated.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from chatcore.domain.exceptions import InvalidOperationError
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class Reaction:
    id: str
    message_id: MessageId
    user_id: UserId
    emoji: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, message_id: MessageId, user_id: UserId, emoji: str) -> Reaction:
        if not emoji or not emoji.strip():
            raise InvalidOperationError("Emoji cannot be empty")
        return cls(id=str(uuid4()), message_id=message_id, user_id=user_id, emoji=emoji)
