"""
Message Entity - A single message in a conversation timeline.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from chatcore.domain.exceptions import InvalidOperationError
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.read_receipts import ReadReceipts
from chatcore.domain.value_objects.user_id import UserId

DELETED_MESSAGE_PLACEHOLDER = "This message was deleted"


@dataclass
class Message:
    id: MessageId
    conversation_id: ConversationId
    sender_id: UserId
    content: str
    created_at: datetime
    is_deleted: bool = False
    read_by: ReadReceipts = field(default_factory=ReadReceipts)
    reply_to_id: Optional[MessageId] = None

    @classmethod
    def create(
        cls,
        conversation_id: ConversationId,
        sender_id: UserId,
        content: str,
        reply_to_id: Optional[MessageId] = None,
    ) -> Message:
        """Factory method to create a new Message with a generated ID and timestamp."""
        if not content or not content.strip():
            raise InvalidOperationError("Message content cannot be empty")
        return cls(
            id=MessageId(str(uuid4())),
            conversation_id=conversation_id,
            sender_id=sender_id,
            content=content,
            created_at=datetime.now(timezone.utc),
            reply_to_id=reply_to_id,
        )

    def soft_delete(self) -> None:
        self.content = DELETED_MESSAGE_PLACEHOLDER
        self.is_deleted = True

    def is_read_by(self, user_id: UserId) -> bool:
        return user_id in self.read_by

    def is_unread_for(self, user_id: UserId) -> bool:
        return self.sender_id != user_id and not self.is_read_by(user_id)

    def mark_read_by(self, user_id: UserId) -> bool:
        """Record a read receipt. Returns True if the receipts changed."""
        updated = self.read_by.with_reader(user_id, self.sender_id)
        if updated is self.read_by:
            return False
        self.read_by = updated
        return True
