"""
Conversation Entity - A direct (two-party) or group chat.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from chatcore.domain.exceptions import InvalidOperationError
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.user_id import UserId


def direct_key_for(first: UserId, second: UserId) -> str:
    """Canonical key of an unordered user pair."""
    low, high = sorted([first.value, second.value])
    return f"{low}:{high}"


@dataclass
class Conversation:
    id: ConversationId
    is_group: bool
    group_name: Optional[str] = None
    last_message_id: Optional[MessageId] = None
    # Only set on direct conversations; older ones may not carry it.
    direct_key: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create_direct(cls, first: UserId, second: UserId) -> Conversation:
        if first == second:
            raise InvalidOperationError("Cannot message yourself")
        return cls(
            id=ConversationId(str(uuid4())),
            is_group=False,
            direct_key=direct_key_for(first, second),
        )

    @classmethod
    def create_group(cls, name: str) -> Conversation:
        return cls(
            id=ConversationId(str(uuid4())),
            is_group=True,
            group_name=cls._clean_name(name),
        )

    def rename(self, new_name: str) -> None:
        if not self.is_group:
            raise InvalidOperationError("Not a group")
        self.group_name = self._clean_name(new_name)

    def record_last_message(self, message_id: MessageId) -> None:
        self.last_message_id = message_id

    @staticmethod
    def _clean_name(name: str) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidOperationError("Group name cannot be empty")
        return cleaned
