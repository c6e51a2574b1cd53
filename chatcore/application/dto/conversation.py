"""Conversation DTOs for API response."""

from __future__ import annotations
from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from chatcore.application.dto.user import MemberDTO, UserDTO
from chatcore.domain.entities.message import Message


class LastMessageDTO(BaseModel):
    id: str
    sender_id: str
    content: str
    is_deleted: bool = False
    created_at: datetime

    @classmethod
    def from_entity(cls, message: Message) -> LastMessageDTO:
        return cls(
            id=message.id.value,
            sender_id=message.sender_id.value,
            content=message.content,
            is_deleted=message.is_deleted,
            created_at=message.created_at,
        )


class ConversationSummaryDTO(BaseModel):
    """One inbox row, annotated for the caller."""

    id: str
    is_group: bool
    group_name: Optional[str] = None
    created_at: datetime
    other_user: Optional[UserDTO] = None
    group_members: list[MemberDTO] = []
    member_count: int
    last_message: Optional[LastMessageDTO] = None
    unread_count: int = 0

    @property
    def activity_at(self) -> datetime:
        return self.last_message.created_at if self.last_message else self.created_at


class GroupDetailsDTO(BaseModel):
    group_name: Optional[str] = None
    am_i_admin: bool
    members: list[MemberDTO]
    needs_admin_claim: bool
