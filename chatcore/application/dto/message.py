"""Message DTOs for API response."""

from datetime import datetime
from pydantic import BaseModel
from typing import Optional


class ReactionDTO(BaseModel):
    emoji: str
    count: int
    has_reacted: bool


class ReplyPreviewDTO(BaseModel):
    """Quoted message shown above a reply. Deleted quotes carry the placeholder."""

    id: str
    sender_name: str
    content: str
    is_deleted: bool = False


class MessageViewDTO(BaseModel):
    """DTO for message data returned to frontend."""

    id: str
    conversation_id: str
    sender_id: str
    sender_name: str
    sender_image: Optional[str] = None
    content: str
    is_deleted: bool = False
    is_me: bool = False
    read_by: list[str] = []
    created_at: datetime
    reply_to_id: Optional[str] = None
    reply_to: Optional[ReplyPreviewDTO] = None
    reactions: list[ReactionDTO] = []
