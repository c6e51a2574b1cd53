"""
DTOs - Data Transfer Objects

Caller-shaped projections computed fresh per request:
- user.py         → UserDTO, MemberDTO
- conversation.py → ConversationSummaryDTO, LastMessageDTO, GroupDetailsDTO
- message.py      → MessageViewDTO, ReactionDTO, ReplyPreviewDTO

Note: These are different from domain entities.
DTOs are for API output; `is_me`, `has_reacted` and `unread_count` only exist here.
"""

from chatcore.application.dto.user import UserDTO, MemberDTO
from chatcore.application.dto.conversation import (
    ConversationSummaryDTO,
    GroupDetailsDTO,
    LastMessageDTO,
)
from chatcore.application.dto.message import MessageViewDTO, ReactionDTO, ReplyPreviewDTO

__all__ = [
    "UserDTO",
    "MemberDTO",
    "ConversationSummaryDTO",
    "GroupDetailsDTO",
    "LastMessageDTO",
    "MessageViewDTO",
    "ReactionDTO",
    "ReplyPreviewDTO",
]
