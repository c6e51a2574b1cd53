"""
Conversations API Router - inbox, direct conversations and per-conversation
timelines (messages, read receipts, typing).

Flow:
  HTTP Request → Router → Command/Query → Handler → Repository → Store
                                 ↓
  HTTP Response ← Router ← Result ←
"""

from logging import getLogger
from typing import Optional
from fastapi import APIRouter, Depends, status
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel
from chatcore.application.commands.conversations import (
    GetOrCreateDirectCommand,
    GetOrCreateDirectHandler,
)
from chatcore.application.commands.messages import (
    MarkAsReadCommand,
    MarkAsReadHandler,
    SendMessageCommand,
    SendMessageHandler,
)
from chatcore.application.commands.presence import SetTypingCommand, SetTypingHandler
from chatcore.application.dto.conversation import ConversationSummaryDTO
from chatcore.application.dto.message import MessageViewDTO
from chatcore.application.dto.user import UserDTO
from chatcore.application.queries.conversations import (
    ListMyConversationsHandler,
    ListMyConversationsQuery,
)
from chatcore.application.queries.messages import ListMessagesHandler, ListMessagesQuery
from chatcore.application.queries.presence import (
    ListTypingUsersHandler,
    ListTypingUsersQuery,
)
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_id import UserId
from chatcore.presentation.dependencies.auth import get_current_caller

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class CreateDirectRequest(BaseModel):
    other_user_id: str


class IdResponse(BaseModel):
    id: str


class SendMessageRequest(BaseModel):
    content: str
    reply_to_id: Optional[str] = None


class MarkAsReadResponse(BaseModel):
    """Number of messages newly marked as read."""

    updated: int


class SetTypingRequest(BaseModel):
    is_typing: bool


class SuccessResponse(BaseModel):
    success: bool


# ==================== ROUTER ====================

router = APIRouter(prefix="/conversations", tags=["conversations"])


# ==================== ENDPOINTS ====================


@router.post("/direct", response_model=IdResponse, status_code=status.HTTP_200_OK)
@inject
async def get_or_create_direct(
    request: CreateDirectRequest,
    handler: FromDishka[GetOrCreateDirectHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    """Return the direct conversation with another user, creating it once."""
    conversation_id = await handler.execute(
        GetOrCreateDirectCommand(caller=caller, other_user_id=UserId(request.other_user_id))
    )
    return IdResponse(id=conversation_id.value)


@router.get("", response_model=list[ConversationSummaryDTO])
@inject
async def list_my_conversations(
    handler: FromDishka[ListMyConversationsHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    """Inbox, most recent activity first."""
    return await handler.execute(ListMyConversationsQuery(caller=caller))


@router.post("/{conversation_id}/read", response_model=MarkAsReadResponse)
@inject
async def mark_as_read(
    conversation_id: str,
    handler: FromDishka[MarkAsReadHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    updated = await handler.execute(
        MarkAsReadCommand(caller=caller, conversation_id=ConversationId(conversation_id))
    )
    return MarkAsReadResponse(updated=updated)


@router.post(
    "/{conversation_id}/messages",
    response_model=IdResponse,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def send_message(
    conversation_id: str,
    request: SendMessageRequest,
    handler: FromDishka[SendMessageHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    message_id = await handler.execute(
        SendMessageCommand(
            caller=caller,
            conversation_id=ConversationId(conversation_id),
            content=request.content,
            reply_to_id=MessageId(request.reply_to_id) if request.reply_to_id else None,
        )
    )
    return IdResponse(id=message_id.value)


@router.get("/{conversation_id}/messages", response_model=list[MessageViewDTO])
@inject
async def list_messages(
    conversation_id: str,
    handler: FromDishka[ListMessagesHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    """Full timeline, oldest first. Empty for non-members."""
    return await handler.execute(
        ListMessagesQuery(caller=caller, conversation_id=ConversationId(conversation_id))
    )


@router.put("/{conversation_id}/typing", response_model=SuccessResponse)
@inject
async def set_typing(
    conversation_id: str,
    request: SetTypingRequest,
    handler: FromDishka[SetTypingHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    await handler.execute(
        SetTypingCommand(
            caller=caller,
            conversation_id=ConversationId(conversation_id),
            is_typing=request.is_typing,
        )
    )
    return SuccessResponse(success=True)


@router.get("/{conversation_id}/typing", response_model=list[UserDTO])
@inject
async def list_typing(
    conversation_id: str,
    handler: FromDishka[ListTypingUsersHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    return await handler.execute(
        ListTypingUsersQuery(caller=caller, conversation_id=ConversationId(conversation_id))
    )
