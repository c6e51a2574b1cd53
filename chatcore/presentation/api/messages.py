"""
Messages API Router - operations addressed by message id.
"""

from logging import getLogger
from typing import Optional
from fastapi import APIRouter, Depends
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel
from chatcore.application.commands.messages import (
    DeleteMessageCommand,
    DeleteMessageHandler,
    DeleteMessagesCommand,
    DeleteMessagesHandler,
    ToggleReactionCommand,
    ToggleReactionHandler,
)
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.presentation.dependencies.auth import get_current_caller

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class BulkDeleteRequest(BaseModel):
    message_ids: list[str]


class BulkDeleteResponse(BaseModel):
    deleted: int


class ToggleReactionRequest(BaseModel):
    emoji: str


class ToggleReactionResponse(BaseModel):
    """True when the caller's reaction exists after the toggle."""

    reacted: bool


class SuccessResponse(BaseModel):
    success: bool


# ==================== ROUTER ====================

router = APIRouter(prefix="/messages", tags=["messages"])


# ==================== ENDPOINTS ====================


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
@inject
async def bulk_delete(
    request: BulkDeleteRequest,
    handler: FromDishka[DeleteMessagesHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    """Soft-delete the caller's own messages; other ids are skipped."""
    deleted = await handler.execute(
        DeleteMessagesCommand(caller=caller, message_ids=tuple(request.message_ids))
    )
    return BulkDeleteResponse(deleted=deleted)


@router.delete("/{message_id}", response_model=SuccessResponse)
@inject
async def delete_message(
    message_id: str,
    handler: FromDishka[DeleteMessageHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    await handler.execute(DeleteMessageCommand(caller=caller, message_id=MessageId(message_id)))
    return SuccessResponse(success=True)


@router.post("/{message_id}/reactions", response_model=ToggleReactionResponse)
@inject
async def toggle_reaction(
    message_id: str,
    request: ToggleReactionRequest,
    handler: FromDishka[ToggleReactionHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    reacted = await handler.execute(
        ToggleReactionCommand(
            caller=caller, message_id=MessageId(message_id), emoji=request.emoji
        )
    )
    return ToggleReactionResponse(reacted=reacted)
