"""
Groups API Router - group lifecycle and admin governance.

All mutations except claim-admin require the caller to be an effective
admin; the handlers enforce it and the shared error handler maps refusals
to 403.
"""

from logging import getLogger
from typing import Optional
from fastapi import APIRouter, Depends, status
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel
from chatcore.application.commands.groups import (
    AddMemberCommand,
    AddMemberHandler,
    ClaimAdminCommand,
    ClaimAdminHandler,
    CreateGroupCommand,
    CreateGroupHandler,
    DemoteAdminCommand,
    DemoteAdminHandler,
    PromoteAdminCommand,
    PromoteAdminHandler,
    RemoveMemberCommand,
    RemoveMemberHandler,
    RenameGroupCommand,
    RenameGroupHandler,
)
from chatcore.application.dto.conversation import GroupDetailsDTO
from chatcore.application.queries.groups import GetGroupDetailsHandler, GetGroupDetailsQuery
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_id import UserId
from chatcore.presentation.dependencies.auth import get_current_caller

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class CreateGroupRequest(BaseModel):
    """The creator is always added as admin; member_ids are the other members."""

    name: str
    member_ids: list[str] = []


class CreateGroupResponse(BaseModel):
    id: str


class RenameGroupRequest(BaseModel):
    name: str


class MemberRequest(BaseModel):
    user_id: str


class SuccessResponse(BaseModel):
    success: bool


# ==================== ROUTER ====================

router = APIRouter(prefix="/groups", tags=["groups"])


# ==================== ENDPOINTS ====================


@router.post("", response_model=CreateGroupResponse, status_code=status.HTTP_201_CREATED)
@inject
async def create_group(
    request: CreateGroupRequest,
    handler: FromDishka[CreateGroupHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    conversation_id = await handler.execute(
        CreateGroupCommand(
            caller=caller,
            name=request.name,
            member_ids=tuple(UserId(member_id) for member_id in request.member_ids),
        )
    )
    return CreateGroupResponse(id=conversation_id.value)


@router.get("/{conversation_id}", response_model=Optional[GroupDetailsDTO])
@inject
async def get_group_details(
    conversation_id: str,
    handler: FromDishka[GetGroupDetailsHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    """Group header; null when the caller cannot see the group."""
    return await handler.execute(
        GetGroupDetailsQuery(caller=caller, conversation_id=ConversationId(conversation_id))
    )


@router.patch("/{conversation_id}", response_model=SuccessResponse)
@inject
async def rename_group(
    conversation_id: str,
    request: RenameGroupRequest,
    handler: FromDishka[RenameGroupHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    await handler.execute(
        RenameGroupCommand(
            caller=caller,
            conversation_id=ConversationId(conversation_id),
            name=request.name,
        )
    )
    return SuccessResponse(success=True)


@router.post(
    "/{conversation_id}/members",
    response_model=SuccessResponse,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def add_member(
    conversation_id: str,
    request: MemberRequest,
    handler: FromDishka[AddMemberHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    await handler.execute(
        AddMemberCommand(
            caller=caller,
            conversation_id=ConversationId(conversation_id),
            user_id=UserId(request.user_id),
        )
    )
    return SuccessResponse(success=True)


@router.delete("/{conversation_id}/members/{user_id}", response_model=SuccessResponse)
@inject
async def remove_member(
    conversation_id: str,
    user_id: str,
    handler: FromDishka[RemoveMemberHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    await handler.execute(
        RemoveMemberCommand(
            caller=caller,
            conversation_id=ConversationId(conversation_id),
            user_id=UserId(user_id),
        )
    )
    return SuccessResponse(success=True)


@router.post("/{conversation_id}/admins", response_model=SuccessResponse)
@inject
async def promote_to_admin(
    conversation_id: str,
    request: MemberRequest,
    handler: FromDishka[PromoteAdminHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    await handler.execute(
        PromoteAdminCommand(
            caller=caller,
            conversation_id=ConversationId(conversation_id),
            user_id=UserId(request.user_id),
        )
    )
    return SuccessResponse(success=True)


@router.delete("/{conversation_id}/admins/{user_id}", response_model=SuccessResponse)
@inject
async def demote_admin(
    conversation_id: str,
    user_id: str,
    handler: FromDishka[DemoteAdminHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    await handler.execute(
        DemoteAdminCommand(
            caller=caller,
            conversation_id=ConversationId(conversation_id),
            user_id=UserId(user_id),
        )
    )
    return SuccessResponse(success=True)


@router.post("/{conversation_id}/claim-admin", response_model=SuccessResponse)
@inject
async def claim_admin(
    conversation_id: str,
    handler: FromDishka[ClaimAdminHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    """Legacy groups only: the earliest member becomes the first admin."""
    await handler.execute(
        ClaimAdminCommand(caller=caller, conversation_id=ConversationId(conversation_id))
    )
    return SuccessResponse(success=True)
