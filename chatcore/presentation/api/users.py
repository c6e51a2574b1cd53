"""
Users API Router - identity sync, online flag and the user directory.
"""

from logging import getLogger
from typing import Optional
from fastapi import APIRouter, Depends, status
from dishka.integrations.fastapi import FromDishka, inject
from pydantic import BaseModel
from chatcore.application.commands.users import (
    SetOnlineStatusCommand,
    SetOnlineStatusHandler,
    SyncIdentityCommand,
    SyncIdentityHandler,
)
from chatcore.application.dto.user import UserDTO
from chatcore.application.queries.users import SearchUsersHandler, SearchUsersQuery
from chatcore.config.settings import Config
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_email import UserEmail
from chatcore.presentation.dependencies.auth import get_current_caller

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class SyncIdentityRequest(BaseModel):
    """Profile fields from the identity provider."""

    email: str
    name: Optional[str] = None
    image: Optional[str] = None


class SyncIdentityResponse(BaseModel):
    id: str


class SetOnlineStatusRequest(BaseModel):
    is_online: bool


class SuccessResponse(BaseModel):
    success: bool


# ==================== ROUTER ====================

router = APIRouter(prefix="/users", tags=["users"])


# ==================== ENDPOINTS ====================


@router.post("/sync", response_model=SyncIdentityResponse, status_code=status.HTTP_200_OK)
@inject
async def sync_identity(
    request: SyncIdentityRequest,
    handler: FromDishka[SyncIdentityHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    """Create or refresh the caller's user record. Marks the caller online."""
    user_id = await handler.execute(
        SyncIdentityCommand(
            caller=caller,
            email=UserEmail(request.email),
            name=request.name,
            image=request.image,
        )
    )
    return SyncIdentityResponse(id=user_id.value)


@router.put("/me/online", response_model=SuccessResponse)
@inject
async def set_online_status(
    request: SetOnlineStatusRequest,
    handler: FromDishka[SetOnlineStatusHandler],
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    await handler.execute(SetOnlineStatusCommand(caller=caller, is_online=request.is_online))
    return SuccessResponse(success=True)


@router.get("", response_model=list[UserDTO])
@inject
async def search_users(
    handler: FromDishka[SearchUsersHandler],
    search: Optional[str] = None,
    caller: Optional[TokenIdentifier] = Depends(get_current_caller),
):
    """Directory of other users, optionally filtered by display name."""
    return await handler.execute(
        SearchUsersQuery(caller=caller, search_term=search, limit=Config.USER_SEARCH_LIMIT)
    )
