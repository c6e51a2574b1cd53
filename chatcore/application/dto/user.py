"""User DTOs for API response."""

from __future__ import annotations
from pydantic import BaseModel
from typing import Optional

from chatcore.domain.entities.user import User


class UserDTO(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    image: Optional[str] = None
    is_online: bool

    @classmethod
    def from_entity(cls, user: User) -> UserDTO:
        return cls(
            id=user.id.value,
            name=user.name,
            email=user.email.value,
            image=user.image,
            is_online=user.is_online,
        )


class MemberDTO(BaseModel):
    """A user as listed inside a group, with their admin flag."""

    id: str
    name: Optional[str] = None
    image: Optional[str] = None
    is_online: bool
    is_admin: bool = False

    @classmethod
    def from_entity(cls, user: User, is_admin: bool) -> MemberDTO:
        return cls(
            id=user.id.value,
            name=user.name,
            image=user.image,
            is_online=user.is_online,
            is_admin=is_admin,
        )
