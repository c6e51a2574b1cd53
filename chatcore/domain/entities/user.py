"""
User Entity - An application user, keyed by the identity provider's token.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_email import UserEmail
from chatcore.domain.value_objects.user_id import UserId


@dataclass
class User:
    # Required fields (no defaults) - must come first
    id: UserId
    email: UserEmail
    token_identifier: TokenIdentifier
    is_online: bool
    # Optional fields (with defaults) - must come last
    name: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        token_identifier: TokenIdentifier,
        email: UserEmail,
        name: Optional[str] = None,
        image: Optional[str] = None,
    ) -> User:
        """First sync of an identity: the user starts out online."""
        return cls(
            id=UserId(str(uuid4())),
            email=email,
            token_identifier=token_identifier,
            is_online=True,
            name=name,
            image=image,
        )

    def update_profile(
        self, email: UserEmail, name: Optional[str], image: Optional[str]
    ) -> None:
        self.email = email
        self.name = name
        self.image = image
        self.is_online = True

    def set_online(self, is_online: bool) -> None:
        self.is_online = is_online
