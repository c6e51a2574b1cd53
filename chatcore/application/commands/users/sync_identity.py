"""
Sync Identity Command.

Upsert-by-token of the caller's profile, called by the UI after every sign-in.
- First sync creates an online User
- Later syncs overwrite name/email/image and force is_online = True
"""

import logging
from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.domain.entities.user import User
from chatcore.domain.exceptions import UnauthenticatedError
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import UserRepository
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_email import UserEmail
from chatcore.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncIdentityCommand(Command[UserId]):
    caller: Optional[TokenIdentifier]
    email: UserEmail
    name: Optional[str] = None
    image: Optional[str] = None


class SyncIdentityHandler(CommandHandler[UserId]):
    def __init__(self, user_repository: UserRepository, lock_manager: LockManager):
        self._user_repository = user_repository
        self._locks = lock_manager

    async def execute(self, command: SyncIdentityCommand) -> UserId:
        if command.caller is None:
            raise UnauthenticatedError("Called sync without authenticated user")

        async with self._locks.hold(f"identity:{command.caller.value}"):
            existing = await self._user_repository.get_by_token(command.caller)
            if existing:
                existing.update_profile(command.email, command.name, command.image)
                await self._user_repository.save(existing)
                return existing.id

            user = User.create(
                token_identifier=command.caller,
                email=command.email,
                name=command.name,
                image=command.image,
            )
            await self._user_repository.save(user)
            logger.info(f"Created user {user.id.value} for {command.caller.value}")
            return user.id
