"""Delete Message Command - soft delete, sender only."""

import logging
from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.exceptions import AccessDeniedError, EntityNotFoundError
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import MessageRepository
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteMessageCommand(Command[None]):
    caller: Optional[TokenIdentifier]
    message_id: MessageId


class DeleteMessageHandler(CommandHandler[None]):
    def __init__(
        self,
        identity: IdentityResolver,
        message_repository: MessageRepository,
        lock_manager: LockManager,
    ):
        self._identity = identity
        self._messages = message_repository
        self._locks = lock_manager

    async def execute(self, command: DeleteMessageCommand) -> None:
        me = await self._identity.require_caller(command.caller)
        async with self._locks.message(command.message_id):
            message = await self._messages.get_by_id(command.message_id)
            if not message:
                raise EntityNotFoundError("Message not found")
            if message.sender_id != me.id:
                raise AccessDeniedError("Can only delete your own messages")

            message.soft_delete()
            await self._messages.save(message)

        logger.info(f"Message {command.message_id.value} deleted by {me.id.value}")
