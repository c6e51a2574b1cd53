"""
Delete Messages Command - bulk soft delete.

Best effort, not atomic: ids that are missing, malformed, owned by someone
else or already deleted are skipped. Returns how many were deleted.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import MessageRepository
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeleteMessagesCommand(Command[int]):
    caller: Optional[TokenIdentifier]
    message_ids: tuple[str, ...] = field(default_factory=tuple)


class DeleteMessagesHandler(CommandHandler[int]):
    def __init__(
        self,
        identity: IdentityResolver,
        message_repository: MessageRepository,
        lock_manager: LockManager,
    ):
        self._identity = identity
        self._messages = message_repository
        self._locks = lock_manager

    async def execute(self, command: DeleteMessagesCommand) -> int:
        me = await self._identity.require_caller(command.caller)

        deleted = 0
        for raw_id in dict.fromkeys(command.message_ids):
            try:
                message_id = MessageId(raw_id)
            except ValueError:
                logger.debug(f"Skipping malformed message id {raw_id!r}")
                continue

            async with self._locks.message(message_id):
                message = await self._messages.get_by_id(message_id)
                if not message or message.sender_id != me.id or message.is_deleted:
                    continue
                message.soft_delete()
                await self._messages.save(message)
                deleted += 1

        logger.info(
            f"Bulk delete by {me.id.value}: {deleted} of {len(command.message_ids)}"
        )
        return deleted
