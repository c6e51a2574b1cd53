"""
Mark As Read Command.

Adds the caller to read_by of every message they did not send and have not
read yet. No-op for anonymous callers. Returns the number of messages updated.
"""

from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import MessageRepository
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier


@dataclass(frozen=True)
class MarkAsReadCommand(Command[int]):
    caller: Optional[TokenIdentifier]
    conversation_id: ConversationId


class MarkAsReadHandler(CommandHandler[int]):
    def __init__(
        self,
        identity: IdentityResolver,
        message_repository: MessageRepository,
        lock_manager: LockManager,
    ):
        self._identity = identity
        self._messages = message_repository
        self._locks = lock_manager

    async def execute(self, command: MarkAsReadCommand) -> int:
        me = await self._identity.resolve_caller(command.caller)
        if not me:
            return 0

        updated = 0
        async with self._locks.conversation(command.conversation_id):
            for message in await self._messages.get_by_conversation(command.conversation_id):
                if message.mark_read_by(me.id):
                    await self._messages.save(message)
                    updated += 1
        return updated
