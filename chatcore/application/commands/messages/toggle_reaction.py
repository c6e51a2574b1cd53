"""
Toggle Reaction Command.

Deletes the caller's (message, emoji) reaction if present, inserts it
otherwise. Two toggles cancel out. Returns True when the reaction now exists.
"""

from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.entities.reaction import Reaction
from chatcore.domain.exceptions import EntityNotFoundError
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import MessageRepository, ReactionRepository
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier


@dataclass(frozen=True)
class ToggleReactionCommand(Command[bool]):
    caller: Optional[TokenIdentifier]
    message_id: MessageId
    emoji: str


class ToggleReactionHandler(CommandHandler[bool]):
    def __init__(
        self,
        identity: IdentityResolver,
        message_repository: MessageRepository,
        reaction_repository: ReactionRepository,
        lock_manager: LockManager,
    ):
        self._identity = identity
        self._messages = message_repository
        self._reactions = reaction_repository
        self._locks = lock_manager

    async def execute(self, command: ToggleReactionCommand) -> bool:
        me = await self._identity.require_caller(command.caller)
        if not await self._messages.get_by_id(command.message_id):
            raise EntityNotFoundError("Message not found")

        async with self._locks.message(command.message_id):
            existing = await self._reactions.find(command.message_id, me.id, command.emoji)
            if existing:
                await self._reactions.delete(existing.id)
                return False

            await self._reactions.save(
                Reaction.create(command.message_id, me.id, command.emoji)
            )
            return True
