"""
SendMessage Command - Append a message to a conversation timeline.

Handler:
1. Resolve caller
2. Verify caller is a member
3. Save the message (reply_to_id is stored as given; it is resolved at read time)
4. Point the conversation's last_message_id at it (inbox ordering)

The message is validated before anything is written, so a refused send
leaves nothing behind and the UI can safely retry with the restored draft.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.guards import assert_member
from chatcore.application.common.interfaces import Command, CommandHandler
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.entities.message import Message
from chatcore.domain.exceptions import EntityNotFoundError
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.ports.repositories import (
    ConversationRepository,
    MembershipRepository,
    MessageRepository,
)
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendMessageCommand(Command[MessageId]):
    caller: Optional[TokenIdentifier]
    conversation_id: ConversationId
    content: str
    reply_to_id: Optional[MessageId] = None


class SendMessageHandler(CommandHandler[MessageId]):
    def __init__(
        self,
        identity: IdentityResolver,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        message_repository: MessageRepository,
        lock_manager: LockManager,
    ):
        self._identity = identity
        self._conversations = conversation_repository
        self._memberships = membership_repository
        self._messages = message_repository
        self._locks = lock_manager

    async def execute(self, command: SendMessageCommand) -> MessageId:
        me = await self._identity.require_caller(command.caller)

        async with self._locks.conversation(command.conversation_id):
            await assert_member(self._memberships, command.conversation_id, me.id)
            message = Message.create(
                conversation_id=command.conversation_id,
                sender_id=me.id,
                content=command.content,
                reply_to_id=command.reply_to_id,
            )

            conversation = await self._conversations.get_by_id(command.conversation_id)
            if not conversation:
                raise EntityNotFoundError(
                    f"Conversation {command.conversation_id.value} not found"
                )
            await self._messages.save(message)
            conversation.record_last_message(message.id)
            await self._conversations.save(conversation)

        logger.debug(
            f"Message {message.id.value} sent to {command.conversation_id.value}"
        )
        return message.id
