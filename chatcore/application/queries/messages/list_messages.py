"""
List Messages Query - the full timeline of a conversation, oldest first.

Per message: sender display fields, `is_me`, reactions folded per emoji with
`has_reacted` for the caller, and a preview of the quoted message for
replies. A deleted quote shows the placeholder, a missing one shows nothing.
"""

from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.interfaces import Query, QueryHandler
from chatcore.application.dto.message import MessageViewDTO, ReactionDTO, ReplyPreviewDTO
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.entities.message import DELETED_MESSAGE_PLACEHOLDER, Message
from chatcore.domain.entities.user import User
from chatcore.domain.ports.repositories import (
    MembershipRepository,
    MessageRepository,
    ReactionRepository,
    UserRepository,
)
from chatcore.domain.services.reactions import summarize_reactions
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_id import UserId

UNKNOWN_SENDER = "Unknown"


@dataclass(frozen=True)
class ListMessagesQuery(Query[list[MessageViewDTO]]):
    caller: Optional[TokenIdentifier]
    conversation_id: ConversationId


class ListMessagesHandler(QueryHandler[list[MessageViewDTO]]):
    def __init__(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        membership_repository: MembershipRepository,
        message_repository: MessageRepository,
        reaction_repository: ReactionRepository,
    ):
        self._identity = identity
        self._users = user_repository
        self._memberships = membership_repository
        self._messages = message_repository
        self._reactions = reaction_repository

    async def execute(self, query: ListMessagesQuery) -> list[MessageViewDTO]:
        me = await self._identity.resolve_caller(query.caller)
        if not me:
            return []
        if not await self._memberships.get(query.conversation_id, me.id):
            return []

        messages = await self._messages.get_by_conversation(query.conversation_id)
        by_id = {m.id: m for m in messages}
        senders: dict[UserId, Optional[User]] = {}

        views = []
        for message in messages:
            sender = await self._sender(message.sender_id, senders)
            reactions = await self._reactions.get_by_message(message.id)
            views.append(
                MessageViewDTO(
                    id=message.id.value,
                    conversation_id=message.conversation_id.value,
                    sender_id=message.sender_id.value,
                    sender_name=(sender.name if sender else None) or UNKNOWN_SENDER,
                    sender_image=sender.image if sender else None,
                    content=message.content,
                    is_deleted=message.is_deleted,
                    is_me=message.sender_id == me.id,
                    read_by=message.read_by.to_list(),
                    created_at=message.created_at,
                    reply_to_id=message.reply_to_id.value if message.reply_to_id else None,
                    reply_to=await self._reply_preview(message.reply_to_id, by_id, senders),
                    reactions=[
                        ReactionDTO(emoji=s.emoji, count=s.count, has_reacted=s.has_reacted)
                        for s in summarize_reactions(reactions, me.id)
                    ],
                )
            )
        return views

    async def _sender(
        self, user_id: UserId, cache: dict[UserId, Optional[User]]
    ) -> Optional[User]:
        if user_id not in cache:
            cache[user_id] = await self._users.get_by_id(user_id)
        return cache[user_id]

    async def _reply_preview(
        self,
        reply_to_id: Optional[MessageId],
        by_id: dict[MessageId, Message],
        senders: dict[UserId, Optional[User]],
    ) -> Optional[ReplyPreviewDTO]:
        if reply_to_id is None:
            return None
        quoted = by_id.get(reply_to_id) or await self._messages.get_by_id(reply_to_id)
        if not quoted:
            return None
        quoted_sender = await self._sender(quoted.sender_id, senders)
        return ReplyPreviewDTO(
            id=quoted.id.value,
            sender_name=(quoted_sender.name if quoted_sender else None) or UNKNOWN_SENDER,
            content=DELETED_MESSAGE_PLACEHOLDER if quoted.is_deleted else quoted.content,
            is_deleted=quoted.is_deleted,
        )
