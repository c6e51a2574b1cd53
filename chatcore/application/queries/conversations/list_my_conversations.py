"""
List My Conversations Query - the caller's inbox.

Each row carries the other party (direct) or the member list (group), the
last message and the caller's unread count, newest activity first.
"""

from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.interfaces import Query, QueryHandler
from chatcore.application.dto.conversation import ConversationSummaryDTO, LastMessageDTO
from chatcore.application.dto.user import MemberDTO, UserDTO
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.entities.membership import Membership
from chatcore.domain.entities.user import User
from chatcore.domain.ports.repositories import (
    ConversationRepository,
    MembershipRepository,
    MessageRepository,
    UserRepository,
)
from chatcore.domain.services.read_state import unread_count
from chatcore.domain.value_objects.token_identifier import TokenIdentifier


@dataclass(frozen=True)
class ListMyConversationsQuery(Query[list[ConversationSummaryDTO]]):
    caller: Optional[TokenIdentifier]


class ListMyConversationsHandler(QueryHandler[list[ConversationSummaryDTO]]):
    def __init__(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
        message_repository: MessageRepository,
    ):
        self._identity = identity
        self._users = user_repository
        self._conversations = conversation_repository
        self._memberships = membership_repository
        self._messages = message_repository

    async def execute(
        self, query: ListMyConversationsQuery
    ) -> list[ConversationSummaryDTO]:
        me = await self._identity.resolve_caller(query.caller)
        if not me:
            return []

        summaries = []
        for membership in await self._memberships.list_by_user(me.id):
            summary = await self._summarize(membership, me)
            if summary:
                summaries.append(summary)

        summaries.sort(key=lambda s: s.activity_at, reverse=True)
        return summaries

    async def _summarize(
        self, membership: Membership, me: User
    ) -> Optional[ConversationSummaryDTO]:
        conversation = await self._conversations.get_by_id(membership.conversation_id)
        if not conversation:
            return None

        members = await self._memberships.list_by_conversation(conversation.id)

        other_user = None
        group_members = []
        if not conversation.is_group:
            other = next((m for m in members if m.user_id != me.id), None)
            if other:
                user = await self._users.get_by_id(other.user_id)
                other_user = UserDTO.from_entity(user) if user else None
        else:
            for member in members:
                user = await self._users.get_by_id(member.user_id)
                if user:
                    group_members.append(MemberDTO.from_entity(user, member.is_admin))

        messages = await self._messages.get_by_conversation(conversation.id)
        last_message = None
        if conversation.last_message_id:
            last = next((m for m in messages if m.id == conversation.last_message_id), None)
            last_message = LastMessageDTO.from_entity(last) if last else None

        return ConversationSummaryDTO(
            id=conversation.id.value,
            is_group=conversation.is_group,
            group_name=conversation.group_name,
            created_at=conversation.created_at,
            other_user=other_user,
            group_members=group_members,
            member_count=len(members),
            last_message=last_message,
            unread_count=unread_count(messages, me.id),
        )
