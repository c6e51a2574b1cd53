"""
Get Group Details Query.

For legacy groups without any explicit admin the earliest member is reported
as admin (and `needs_admin_claim` is set) without persisting anything; the
member then calls claim_admin to make it permanent.
"""

from dataclasses import dataclass
from typing import Optional
from chatcore.application.common.interfaces import Query, QueryHandler
from chatcore.application.dto.conversation import GroupDetailsDTO
from chatcore.application.dto.user import MemberDTO
from chatcore.application.services.identity_resolver import IdentityResolver
from chatcore.domain.ports.repositories import (
    ConversationRepository,
    MembershipRepository,
    UserRepository,
)
from chatcore.domain.services.admin_policy import resolve_admin_view
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.token_identifier import TokenIdentifier


@dataclass(frozen=True)
class GetGroupDetailsQuery(Query[Optional[GroupDetailsDTO]]):
    caller: Optional[TokenIdentifier]
    conversation_id: ConversationId


class GetGroupDetailsHandler(QueryHandler[Optional[GroupDetailsDTO]]):
    def __init__(
        self,
        identity: IdentityResolver,
        user_repository: UserRepository,
        conversation_repository: ConversationRepository,
        membership_repository: MembershipRepository,
    ):
        self._identity = identity
        self._users = user_repository
        self._conversations = conversation_repository
        self._memberships = membership_repository

    async def execute(self, query: GetGroupDetailsQuery) -> Optional[GroupDetailsDTO]:
        me = await self._identity.resolve_caller(query.caller)
        if not me:
            return None
        conversation = await self._conversations.get_by_id(query.conversation_id)
        if not conversation or not conversation.is_group:
            return None

        memberships = await self._memberships.list_by_conversation(query.conversation_id)
        if not any(m.user_id == me.id for m in memberships):
            return None

        admin_view = resolve_admin_view(memberships)
        members = []
        for membership in memberships:
            user = await self._users.get_by_id(membership.user_id)
            if user:
                members.append(
                    MemberDTO.from_entity(user, admin_view.is_admin(membership.user_id))
                )

        return GroupDetailsDTO(
            group_name=conversation.group_name,
            am_i_admin=admin_view.is_admin(me.id),
            members=members,
            needs_admin_claim=admin_view.needs_admin_claim,
        )
