"""
Authorization guards shared by group and message handlers.
"""

from chatcore.domain.entities.conversation import Conversation
from chatcore.domain.entities.membership import Membership
from chatcore.domain.exceptions import (
    AccessDeniedError,
    EntityNotFoundError,
    InvalidOperationError,
)
from chatcore.domain.ports.repositories import (
    ConversationRepository,
    MembershipRepository,
)
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.user_id import UserId


async def assert_admin(
    memberships: MembershipRepository,
    conversation_id: ConversationId,
    user_id: UserId,
) -> Membership:
    membership = await memberships.get(conversation_id, user_id)
    if not membership or not membership.is_admin:
        raise AccessDeniedError("Forbidden: admin only")
    return membership


async def assert_member(
    memberships: MembershipRepository,
    conversation_id: ConversationId,
    user_id: UserId,
) -> Membership:
    membership = await memberships.get(conversation_id, user_id)
    if not membership:
        raise AccessDeniedError("Not a member of this conversation")
    return membership


async def load_group(
    conversations: ConversationRepository, conversation_id: ConversationId
) -> Conversation:
    conversation = await conversations.get_by_id(conversation_id)
    if not conversation:
        raise EntityNotFoundError(f"Conversation {conversation_id.value} not found")
    if not conversation.is_group:
        raise InvalidOperationError("Not a group")
    return conversation
