"""Conversation-related queries."""

from chatcore.application.queries.conversations.list_my_conversations import (
    ListMyConversationsQuery,
    ListMyConversationsHandler,
)

__all__ = [
    "ListMyConversationsQuery",
    "ListMyConversationsHandler",
]
