"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass)
- Validates itself on creation
- Pure Python (no framework dependencies)
"""

from chatcore.domain.value_objects.user_id import UserId
from chatcore.domain.value_objects.user_email import UserEmail
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.message_id import MessageId
from chatcore.domain.value_objects.read_receipts import ReadReceipts

__all__ = [
    "UserId",
    "UserEmail",
    "TokenIdentifier",
    "ConversationId",
    "MessageId",
    "ReadReceipts",
]
