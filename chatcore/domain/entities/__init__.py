"""
ENTITIES - Business objects with identity

Each entity:
- Has a unique identifier
- Has behavior (methods)
- Can change state over time
- Pure Python dataclasses (no ORM, no Pydantic)
"""

from chatcore.domain.entities.user import User
from chatcore.domain.entities.conversation import Conversation
from chatcore.domain.entities.membership import Membership
from chatcore.domain.entities.message import Message, DELETED_MESSAGE_PLACEHOLDER
from chatcore.domain.entities.reaction import Reaction
from chatcore.domain.entities.typing_indicator import TypingIndicator

__all__ = [
    "User",
    "Conversation",
    "Membership",
    "Message",
    "DELETED_MESSAGE_PLACEHOLDER",
    "Reaction",
    "TypingIndicator",
]
