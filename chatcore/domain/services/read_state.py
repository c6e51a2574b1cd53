"""
Read state helpers.
"""

from chatcore.domain.entities.message import Message
from chatcore.domain.value_objects.user_id import UserId


def unread_count(messages: list[Message], viewer_id: UserId) -> int:
    """Messages from others that the viewer has not read yet."""
    return sum(1 for message in messages if message.is_unread_for(viewer_id))
