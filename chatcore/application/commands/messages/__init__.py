"""Message timeline commands."""

from .send_message import SendMessageCommand, SendMessageHandler
from .delete_message import DeleteMessageCommand, DeleteMessageHandler
from .delete_messages import DeleteMessagesCommand, DeleteMessagesHandler
from .toggle_reaction import ToggleReactionCommand, ToggleReactionHandler
from .mark_as_read import MarkAsReadCommand, MarkAsReadHandler

__all__ = [
    "SendMessageCommand",
    "SendMessageHandler",
    "DeleteMessageCommand",
    "DeleteMessageHandler",
    "DeleteMessagesCommand",
    "DeleteMessagesHandler",
    "ToggleReactionCommand",
    "ToggleReactionHandler",
    "MarkAsReadCommand",
    "MarkAsReadHandler",
]
