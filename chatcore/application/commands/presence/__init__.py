"""Typing presence commands."""

from .set_typing import SetTypingCommand, SetTypingHandler

__all__ = [
    "SetTypingCommand",
    "SetTypingHandler",
]
