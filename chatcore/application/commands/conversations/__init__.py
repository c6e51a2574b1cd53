"""Conversation commands."""

from .get_or_create_direct import (
    GetOrCreateDirectCommand,
    GetOrCreateDirectHandler,
)

__all__ = [
    "GetOrCreateDirectCommand",
    "GetOrCreateDirectHandler",
]
