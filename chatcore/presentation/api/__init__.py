"""
API Routers - FastAPI endpoint definitions.
"""

from chatcore.presentation.api.users import router as users_router
from chatcore.presentation.api.conversations import router as conversations_router
from chatcore.presentation.api.groups import router as groups_router
from chatcore.presentation.api.messages import router as messages_router

__all__ = [
    "users_router",
    "conversations_router",
    "groups_router",
    "messages_router",
]
