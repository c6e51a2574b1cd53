import asyncio
import inspect
import os
import time
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import jwt
import pytest

# Backends and auth must be fixed before chatcore.config is imported
os.environ["STORE_BACKEND"] = "memory"
os.environ["LOCK_BACKEND"] = "memory"
os.environ.setdefault("SERVICE_AUTH_SECRET", "test-secret-that-is-long-enough-for-hs256")
os.environ.setdefault("SERVICE_AUTH_ISSUER", "your_service_name")
os.environ.setdefault("SERVICE_AUTH_AUDIENCE", "your_service_audience")

from fastapi.testclient import TestClient

from chatcore.application.commands.conversations import GetOrCreateDirectHandler
from chatcore.application.commands.groups import (
    AddMemberHandler,
    ClaimAdminHandler,
    CreateGroupHandler,
    DemoteAdminHandler,
    PromoteAdminHandler,
    RemoveMemberHandler,
    RenameGroupHandler,
)
from chatcore.application.commands.messages import (
    DeleteMessageHandler,
    DeleteMessagesHandler,
    MarkAsReadHandler,
    SendMessageHandler,
    ToggleReactionHandler,
)
from chatcore.application.commands.presence import SetTypingHandler
from chatcore.application.commands.users import SetOnlineStatusHandler, SyncIdentityHandler
from chatcore.application.queries.conversations import ListMyConversationsHandler
from chatcore.application.queries.groups import GetGroupDetailsHandler
from chatcore.application.queries.messages import ListMessagesHandler
from chatcore.application.queries.presence import ListTypingUsersHandler
from chatcore.application.queries.users import SearchUsersHandler
from chatcore.application.services import IdentityResolver
from chatcore.config.settings import Config
from chatcore.domain.entities.user import User
from chatcore.domain.ports.lock_manager import LockManager
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_email import UserEmail
from chatcore.fastapi_app import create_fastapi_app
from chatcore.infrastructure.locks import InMemoryLockManager
from chatcore.infrastructure.persistence.memory import (
    InMemoryConversationRepository,
    InMemoryDocumentStore,
    InMemoryMembershipRepository,
    InMemoryMessageRepository,
    InMemoryReactionRepository,
    InMemoryTypingIndicatorRepository,
    InMemoryUserRepository,
)
from chatcore.setup.ioc import create_container
from chatcore.setup.ioc.container import InMemoryLockProvider, MemoryStoreProvider


def service_token(subject="user-1", expires_in=300, secret=None):
    now = int(time.time())
    return jwt.encode(
        {
            "sub": subject,
            "iat": now,
            "exp": now + expires_in,
            "iss": Config.SERVICE_AUTH_ISSUER,
            "aud": Config.SERVICE_AUTH_AUDIENCE,
        },
        secret or Config.SERVICE_AUTH_SECRET,
        algorithm="HS256",
    )


def bearer(subject):
    return {"Authorization": f"Bearer {service_token(subject)}"}


class FakeClock:
    """Settable clock for TTL tests."""

    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += timedelta(seconds=seconds)


class SuspendingRepository:
    """Repository wrapper that yields to the event loop around every call.

    The in-memory store never awaits anything that suspends, so without this
    two handlers passed to asyncio.gather would simply run back to back.
    """

    def __init__(self, inner):
        self._inner = inner

    def __getattr__(self, name):
        attr = getattr(self._inner, name)
        if not inspect.iscoroutinefunction(attr):
            return attr

        async def call(*args, **kwargs):
            await asyncio.sleep(0)
            result = await attr(*args, **kwargs)
            await asyncio.sleep(0)
            return result

        return call


class NoopLockManager(LockManager):
    """Lock manager that serializes nothing."""

    @asynccontextmanager
    async def hold(self, key):
        yield


# ==================== HANDLER FIXTURES ====================


@pytest.fixture()
def store():
    return InMemoryDocumentStore()


@pytest.fixture()
def locks():
    return InMemoryLockManager()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def repos(store):
    return SimpleNamespace(
        users=SuspendingRepository(InMemoryUserRepository(store)),
        conversations=SuspendingRepository(InMemoryConversationRepository(store)),
        members=SuspendingRepository(InMemoryMembershipRepository(store)),
        messages=SuspendingRepository(InMemoryMessageRepository(store)),
        reactions=SuspendingRepository(InMemoryReactionRepository(store)),
        typing=SuspendingRepository(InMemoryTypingIndicatorRepository(store)),
    )


def build_handlers(repos, locks, clock):
    """Every command/query handler wired to one in-memory store."""
    identity = IdentityResolver(repos.users)
    return SimpleNamespace(
        identity=identity,
        sync_identity=SyncIdentityHandler(repos.users, locks),
        set_online=SetOnlineStatusHandler(identity, repos.users),
        search_users=SearchUsersHandler(repos.users),
        get_or_create_direct=GetOrCreateDirectHandler(
            identity, repos.users, repos.conversations, repos.members, locks
        ),
        list_conversations=ListMyConversationsHandler(
            identity, repos.users, repos.conversations, repos.members, repos.messages
        ),
        create_group=CreateGroupHandler(
            identity, repos.users, repos.conversations, repos.members
        ),
        rename_group=RenameGroupHandler(identity, repos.conversations, repos.members, locks),
        add_member=AddMemberHandler(
            identity, repos.users, repos.conversations, repos.members, locks
        ),
        remove_member=RemoveMemberHandler(identity, repos.conversations, repos.members, locks),
        promote_admin=PromoteAdminHandler(identity, repos.conversations, repos.members, locks),
        demote_admin=DemoteAdminHandler(identity, repos.conversations, repos.members, locks),
        claim_admin=ClaimAdminHandler(identity, repos.conversations, repos.members, locks),
        group_details=GetGroupDetailsHandler(
            identity, repos.users, repos.conversations, repos.members
        ),
        send_message=SendMessageHandler(
            identity, repos.conversations, repos.members, repos.messages, locks
        ),
        list_messages=ListMessagesHandler(
            identity, repos.users, repos.members, repos.messages, repos.reactions
        ),
        delete_message=DeleteMessageHandler(identity, repos.messages, locks),
        delete_messages=DeleteMessagesHandler(identity, repos.messages, locks),
        toggle_reaction=ToggleReactionHandler(identity, repos.messages, repos.reactions, locks),
        mark_as_read=MarkAsReadHandler(identity, repos.messages, locks),
        set_typing=SetTypingHandler(
            identity, repos.members, repos.typing, locks, ttl_seconds=3.0, clock=clock
        ),
        list_typing=ListTypingUsersHandler(identity, repos.users, repos.typing, clock=clock),
    )


@pytest.fixture()
def handlers(repos, locks, clock):
    return build_handlers(repos, locks, clock)


@pytest.fixture()
def make_user(repos):
    """Async factory: store a synced user and return it with its token."""

    async def _make_user(name="Alice", email=None):
        token = TokenIdentifier.from_claims(Config.SERVICE_AUTH_ISSUER, f"sub-{uuid.uuid4()}")
        user = User.create(
            token_identifier=token,
            email=UserEmail(email or f"{name.lower()}@example.com"),
            name=name,
        )
        await repos.users.save(user)
        return SimpleNamespace(id=user.id, token=token, user=user)

    return _make_user


# ==================== API FIXTURES ====================


@pytest.fixture()
def app():
    """Create a new FastAPI app with its own in-memory container for each test."""
    return create_fastapi_app(create_container(MemoryStoreProvider(), InMemoryLockProvider()))


@pytest.fixture()
def client(app):
    """A test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture()
def auth_headers():
    """Authentication headers with valid JWT token."""
    return bearer("user-1")
