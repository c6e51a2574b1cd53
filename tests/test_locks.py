"""Lock manager backends."""

import asyncio

import pytest
from redis.exceptions import LockError

from chatcore.application.commands.conversations import GetOrCreateDirectCommand
from chatcore.application.commands.groups import (
    CreateGroupCommand,
    PromoteAdminCommand,
    RemoveMemberCommand,
    RenameGroupCommand,
)
from chatcore.application.commands.messages import SendMessageCommand
from chatcore.application.commands.users import SyncIdentityCommand
from chatcore.domain.exceptions import ConflictError
from chatcore.domain.value_objects.token_identifier import TokenIdentifier
from chatcore.domain.value_objects.user_email import UserEmail
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.infrastructure.locks import InMemoryLockManager, RedisLockManager
from tests.conftest import NoopLockManager, build_handlers

CONVERSATION = ConversationId("7b0c5b1e-8a57-4a43-9f0e-3f1f0d7f6a11")


class FakeRedisLock:
    def __init__(self, client, name, timeout, blocking_timeout):
        self.client = client
        self.name = name
        self.timeout = timeout
        self.blocking_timeout = blocking_timeout

    async def acquire(self):
        if self.name in self.client.held:
            return False
        self.client.held.add(self.name)
        return True

    async def release(self):
        if self.client.expire_before_release:
            raise LockError("Cannot release an unlocked lock")
        self.client.held.discard(self.name)


class FakeRedis:
    def __init__(self):
        self.held = set()
        self.locks = []
        self.expire_before_release = False

    def lock(self, name, timeout=None, blocking_timeout=None):
        lock = FakeRedisLock(self, name, timeout, blocking_timeout)
        self.locks.append(lock)
        return lock


class TestInMemoryLockManager:
    @pytest.mark.asyncio
    async def test_serializes_holders_of_the_same_key(self):
        manager = InMemoryLockManager()
        events = []

        async def worker(name):
            async with manager.conversation(CONVERSATION):
                events.append(f"{name}:enter")
                await asyncio.sleep(0.01)
                events.append(f"{name}:exit")

        await asyncio.gather(worker("a"), worker("b"))

        assert events == ["a:enter", "a:exit", "b:enter", "b:exit"]

    @pytest.mark.asyncio
    async def test_different_keys_do_not_block(self):
        manager = InMemoryLockManager()

        async with manager.hold("conversation:1"):
            await asyncio.wait_for(_enter_and_leave(manager, "conversation:2"), timeout=1)

    @pytest.mark.asyncio
    async def test_forgets_keys_once_released(self):
        manager = InMemoryLockManager()

        async with manager.conversation(CONVERSATION):
            assert manager.active_keys() == {f"conversation:{CONVERSATION.value}"}

        assert manager.active_keys() == set()

    @pytest.mark.asyncio
    async def test_releases_on_error(self):
        manager = InMemoryLockManager()

        with pytest.raises(RuntimeError):
            async with manager.hold("k"):
                raise RuntimeError("boom")

        await asyncio.wait_for(_enter_and_leave(manager, "k"), timeout=1)


async def _enter_and_leave(manager, key):
    async with manager.hold(key):
        pass


class TestRedisLockManager:
    @pytest.mark.asyncio
    async def test_uses_prefixed_key_and_configured_timeouts(self):
        client = FakeRedis()
        manager = RedisLockManager(client, timeout=7, blocking_timeout=2)

        async with manager.conversation(CONVERSATION):
            assert client.held == {f"chatcore:lock:conversation:{CONVERSATION.value}"}

        assert client.held == set()
        [lock] = client.locks
        assert (lock.timeout, lock.blocking_timeout) == (7, 2)

    @pytest.mark.asyncio
    async def test_busy_lock_raises_conflict(self):
        client = FakeRedis()
        client.held.add("chatcore:lock:direct:a:b")
        manager = RedisLockManager(client)

        with pytest.raises(ConflictError):
            async with manager.direct_pair("a:b"):
                pass

    @pytest.mark.asyncio
    async def test_expired_lock_does_not_fail_the_request(self):
        client = FakeRedis()
        client.expire_before_release = True
        manager = RedisLockManager(client)

        async with manager.hold("k"):
            pass


class TestHandlersWithoutLocking:
    """The same interleavings the handler tests run, with locking switched off.

    Each of these must go wrong, otherwise the concurrent handler tests would
    pass whether or not the handlers hold their locks.
    """

    @pytest.fixture()
    def unlocked(self, repos, clock):
        return build_handlers(repos, NoopLockManager(), clock)

    @pytest.mark.asyncio
    async def test_first_syncs_duplicate_the_user(self, unlocked, repos):
        token = TokenIdentifier.from_claims("your_service_name", "alice")
        command = SyncIdentityCommand(caller=token, email=UserEmail("alice@example.com"))

        ids = await asyncio.gather(
            unlocked.sync_identity.execute(command),
            unlocked.sync_identity.execute(command),
        )

        assert ids[0] != ids[1]
        assert len(await repos.users.list_all()) == 2

    @pytest.mark.asyncio
    async def test_first_contact_creates_two_conversations(self, unlocked, repos, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")

        results = await asyncio.gather(
            unlocked.get_or_create_direct.execute(
                GetOrCreateDirectCommand(caller=alice.token, other_user_id=bob.id)
            ),
            unlocked.get_or_create_direct.execute(
                GetOrCreateDirectCommand(caller=bob.token, other_user_id=alice.id)
            ),
        )

        assert results[0] != results[1]
        assert len(await repos.members.list_by_user(alice.id)) == 2

    @pytest.mark.asyncio
    async def test_mutual_removal_leaves_no_admin(self, unlocked, repos, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        group_id = await unlocked.create_group.execute(
            CreateGroupCommand(caller=alice.token, name="Trip", member_ids=(bob.id,))
        )
        await unlocked.promote_admin.execute(
            PromoteAdminCommand(caller=alice.token, conversation_id=group_id, user_id=bob.id)
        )

        await asyncio.gather(
            unlocked.remove_member.execute(
                RemoveMemberCommand(caller=alice.token, conversation_id=group_id, user_id=bob.id)
            ),
            unlocked.remove_member.execute(
                RemoveMemberCommand(caller=bob.token, conversation_id=group_id, user_id=alice.id)
            ),
        )

        assert await repos.members.list_by_conversation(group_id) == []

    @pytest.mark.asyncio
    async def test_send_overwrites_concurrent_rename(self, unlocked, repos, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        group_id = await unlocked.create_group.execute(
            CreateGroupCommand(caller=alice.token, name="Trip", member_ids=(bob.id,))
        )

        await asyncio.gather(
            unlocked.rename_group.execute(
                RenameGroupCommand(caller=alice.token, conversation_id=group_id, name="Trip 2")
            ),
            unlocked.send_message.execute(
                SendMessageCommand(caller=bob.token, conversation_id=group_id, content="hi")
            ),
        )

        assert (await repos.conversations.get_by_id(group_id)).group_name == "Trip"
