"""Direct conversation resolution and the inbox."""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from chatcore.application.commands.conversations import GetOrCreateDirectCommand
from chatcore.application.commands.groups import CreateGroupCommand
from chatcore.application.commands.messages import MarkAsReadCommand, SendMessageCommand
from chatcore.application.queries.conversations import ListMyConversationsQuery
from chatcore.domain.entities.conversation import Conversation, direct_key_for
from chatcore.domain.entities.membership import Membership
from chatcore.domain.exceptions import (
    EntityNotFoundError,
    InvalidOperationError,
    UnauthenticatedError,
)
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.user_id import UserId


async def _legacy_direct(repos, first, second, created_at):
    """A direct conversation stored before pair keys existed."""
    conversation = Conversation(
        id=ConversationId(str(uuid4())), is_group=False, created_at=created_at
    )
    await repos.conversations.save(conversation)
    await repos.members.save(Membership.create(first, conversation.id))
    await repos.members.save(Membership.create(second, conversation.id))
    return conversation


async def _backdate(repos, conversation_id, created_at):
    conversation = await repos.conversations.get_by_id(conversation_id)
    conversation.created_at = created_at
    await repos.conversations.save(conversation)


class TestGetOrCreateDirect:
    @pytest.mark.asyncio
    async def test_creates_once_per_pair_in_either_direction(self, handlers, repos, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")

        first = await handlers.get_or_create_direct.execute(
            GetOrCreateDirectCommand(caller=alice.token, other_user_id=bob.id)
        )
        second = await handlers.get_or_create_direct.execute(
            GetOrCreateDirectCommand(caller=bob.token, other_user_id=alice.id)
        )

        assert first == second
        conversation = await repos.conversations.get_by_id(first)
        assert conversation.is_group is False
        assert conversation.direct_key == direct_key_for(alice.id, bob.id)
        members = await repos.members.list_by_conversation(first)
        assert {m.user_id for m in members} == {alice.id, bob.id}
        assert not any(m.is_admin for m in members)

    @pytest.mark.asyncio
    async def test_concurrent_first_contact_creates_one_conversation(
        self, handlers, repos, make_user
    ):
        alice = await make_user("Alice")
        bob = await make_user("Bob")

        results = await asyncio.gather(
            handlers.get_or_create_direct.execute(
                GetOrCreateDirectCommand(caller=alice.token, other_user_id=bob.id)
            ),
            handlers.get_or_create_direct.execute(
                GetOrCreateDirectCommand(caller=bob.token, other_user_id=alice.id)
            ),
        )

        assert results[0] == results[1]
        assert len(await repos.members.list_by_user(alice.id)) == 1

    @pytest.mark.asyncio
    async def test_messaging_yourself_is_invalid(self, handlers, make_user):
        alice = await make_user("Alice")

        with pytest.raises(InvalidOperationError):
            await handlers.get_or_create_direct.execute(
                GetOrCreateDirectCommand(caller=alice.token, other_user_id=alice.id)
            )

    @pytest.mark.asyncio
    async def test_unknown_other_user(self, handlers, make_user):
        alice = await make_user("Alice")

        with pytest.raises(EntityNotFoundError):
            await handlers.get_or_create_direct.execute(
                GetOrCreateDirectCommand(caller=alice.token, other_user_id=UserId(str(uuid4())))
            )

    @pytest.mark.asyncio
    async def test_requires_caller(self, handlers, make_user):
        bob = await make_user("Bob")

        with pytest.raises(UnauthenticatedError):
            await handlers.get_or_create_direct.execute(
                GetOrCreateDirectCommand(caller=None, other_user_id=bob.id)
            )

    @pytest.mark.asyncio
    async def test_reuses_earliest_conversation_without_pair_key(
        self, handlers, repos, make_user
    ):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        now = datetime.now(timezone.utc)
        newer = await _legacy_direct(repos, alice.id, bob.id, now - timedelta(days=1))
        older = await _legacy_direct(repos, alice.id, bob.id, now - timedelta(days=30))

        result = await handlers.get_or_create_direct.execute(
            GetOrCreateDirectCommand(caller=bob.token, other_user_id=alice.id)
        )

        assert result == older.id
        assert result != newer.id

    @pytest.mark.asyncio
    async def test_shared_group_is_not_a_direct_match(self, handlers, repos, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        group = Conversation.create_group("Trip")
        await repos.conversations.save(group)
        await repos.members.save(Membership.create(alice.id, group.id, is_admin=True))
        await repos.members.save(Membership.create(bob.id, group.id))

        result = await handlers.get_or_create_direct.execute(
            GetOrCreateDirectCommand(caller=alice.token, other_user_id=bob.id)
        )

        assert result != group.id


class TestListMyConversations:
    @pytest.mark.asyncio
    async def test_anonymous_inbox_is_empty(self, handlers):
        assert await handlers.list_conversations.execute(ListMyConversationsQuery(caller=None)) == []

    @pytest.mark.asyncio
    async def test_direct_row_shows_other_user_and_unread(self, handlers, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        conversation_id = await handlers.get_or_create_direct.execute(
            GetOrCreateDirectCommand(caller=alice.token, other_user_id=bob.id)
        )
        for text in ("hi", "are you there?"):
            await handlers.send_message.execute(
                SendMessageCommand(caller=alice.token, conversation_id=conversation_id, content=text)
            )

        [row] = await handlers.list_conversations.execute(ListMyConversationsQuery(caller=bob.token))

        assert row.id == conversation_id.value
        assert row.is_group is False
        assert row.other_user.id == alice.id.value
        assert row.member_count == 2
        assert row.last_message.content == "are you there?"
        assert row.unread_count == 2

        await handlers.mark_as_read.execute(
            MarkAsReadCommand(caller=bob.token, conversation_id=conversation_id)
        )
        [row] = await handlers.list_conversations.execute(ListMyConversationsQuery(caller=bob.token))
        assert row.unread_count == 0

    @pytest.mark.asyncio
    async def test_sorted_by_latest_activity(self, handlers, repos, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        carol = await make_user("Carol")
        with_bob = await handlers.get_or_create_direct.execute(
            GetOrCreateDirectCommand(caller=alice.token, other_user_id=bob.id)
        )
        with_carol = await handlers.get_or_create_direct.execute(
            GetOrCreateDirectCommand(caller=alice.token, other_user_id=carol.id)
        )
        now = datetime.now(timezone.utc)
        await _backdate(repos, with_bob, now - timedelta(minutes=2))
        await _backdate(repos, with_carol, now - timedelta(minutes=1))

        rows = await handlers.list_conversations.execute(ListMyConversationsQuery(caller=alice.token))
        assert [r.id for r in rows] == [with_carol.value, with_bob.value]

        await handlers.send_message.execute(
            SendMessageCommand(caller=bob.token, conversation_id=with_bob, content="ping")
        )

        rows = await handlers.list_conversations.execute(ListMyConversationsQuery(caller=alice.token))
        assert [r.id for r in rows] == [with_bob.value, with_carol.value]

    @pytest.mark.asyncio
    async def test_group_row_lists_members_with_admin_flags(self, handlers, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        group_id = await handlers.create_group.execute(
            CreateGroupCommand(caller=alice.token, name="Trip", member_ids=(bob.id,))
        )

        [row] = await handlers.list_conversations.execute(ListMyConversationsQuery(caller=bob.token))

        assert row.id == group_id.value
        assert row.group_name == "Trip"
        assert row.other_user is None
        assert row.member_count == 2
        admins = {m.id: m.is_admin for m in row.group_members}
        assert admins == {alice.id.value: True, bob.id.value: False}
