"""Group lifecycle, admin governance and legacy admin claims."""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
import pytest_asyncio

from chatcore.application.commands.conversations import GetOrCreateDirectCommand
from chatcore.application.commands.groups import (
    AddMemberCommand,
    ClaimAdminCommand,
    CreateGroupCommand,
    DemoteAdminCommand,
    PromoteAdminCommand,
    RemoveMemberCommand,
    RenameGroupCommand,
)
from chatcore.application.commands.messages import SendMessageCommand
from chatcore.application.queries.groups import GetGroupDetailsQuery
from chatcore.domain.entities.conversation import Conversation
from chatcore.domain.entities.membership import Membership
from chatcore.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    EntityNotFoundError,
    InvalidOperationError,
)
from chatcore.domain.services.admin_policy import resolve_admin_view
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.user_id import UserId


async def _legacy_group(repos, *people):
    """Group without any admin membership; members joined in the given order."""
    group = Conversation.create_group("Legacy")
    await repos.conversations.save(group)
    start = datetime.now(timezone.utc) - timedelta(days=365)
    for offset, person in enumerate(people):
        await repos.members.save(
            Membership(
                id=str(uuid4()),
                user_id=person.id,
                conversation_id=group.id,
                created_at=start + timedelta(minutes=offset),
            )
        )
    return group.id


class TestCreateGroup:
    @pytest.mark.asyncio
    async def test_creator_is_only_admin_and_members_are_deduplicated(
        self, handlers, repos, make_user
    ):
        alice = await make_user("Alice")
        bob = await make_user("Bob")

        group_id = await handlers.create_group.execute(
            CreateGroupCommand(
                caller=alice.token,
                name="  Trip  ",
                member_ids=(bob.id, bob.id, alice.id),
            )
        )

        group = await repos.conversations.get_by_id(group_id)
        assert group.is_group is True
        assert group.group_name == "Trip"
        members = await repos.members.list_by_conversation(group_id)
        assert sorted(m.user_id.value for m in members) == sorted([alice.id.value, bob.id.value])
        assert [m.user_id for m in members if m.is_admin] == [alice.id]

    @pytest.mark.asyncio
    async def test_blank_name_is_refused(self, handlers, make_user):
        alice = await make_user("Alice")

        with pytest.raises(InvalidOperationError):
            await handlers.create_group.execute(CreateGroupCommand(caller=alice.token, name="   "))

    @pytest.mark.asyncio
    async def test_unknown_member_is_refused_before_anything_is_written(
        self, handlers, repos, make_user
    ):
        alice = await make_user("Alice")

        with pytest.raises(EntityNotFoundError):
            await handlers.create_group.execute(
                CreateGroupCommand(
                    caller=alice.token, name="Trip", member_ids=(UserId(str(uuid4())),)
                )
            )
        assert await repos.members.list_by_user(alice.id) == []


class TestAdminGovernance:
    @pytest_asyncio.fixture
    async def trip(self, handlers, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        carol = await make_user("Carol")
        group_id = await handlers.create_group.execute(
            CreateGroupCommand(caller=alice.token, name="Trip", member_ids=(bob.id,))
        )
        return alice, bob, carol, group_id

    @pytest.mark.asyncio
    async def test_non_admin_cannot_rename_or_add(self, handlers, trip):
        alice, bob, carol, group_id = trip

        with pytest.raises(AccessDeniedError):
            await handlers.rename_group.execute(
                RenameGroupCommand(caller=bob.token, conversation_id=group_id, name="Mine")
            )
        with pytest.raises(AccessDeniedError):
            await handlers.add_member.execute(
                AddMemberCommand(caller=bob.token, conversation_id=group_id, user_id=carol.id)
            )

    @pytest.mark.asyncio
    async def test_rename(self, handlers, repos, trip):
        alice, _, _, group_id = trip

        await handlers.rename_group.execute(
            RenameGroupCommand(caller=alice.token, conversation_id=group_id, name=" Ski trip ")
        )

        assert (await repos.conversations.get_by_id(group_id)).group_name == "Ski trip"
        with pytest.raises(InvalidOperationError):
            await handlers.rename_group.execute(
                RenameGroupCommand(caller=alice.token, conversation_id=group_id, name="")
            )

    @pytest.mark.asyncio
    async def test_add_member_twice_conflicts(self, handlers, trip):
        alice, _, carol, group_id = trip
        command = AddMemberCommand(caller=alice.token, conversation_id=group_id, user_id=carol.id)

        await handlers.add_member.execute(command)

        with pytest.raises(ConflictError):
            await handlers.add_member.execute(command)

    @pytest.mark.asyncio
    async def test_add_unknown_user(self, handlers, trip):
        alice, _, _, group_id = trip

        with pytest.raises(EntityNotFoundError):
            await handlers.add_member.execute(
                AddMemberCommand(
                    caller=alice.token, conversation_id=group_id, user_id=UserId(str(uuid4()))
                )
            )

    @pytest.mark.asyncio
    async def test_cannot_remove_or_demote_the_last_admin(self, handlers, repos, trip):
        alice, _, _, group_id = trip

        with pytest.raises(InvalidOperationError, match="last admin"):
            await handlers.remove_member.execute(
                RemoveMemberCommand(caller=alice.token, conversation_id=group_id, user_id=alice.id)
            )
        with pytest.raises(InvalidOperationError):
            await handlers.demote_admin.execute(
                DemoteAdminCommand(caller=alice.token, conversation_id=group_id, user_id=alice.id)
            )
        assert (await repos.members.get(group_id, alice.id)).is_admin is True

    @pytest.mark.asyncio
    async def test_promote_then_demote(self, handlers, repos, trip):
        alice, bob, _, group_id = trip

        await handlers.promote_admin.execute(
            PromoteAdminCommand(caller=alice.token, conversation_id=group_id, user_id=bob.id)
        )
        # Already admin: no-op
        await handlers.promote_admin.execute(
            PromoteAdminCommand(caller=alice.token, conversation_id=group_id, user_id=bob.id)
        )
        await handlers.demote_admin.execute(
            DemoteAdminCommand(caller=bob.token, conversation_id=group_id, user_id=alice.id)
        )

        assert (await repos.members.get(group_id, alice.id)).is_admin is False
        assert (await repos.members.get(group_id, bob.id)).is_admin is True

    @pytest.mark.asyncio
    async def test_demoting_a_non_admin_is_a_no_op(self, handlers, repos, trip):
        alice, bob, _, group_id = trip

        await handlers.demote_admin.execute(
            DemoteAdminCommand(caller=alice.token, conversation_id=group_id, user_id=bob.id)
        )

        assert (await repos.members.get(group_id, bob.id)).is_admin is False

    @pytest.mark.asyncio
    async def test_target_must_be_a_member(self, handlers, trip):
        alice, _, carol, group_id = trip

        with pytest.raises(EntityNotFoundError):
            await handlers.remove_member.execute(
                RemoveMemberCommand(caller=alice.token, conversation_id=group_id, user_id=carol.id)
            )
        with pytest.raises(EntityNotFoundError):
            await handlers.promote_admin.execute(
                PromoteAdminCommand(caller=alice.token, conversation_id=group_id, user_id=carol.id)
            )

    @pytest.mark.asyncio
    async def test_group_operations_on_direct_conversation(self, handlers, trip):
        alice, bob, _, _ = trip
        direct_id = await handlers.get_or_create_direct.execute(
            GetOrCreateDirectCommand(caller=alice.token, other_user_id=bob.id)
        )

        with pytest.raises(InvalidOperationError, match="Not a group"):
            await handlers.rename_group.execute(
                RenameGroupCommand(caller=alice.token, conversation_id=direct_id, name="x")
            )

    @pytest.mark.asyncio
    async def test_missing_conversation(self, handlers, trip):
        alice, bob, _, _ = trip

        with pytest.raises(EntityNotFoundError):
            await handlers.add_member.execute(
                AddMemberCommand(
                    caller=alice.token,
                    conversation_id=ConversationId(str(uuid4())),
                    user_id=bob.id,
                )
            )

    @pytest.mark.asyncio
    async def test_concurrent_removals_keep_one_admin(self, handlers, repos, trip):
        alice, bob, _, group_id = trip
        await handlers.promote_admin.execute(
            PromoteAdminCommand(caller=alice.token, conversation_id=group_id, user_id=bob.id)
        )

        results = await asyncio.gather(
            handlers.remove_member.execute(
                RemoveMemberCommand(caller=alice.token, conversation_id=group_id, user_id=bob.id)
            ),
            handlers.remove_member.execute(
                RemoveMemberCommand(caller=bob.token, conversation_id=group_id, user_id=alice.id)
            ),
            return_exceptions=True,
        )

        assert sum(1 for r in results if isinstance(r, Exception)) == 1
        members = await repos.members.list_by_conversation(group_id)
        assert len([m for m in members if m.is_admin]) == 1

    @pytest.mark.asyncio
    async def test_concurrent_rename_and_send_both_survive(self, handlers, repos, trip):
        alice, bob, _, group_id = trip

        _, message_id = await asyncio.gather(
            handlers.rename_group.execute(
                RenameGroupCommand(caller=alice.token, conversation_id=group_id, name="Trip 2")
            ),
            handlers.send_message.execute(
                SendMessageCommand(caller=bob.token, conversation_id=group_id, content="hi")
            ),
        )

        conversation = await repos.conversations.get_by_id(group_id)
        assert conversation.group_name == "Trip 2"
        assert conversation.last_message_id == message_id

    @pytest.mark.asyncio
    async def test_member_removed_while_sending_cannot_post(self, handlers, repos, trip):
        alice, bob, _, group_id = trip

        _, sent = await asyncio.gather(
            handlers.remove_member.execute(
                RemoveMemberCommand(caller=alice.token, conversation_id=group_id, user_id=bob.id)
            ),
            handlers.send_message.execute(
                SendMessageCommand(caller=bob.token, conversation_id=group_id, content="hi")
            ),
            return_exceptions=True,
        )

        assert isinstance(sent, AccessDeniedError)
        assert await repos.messages.get_by_conversation(group_id) == []


class TestGroupDetails:
    @pytest.mark.asyncio
    async def test_hidden_from_non_members_and_anonymous(self, handlers, make_user):
        alice = await make_user("Alice")
        mallory = await make_user("Mallory")
        group_id = await handlers.create_group.execute(
            CreateGroupCommand(caller=alice.token, name="Trip")
        )

        assert await handlers.group_details.execute(
            GetGroupDetailsQuery(caller=mallory.token, conversation_id=group_id)
        ) is None
        assert await handlers.group_details.execute(
            GetGroupDetailsQuery(caller=None, conversation_id=group_id)
        ) is None
        assert await handlers.group_details.execute(
            GetGroupDetailsQuery(
                caller=alice.token, conversation_id=ConversationId(str(uuid4()))
            )
        ) is None

    @pytest.mark.asyncio
    async def test_reports_explicit_admins(self, handlers, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        group_id = await handlers.create_group.execute(
            CreateGroupCommand(caller=alice.token, name="Trip", member_ids=(bob.id,))
        )

        details = await handlers.group_details.execute(
            GetGroupDetailsQuery(caller=bob.token, conversation_id=group_id)
        )

        assert details.group_name == "Trip"
        assert details.am_i_admin is False
        assert details.needs_admin_claim is False
        assert {m.id: m.is_admin for m in details.members} == {
            alice.id.value: True,
            bob.id.value: False,
        }


class TestLegacyAdminClaim:
    @pytest.mark.asyncio
    async def test_earliest_member_is_effective_admin(self, handlers, repos, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        group_id = await _legacy_group(repos, alice, bob)

        as_alice = await handlers.group_details.execute(
            GetGroupDetailsQuery(caller=alice.token, conversation_id=group_id)
        )
        as_bob = await handlers.group_details.execute(
            GetGroupDetailsQuery(caller=bob.token, conversation_id=group_id)
        )

        assert as_alice.am_i_admin is True
        assert as_alice.needs_admin_claim is True
        assert as_bob.am_i_admin is False
        # Nothing is persisted by reading
        members = await repos.members.list_by_conversation(group_id)
        assert not any(m.is_admin for m in members)

    @pytest.mark.asyncio
    async def test_only_earliest_member_can_claim_once(self, handlers, repos, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        mallory = await make_user("Mallory")
        group_id = await _legacy_group(repos, alice, bob)

        with pytest.raises(AccessDeniedError):
            await handlers.claim_admin.execute(
                ClaimAdminCommand(caller=bob.token, conversation_id=group_id)
            )
        with pytest.raises(AccessDeniedError):
            await handlers.claim_admin.execute(
                ClaimAdminCommand(caller=mallory.token, conversation_id=group_id)
            )

        await handlers.claim_admin.execute(
            ClaimAdminCommand(caller=alice.token, conversation_id=group_id)
        )

        assert (await repos.members.get(group_id, alice.id)).is_admin is True
        details = await handlers.group_details.execute(
            GetGroupDetailsQuery(caller=alice.token, conversation_id=group_id)
        )
        assert details.needs_admin_claim is False

        with pytest.raises(AccessDeniedError):
            await handlers.claim_admin.execute(
                ClaimAdminCommand(caller=alice.token, conversation_id=group_id)
            )

    @pytest.mark.asyncio
    async def test_legacy_admin_must_claim_before_managing(self, handlers, repos, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        group_id = await _legacy_group(repos, alice, bob)

        with pytest.raises(AccessDeniedError):
            await handlers.rename_group.execute(
                RenameGroupCommand(caller=alice.token, conversation_id=group_id, name="New")
            )

        await handlers.claim_admin.execute(
            ClaimAdminCommand(caller=alice.token, conversation_id=group_id)
        )
        await handlers.rename_group.execute(
            RenameGroupCommand(caller=alice.token, conversation_id=group_id, name="New")
        )

        assert (await repos.conversations.get_by_id(group_id)).group_name == "New"

    def test_membership_id_breaks_created_at_ties(self):
        conversation_id = ConversationId(str(uuid4()))
        at = datetime(2023, 5, 1, tzinfo=timezone.utc)
        first = Membership(
            id="a", user_id=UserId(str(uuid4())), conversation_id=conversation_id, created_at=at
        )
        second = Membership(
            id="b", user_id=UserId(str(uuid4())), conversation_id=conversation_id, created_at=at
        )

        view = resolve_admin_view([second, first])

        assert view.admin_user_ids == frozenset([first.user_id])
        assert view.needs_admin_claim is True


class TestTripScenario:
    @pytest.mark.asyncio
    async def test_full_admin_lifecycle(self, handlers, repos, make_user):
        alice = await make_user("Alice")
        bob = await make_user("Bob")
        carol = await make_user("Carol")

        group_id = await handlers.create_group.execute(
            CreateGroupCommand(caller=alice.token, name="Trip", member_ids=(bob.id,))
        )
        await handlers.add_member.execute(
            AddMemberCommand(caller=alice.token, conversation_id=group_id, user_id=carol.id)
        )
        await handlers.promote_admin.execute(
            PromoteAdminCommand(caller=alice.token, conversation_id=group_id, user_id=carol.id)
        )
        await handlers.remove_member.execute(
            RemoveMemberCommand(caller=carol.token, conversation_id=group_id, user_id=alice.id)
        )

        members = await repos.members.list_by_conversation(group_id)
        assert {m.user_id for m in members} == {bob.id, carol.id}
        assert [m.user_id for m in members if m.is_admin] == [carol.id]

        with pytest.raises(InvalidOperationError):
            await handlers.demote_admin.execute(
                DemoteAdminCommand(caller=carol.token, conversation_id=group_id, user_id=carol.id)
            )
