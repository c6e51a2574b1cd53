"""Value objects and entity rules."""

from uuid import uuid4

import pytest

from chatcore.domain.entities.conversation import Conversation, direct_key_for
from chatcore.domain.entities.message import DELETED_MESSAGE_PLACEHOLDER, Message
from chatcore.domain.exceptions import InvalidOperationError
from chatcore.domain.value_objects.conversation_id import ConversationId
from chatcore.domain.value_objects.read_receipts import ReadReceipts
from chatcore.domain.value_objects.user_id import UserId


def _user_id():
    return UserId(str(uuid4()))


class TestValueObjects:
    def test_ids_must_be_uuids(self):
        with pytest.raises(ValueError):
            UserId("alice")
        with pytest.raises(ValueError):
            ConversationId("")

    def test_direct_key_ignores_argument_order(self):
        first, second = _user_id(), _user_id()
        assert direct_key_for(first, second) == direct_key_for(second, first)

    def test_read_receipts_refuse_sender_and_duplicates(self):
        sender, reader = _user_id(), _user_id()
        receipts = ReadReceipts()

        assert receipts.with_reader(sender, sender) is receipts
        once = receipts.with_reader(reader, sender)
        assert once.with_reader(reader, sender) is once
        assert list(once) == [reader]

    def test_read_receipts_from_storage_drop_duplicates(self):
        reader = _user_id()
        assert len(ReadReceipts.of([reader.value, reader.value])) == 1


class TestEntities:
    def test_cannot_open_direct_conversation_with_self(self):
        me = _user_id()
        with pytest.raises(InvalidOperationError):
            Conversation.create_direct(me, me)

    def test_direct_conversation_cannot_be_renamed(self):
        conversation = Conversation.create_direct(_user_id(), _user_id())
        with pytest.raises(InvalidOperationError):
            conversation.rename("Friends")

    def test_soft_delete_replaces_content(self):
        message = Message.create(ConversationId(str(uuid4())), _user_id(), "secret")

        message.soft_delete()

        assert message.is_deleted is True
        assert message.content == DELETED_MESSAGE_PLACEHOLDER

    def test_unread_only_for_other_readers(self):
        sender, reader = _user_id(), _user_id()
        message = Message.create(ConversationId(str(uuid4())), sender, "hi")

        assert message.is_unread_for(sender) is False
        assert message.is_unread_for(reader) is True
        assert message.mark_read_by(reader) is True
        assert message.mark_read_by(reader) is False
        assert message.is_unread_for(reader) is False
