from __future__ import annotations

import pytest

from chat_client.domain.entities.message import Reaction
from chat_client.domain.events.realtime import (
    MessageDeleted,
    MessageEdited,
    MessagesRead,
    NewMessageReceived,
    ReactionUpdated,
    TypingStarted,
    TypingStopped,
)
from chat_client.domain.value_objects.ids import MessageId
from tests.conftest import ME, U2, U3, make_message, make_user, seed


@pytest.mark.asyncio
async def test_new_message_from_counterpart_appends_and_marks_read(store, gateway, notifications):
    seed(store, make_user("U2"), make_message(message_id="m1"))
    incoming = make_message(message_id="m2", sender_id="U2", receiver_id="me", sender_name="User Two")

    await store.apply_event(NewMessageReceived(message=incoming))

    assert store.state.messages[-1] is incoming
    assert len(store.state.messages) == 2
    assert notifications.notified == [incoming]
    assert gateway.called("mark_read") == [(U2,)]


@pytest.mark.asyncio
async def test_new_message_from_other_user_only_notifies(store, gateway, notifications):
    existing = make_message(message_id="m1")
    seed(store, make_user("U2"), existing)
    incoming = make_message(message_id="x", sender_id="U3", receiver_id="me")

    await store.apply_event(NewMessageReceived(message=incoming))

    assert store.state.messages == (existing,)
    assert notifications.notified == [incoming]
    assert gateway.called("mark_read") == []


@pytest.mark.asyncio
async def test_new_message_without_selection_only_notifies(store, notifications):
    incoming = make_message(sender_id="U2", receiver_id="me")

    await store.apply_event(NewMessageReceived(message=incoming))

    assert store.state.messages == ()
    assert notifications.notified == [incoming]


@pytest.mark.asyncio
async def test_duplicate_new_message_is_appended_twice(store):
    seed(store, make_user("U2"))
    incoming = make_message(message_id="dup", sender_id="U2", receiver_id="me")

    await store.apply_event(NewMessageReceived(message=incoming))
    await store.apply_event(NewMessageReceived(message=incoming))

    assert [m.id for m in store.state.messages] == ["dup", "dup"]


@pytest.mark.asyncio
async def test_notification_failure_is_swallowed(store, notifications):
    seed(store, make_user("U2"))
    notifications.raise_on_notify = True
    incoming = make_message(message_id="m1", sender_id="U2", receiver_id="me")

    await store.apply_event(NewMessageReceived(message=incoming))

    assert store.state.messages == (incoming,)


@pytest.mark.asyncio
async def test_typing_toggles_for_counterpart(store):
    seed(store, make_user("U2"))

    await store.apply_event(TypingStarted(sender_id=U2))
    assert store.state.is_typing is True

    await store.apply_event(TypingStopped(sender_id=U2))
    assert store.state.is_typing is False


@pytest.mark.asyncio
async def test_typing_from_other_sender_is_ignored(store):
    seed(store, make_user("U2"))
    changes: list[object] = []
    store.subscribe(changes.append)

    await store.apply_event(TypingStarted(sender_id=U3))
    assert store.state.is_typing is False

    store._container.set(is_typing=True)
    await store.apply_event(TypingStopped(sender_id=U3))
    assert store.state.is_typing is True
    assert len(changes) == 1


@pytest.mark.asyncio
async def test_messages_read_marks_only_messages_to_reader(store):
    sent = make_message(message_id="s1", sender_id="me", receiver_id="U2")
    sent_elsewhere = make_message(message_id="s2", sender_id="me", receiver_id="U3")
    received = make_message(message_id="r1", sender_id="U2", receiver_id="me")
    seed(store, make_user("U2"), sent, sent_elsewhere, received)

    await store.apply_event(MessagesRead(reader_id=U2))

    read_flags = {m.id: m.read for m in store.state.messages}
    assert read_flags == {"s1": True, "s2": False, "r1": False}


@pytest.mark.asyncio
async def test_reaction_updated_replaces_list_wholesale(store):
    m1 = make_message(message_id="m1", sender_id="me", text="hi")
    m2 = make_message(message_id="m2", reactions=(Reaction(user_id=ME, emoji="👍"),))
    seed(store, make_user("U2"), m1, m2)
    heart = (Reaction(user_id=U2, emoji="❤️"),)

    await store.apply_event(ReactionUpdated(message_id=MessageId("m1"), reactions=heart))

    updated = store.state.messages[0]
    assert updated.reactions == heart
    assert updated.text == "hi"
    assert updated.sender_id == "me"
    assert store.state.messages[1] is m2


@pytest.mark.asyncio
async def test_message_edited_replaces_text(store):
    seed(store, make_user("U2"), make_message(message_id="m1", text="before"))

    await store.apply_event(MessageEdited(message_id=MessageId("m1"), text="after"))

    assert store.state.messages[0].text == "after"


@pytest.mark.asyncio
async def test_edit_confirmation_and_push_last_applied_wins(store, gateway):
    seed(store, make_user("U2"), make_message(message_id="m1", text="before"))

    await store.apply_event(MessageEdited(message_id=MessageId("m1"), text="from push"))
    await store.edit_message(MessageId("m1"), "from request")

    assert store.state.messages[0].text == "from request"


@pytest.mark.asyncio
async def test_message_deleted_removes_by_id(store):
    keep = make_message(message_id="m1")
    seed(store, make_user("U2"), keep, make_message(message_id="m2"))

    await store.apply_event(MessageDeleted(message_id=MessageId("m2")))
    await store.apply_event(MessageDeleted(message_id=MessageId("m2")))

    assert store.state.messages == (keep,)
