"""Shared test fixtures."""
from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import pytest

from chat_client.application.dto.message import SendMessageDTO
from chat_client.application.exceptions import NotificationError, RequestFailedError, SubscriptionError
from chat_client.application.ports.channel import EventHandler
from chat_client.domain.entities.message import Message, Reaction
from chat_client.domain.entities.user import UserSummary
from chat_client.domain.events.realtime import RealtimeEvent
from chat_client.domain.value_objects.enums import RealtimeEventName
from chat_client.domain.value_objects.ids import MessageId, UserId
from chat_client.services.chat_store import ConversationStore
from chat_client.services.conversation_session import ConversationSession

ME = UserId("me")
U2 = UserId("U2")
U3 = UserId("U3")


def make_user(user_id: str = "U2", full_name: str = "User Two") -> UserSummary:
    return UserSummary(id=UserId(user_id), full_name=full_name, profile_pic=None)


def make_message(
    *,
    message_id: str | None = None,
    sender_id: str = "me",
    receiver_id: str = "U2",
    text: str | None = "hello",
    image: str | None = None,
    read: bool = False,
    reactions: tuple[Reaction, ...] = (),
    sender_name: str | None = None,
) -> Message:
    return Message(
        id=MessageId(message_id or uuid.uuid4().hex),
        sender_id=UserId(sender_id),
        receiver_id=UserId(receiver_id),
        text=text,
        image=image,
        created_at=datetime.now(timezone.utc),
        read=read,
        reactions=reactions,
        sender_name=sender_name,
    )


@dataclass
class FakeGateway:
    """In-memory RequestGateway.

    Set ``fail`` to a method name (or ``"*"``) to make calls raise
    ``RequestFailedError``. Set ``gates[method]`` to an ``asyncio.Event`` to
    hold a call until the test releases it.
    """

    users: list[UserSummary] = field(default_factory=list)
    conversations: dict[str, list[Message]] = field(default_factory=dict)
    reactions: dict[str, list[Reaction]] = field(default_factory=dict)
    fail: set[str] = field(default_factory=set)
    fail_detail: str = ""
    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    me: UserId = ME

    async def _enter(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        gate = self.gates.get(method)
        if gate is not None:
            await gate.wait()
        if method in self.fail or "*" in self.fail:
            raise RequestFailedError(self.fail_detail, status_code=500)

    async def list_users(self) -> list[UserSummary]:
        await self._enter("list_users")
        return list(self.users)

    async def list_messages(self, user_id: UserId) -> list[Message]:
        await self._enter("list_messages", user_id)
        return list(self.conversations.get(user_id, []))

    async def send_message(self, user_id: UserId, payload: SendMessageDTO) -> Message:
        await self._enter("send_message", user_id, payload)
        msg = make_message(sender_id=self.me, receiver_id=user_id, text=payload.text, image=payload.image)
        self.conversations.setdefault(user_id, []).append(msg)
        return msg

    async def mark_read(self, user_id: UserId) -> None:
        await self._enter("mark_read", user_id)

    async def add_reaction(self, message_id: MessageId, emoji: str) -> list[Reaction]:
        await self._enter("add_reaction", message_id, emoji)
        current = [r for r in self.reactions.get(message_id, []) if r.user_id != self.me]
        current.append(Reaction(user_id=self.me, emoji=emoji))
        self.reactions[message_id] = current
        return list(current)

    async def remove_reaction(self, message_id: MessageId) -> list[Reaction]:
        await self._enter("remove_reaction", message_id)
        current = [r for r in self.reactions.get(message_id, []) if r.user_id != self.me]
        self.reactions[message_id] = current
        return list(current)

    async def edit_message(self, message_id: MessageId, text: str) -> Message:
        await self._enter("edit_message", message_id, text)
        return make_message(message_id=message_id, text=text.strip())

    async def delete_message(self, message_id: MessageId) -> None:
        await self._enter("delete_message", message_id)

    def called(self, method: str) -> list[tuple[Any, ...]]:
        return [args for name, args in self.calls if name == method]


@dataclass
class FakeChannel:
    """RealtimeChannel that records registrations and lets tests push events."""

    handlers: dict[RealtimeEventName, list[EventHandler]] = field(default_factory=dict)
    strict: bool = True

    def on(self, name: RealtimeEventName, handler: EventHandler) -> None:
        bound = self.handlers.setdefault(name, [])
        if bound and self.strict:
            raise SubscriptionError(f"handler already registered for {name}")
        bound.append(handler)

    def off(self, name: RealtimeEventName) -> None:
        self.handlers.pop(name, None)

    def count(self, name: RealtimeEventName) -> int:
        return len(self.handlers.get(name, []))

    async def push(self, event: RealtimeEvent) -> None:
        for handler in list(self.handlers.get(event.name, [])):
            await handler(event)


@dataclass
class FakeNoticeSink:
    errors: list[str] = field(default_factory=list)

    def error(self, text: str) -> None:
        self.errors.append(text)


@dataclass
class FakeNotificationSink:
    notified: list[Message] = field(default_factory=list)
    raise_on_notify: bool = False

    async def notify(self, message: Message) -> None:
        self.notified.append(message)
        if self.raise_on_notify:
            raise NotificationError("no display")


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway(users=[make_user("U2"), make_user("U3", "User Three")])


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def notices() -> FakeNoticeSink:
    return FakeNoticeSink()


@pytest.fixture
def notifications() -> FakeNotificationSink:
    return FakeNotificationSink()


@pytest.fixture
def store(gateway, notices, notifications) -> ConversationStore:
    return ConversationStore(gateway, notices, notifications)


@pytest.fixture
def session(store, channel) -> ConversationSession:
    return ConversationSession(store, channel)


def seed(store: ConversationStore, user: UserSummary, *messages: Message) -> None:
    """Select ``user`` and install ``messages`` as the loaded history."""
    store.select_conversation(user)
    store._container.set(messages=tuple(messages))
