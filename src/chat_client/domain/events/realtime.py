"""Push events delivered by the realtime channel.

``RealtimeEvent`` is a closed union: every payload the channel can deliver is
parsed into exactly one of these types before it reaches the store.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from chat_client.domain.entities.message import Message, Reaction
from chat_client.domain.value_objects.enums import RealtimeEventName
from chat_client.domain.value_objects.ids import MessageId, UserId


@dataclass(frozen=True, slots=True)
class NewMessageReceived:
    name: ClassVar[RealtimeEventName] = RealtimeEventName.NEW_MESSAGE

    message: Message


@dataclass(frozen=True, slots=True)
class TypingStarted:
    name: ClassVar[RealtimeEventName] = RealtimeEventName.TYPING

    sender_id: UserId


@dataclass(frozen=True, slots=True)
class TypingStopped:
    name: ClassVar[RealtimeEventName] = RealtimeEventName.STOP_TYPING

    sender_id: UserId


@dataclass(frozen=True, slots=True)
class MessagesRead:
    name: ClassVar[RealtimeEventName] = RealtimeEventName.MESSAGES_READ

    reader_id: UserId


@dataclass(frozen=True, slots=True)
class ReactionUpdated:
    name: ClassVar[RealtimeEventName] = RealtimeEventName.REACTION_UPDATED

    message_id: MessageId
    reactions: tuple[Reaction, ...]


@dataclass(frozen=True, slots=True)
class MessageEdited:
    name: ClassVar[RealtimeEventName] = RealtimeEventName.MESSAGE_EDITED

    message_id: MessageId
    text: str | None


@dataclass(frozen=True, slots=True)
class MessageDeleted:
    name: ClassVar[RealtimeEventName] = RealtimeEventName.MESSAGE_DELETED

    message_id: MessageId


RealtimeEvent = Union[
    NewMessageReceived,
    TypingStarted,
    TypingStopped,
    MessagesRead,
    ReactionUpdated,
    MessageEdited,
    MessageDeleted,
]
