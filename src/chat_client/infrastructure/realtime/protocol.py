"""Push payload models and their mapping to ``RealtimeEvent``."""
from __future__ import annotations

from typing import Any

from pydantic import Field

from chat_client.domain.events.realtime import (
    MessageDeleted,
    MessageEdited,
    MessagesRead,
    NewMessageReceived,
    ReactionUpdated,
    RealtimeEvent,
    TypingStarted,
    TypingStopped,
)
from chat_client.domain.value_objects.enums import RealtimeEventName
from chat_client.domain.value_objects.ids import MessageId, UserId
from chat_client.infrastructure.http.schemas import MessageSchema, ReactionSchema, WireModel


class TypingPayload(WireModel):
    sender_id: str = Field(alias="senderId")


class MessagesReadPayload(WireModel):
    reader_id: str = Field(alias="readerId")


class ReactionUpdatedPayload(WireModel):
    message_id: str = Field(alias="messageId")
    reactions: list[ReactionSchema]


class EditedMessage(WireModel):
    id: str = Field(alias="_id")
    text: str | None = None


class MessageEditedPayload(WireModel):
    message: EditedMessage


class MessageDeletedPayload(WireModel):
    message_id: str = Field(alias="messageId")


def parse_event(name: str, data: dict[str, Any]) -> RealtimeEvent:
    """Build a typed event from a raw channel payload.

    Raises ``ValueError`` for unknown names and ``pydantic.ValidationError``
    for malformed payloads.
    """
    event_name = RealtimeEventName(name)

    if event_name is RealtimeEventName.NEW_MESSAGE:
        return NewMessageReceived(message=MessageSchema.model_validate(data).to_entity())
    if event_name is RealtimeEventName.TYPING:
        return TypingStarted(sender_id=UserId(TypingPayload.model_validate(data).sender_id))
    if event_name is RealtimeEventName.STOP_TYPING:
        return TypingStopped(sender_id=UserId(TypingPayload.model_validate(data).sender_id))
    if event_name is RealtimeEventName.MESSAGES_READ:
        return MessagesRead(reader_id=UserId(MessagesReadPayload.model_validate(data).reader_id))
    if event_name is RealtimeEventName.REACTION_UPDATED:
        reaction_payload = ReactionUpdatedPayload.model_validate(data)
        return ReactionUpdated(
            message_id=MessageId(reaction_payload.message_id),
            reactions=tuple(r.to_entity() for r in reaction_payload.reactions),
        )
    if event_name is RealtimeEventName.MESSAGE_EDITED:
        edited = MessageEditedPayload.model_validate(data).message
        return MessageEdited(message_id=MessageId(edited.id), text=edited.text)
    return MessageDeleted(message_id=MessageId(MessageDeletedPayload.model_validate(data).message_id))
