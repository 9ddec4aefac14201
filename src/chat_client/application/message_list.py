"""Pure transforms over the message list.

Each helper returns a new tuple; the input is never modified.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Iterable

from chat_client.domain.entities.message import Message
from chat_client.domain.value_objects.ids import MessageId, UserId


def find_by_id(messages: Iterable[Message], message_id: MessageId) -> Message | None:
    for msg in messages:
        if msg.id == message_id:
            return msg
    return None


def replace_by_id(
    messages: Iterable[Message],
    message_id: MessageId,
    **changes: Any,
) -> tuple[Message, ...]:
    return tuple(
        dataclasses.replace(msg, **changes) if msg.id == message_id else msg
        for msg in messages
    )


def remove_by_id(messages: Iterable[Message], message_id: MessageId) -> tuple[Message, ...]:
    return tuple(msg for msg in messages if msg.id != message_id)


def mark_read_by(messages: Iterable[Message], reader_id: UserId) -> tuple[Message, ...]:
    """Flag every message addressed to ``reader_id`` as read."""
    return tuple(
        dataclasses.replace(msg, read=True) if msg.receiver_id == reader_id else msg
        for msg in messages
    )
