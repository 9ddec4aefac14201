from __future__ import annotations

from typing import Protocol

from chat_client.application.dto.message import SendMessageDTO
from chat_client.domain.entities.message import Message, Reaction
from chat_client.domain.entities.user import UserSummary
from chat_client.domain.value_objects.ids import MessageId, UserId


class RequestGateway(Protocol):
    """Request/response access to the chat backend.

    Every method either returns the server's authoritative result or raises
    ``RequestFailedError``.
    """

    async def list_users(self) -> list[UserSummary]: ...

    async def list_messages(self, user_id: UserId) -> list[Message]: ...

    async def send_message(self, user_id: UserId, payload: SendMessageDTO) -> Message: ...

    async def mark_read(self, user_id: UserId) -> None: ...

    async def add_reaction(self, message_id: MessageId, emoji: str) -> list[Reaction]: ...

    async def remove_reaction(self, message_id: MessageId) -> list[Reaction]: ...

    async def edit_message(self, message_id: MessageId, text: str) -> Message: ...

    async def delete_message(self, message_id: MessageId) -> None: ...
