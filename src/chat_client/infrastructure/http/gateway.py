"""httpx implementation of the ``RequestGateway`` port."""
from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from chat_client.application.dto.message import SendMessageDTO
from chat_client.application.exceptions import RequestFailedError
from chat_client.domain.entities.message import Message, Reaction
from chat_client.domain.entities.user import UserSummary
from chat_client.domain.value_objects.ids import MessageId, UserId
from chat_client.infrastructure.http.schemas import (
    EditMessageResponse,
    ErrorResponse,
    MessageSchema,
    ReactionsResponse,
    UserSummarySchema,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_messages_adapter = TypeAdapter(list[MessageSchema])
_users_adapter = TypeAdapter(list[UserSummarySchema])
_message_adapter = TypeAdapter(MessageSchema)
_reactions_adapter = TypeAdapter(ReactionsResponse)
_edit_adapter = TypeAdapter(EditMessageResponse)


class HttpRequestGateway:
    """Implements application.ports.gateway.RequestGateway."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def from_url(
        cls,
        base_url: str,
        *,
        timeout: float = 10.0,
        session_cookie: str | None = None,
    ) -> HttpRequestGateway:
        cookies = {"jwt": session_cookie} if session_cookie else None
        return cls(httpx.AsyncClient(base_url=base_url, timeout=timeout, cookies=cookies))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_users(self) -> list[UserSummary]:
        data = await self._request("GET", "/messages/users")
        return [u.to_entity() for u in self._parse(_users_adapter, data)]

    async def list_messages(self, user_id: UserId) -> list[Message]:
        data = await self._request("GET", f"/messages/{user_id}")
        return [m.to_entity() for m in self._parse(_messages_adapter, data)]

    async def send_message(self, user_id: UserId, payload: SendMessageDTO) -> Message:
        data = await self._request("POST", f"/messages/send/{user_id}", json=payload.to_payload())
        return self._parse(_message_adapter, data).to_entity()

    async def mark_read(self, user_id: UserId) -> None:
        await self._request("POST", f"/messages/read/{user_id}")

    async def add_reaction(self, message_id: MessageId, emoji: str) -> list[Reaction]:
        data = await self._request("POST", f"/messages/reaction/{message_id}", json={"emoji": emoji})
        return [r.to_entity() for r in self._parse(_reactions_adapter, data).reactions]

    async def remove_reaction(self, message_id: MessageId) -> list[Reaction]:
        data = await self._request("DELETE", f"/messages/reaction/{message_id}")
        return [r.to_entity() for r in self._parse(_reactions_adapter, data).reactions]

    async def edit_message(self, message_id: MessageId, text: str) -> Message:
        data = await self._request("PUT", f"/messages/edit/{message_id}", json={"text": text})
        return self._parse(_edit_adapter, data).message.to_entity()

    async def delete_message(self, message_id: MessageId) -> None:
        await self._request("DELETE", f"/messages/delete/{message_id}")

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            resp = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            raise RequestFailedError(str(exc)) from exc

        if resp.is_error:
            raise RequestFailedError(_error_detail(resp), status_code=resp.status_code)
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise RequestFailedError("Invalid response from server") from exc

    @staticmethod
    def _parse(adapter: TypeAdapter[T], data: Any) -> T:
        try:
            return adapter.validate_python(data)
        except ValidationError as exc:
            logger.debug("Unexpected response shape: %s", exc)
            raise RequestFailedError("Invalid response from server") from exc


def _error_detail(resp: httpx.Response) -> str:
    """Server-provided ``message`` field, or empty string when absent."""
    try:
        return ErrorResponse.model_validate(resp.json()).message or ""
    except (ValueError, ValidationError):
        return ""
