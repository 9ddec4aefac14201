"""Conversation store: the single source of truth for the chat view.

Request-driven operations change state only after the backend confirms the
mutation. Push events are applied through ``apply_event``. Both paths funnel
into the same ``StateContainer`` and whichever update lands last wins.
"""
from __future__ import annotations

import logging
from typing import Callable

from chat_client.application import message_list
from chat_client.application.dto.message import SendMessageDTO
from chat_client.application.exceptions import NotificationError, RequestFailedError
from chat_client.application.ports.gateway import RequestGateway
from chat_client.application.ports.notifier import NoticeSink, NotificationSink
from chat_client.application.state import ChatState, StateContainer, StateListener
from chat_client.domain.entities.message import Message
from chat_client.domain.entities.user import UserSummary
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
from chat_client.domain.value_objects.ids import MessageId, UserId

logger = logging.getLogger(__name__)

# (generation, counterpart id) captured when a conversation-scoped request is issued.
_ConversationToken = tuple[int, UserId | None]


class ConversationStore:
    def __init__(
        self,
        gateway: RequestGateway,
        notices: NoticeSink,
        notifications: NotificationSink,
        *,
        container: StateContainer | None = None,
    ) -> None:
        self._gateway = gateway
        self._notices = notices
        self._notifications = notifications
        self._container = container or StateContainer()
        self._generation = 0

    @property
    def state(self) -> ChatState:
        return self._container.state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        return self._container.subscribe(listener)

    # -- conversation selection -------------------------------------------

    def select_conversation(self, user: UserSummary | None) -> None:
        """Make ``user`` the active counterpart.

        Loading and realtime rebinding are driven by ``ConversationSession``.
        Requests issued for a different previous conversation are discarded
        when they complete. Re-selecting the current counterpart keeps its
        messages and its in-flight requests.
        """
        previous = self.state.selected_user
        if previous is not None and user is not None and previous.id == user.id:
            self._container.set(selected_user=user)
            return
        self._generation += 1
        self._container.set(
            selected_user=user,
            messages=(),
            is_typing=False,
            is_messages_loading=False,
        )

    def _token(self) -> _ConversationToken:
        selected = self.state.selected_user
        return self._generation, selected.id if selected else None

    def _is_current(self, token: _ConversationToken) -> bool:
        return token == self._token()

    # -- request-driven operations ----------------------------------------

    async def load_users(self) -> None:
        self._container.set(is_users_loading=True)
        try:
            users = await self._gateway.list_users()
        except RequestFailedError as exc:
            self._notices.error(exc.detail or "Failed to load users.")
        else:
            self._container.set(users=tuple(users))
        finally:
            self._container.set(is_users_loading=False)

    async def load_messages(self, user_id: UserId) -> None:
        token: _ConversationToken = (self._generation, user_id)
        if not self._is_current(token):
            logger.debug("Not loading messages for %s: not the active conversation", user_id)
            return
        self._container.set(is_messages_loading=True)
        try:
            messages = await self._gateway.list_messages(user_id)
        except RequestFailedError as exc:
            if self._is_current(token):
                self._container.set(is_messages_loading=False)
                self._notices.error(exc.detail or "Failed to load messages.")
            else:
                logger.debug("Ignoring failed message load for stale conversation %s", user_id)
            return

        if not self._is_current(token):
            logger.debug("Discarding stale message list for user %s", user_id)
            return
        self._container.set(messages=tuple(messages), is_messages_loading=False)

    async def send_message(self, payload: SendMessageDTO) -> None:
        selected = self.state.selected_user
        if selected is None:
            logger.warning("send_message called without an active conversation")
            return

        token = self._token()
        try:
            message = await self._gateway.send_message(selected.id, payload)
        except RequestFailedError as exc:
            self._notices.error(exc.detail or "Failed to send message.")
            return

        if not self._is_current(token):
            logger.debug("Discarding sent message %s: conversation changed", message.id)
            return
        self._container.set(messages=self.state.messages + (message,))

    async def mark_read(self, user_id: UserId) -> None:
        try:
            await self._gateway.mark_read(user_id)
        except RequestFailedError as exc:
            logger.warning("Failed to mark as read: %s", exc.detail)

    async def add_reaction(self, message_id: MessageId, emoji: str) -> None:
        try:
            reactions = await self._gateway.add_reaction(message_id, emoji)
        except RequestFailedError:
            self._notices.error("Failed to add reaction")
            return
        self._replace(message_id, reactions=tuple(reactions))

    async def remove_reaction(self, message_id: MessageId) -> None:
        try:
            reactions = await self._gateway.remove_reaction(message_id)
        except RequestFailedError:
            self._notices.error("Failed to remove reaction")
            return
        self._replace(message_id, reactions=tuple(reactions))

    async def toggle_reaction(self, message_id: MessageId, emoji: str, user_id: UserId) -> None:
        """Remove ``user_id``'s reaction if it is ``emoji``, otherwise set it."""
        message = message_list.find_by_id(self.state.messages, message_id)
        current = message.own_reaction(user_id) if message else None
        if current is not None and current.emoji == emoji:
            await self.remove_reaction(message_id)
        else:
            await self.add_reaction(message_id, emoji)

    async def edit_message(self, message_id: MessageId, text: str) -> None:
        try:
            edited = await self._gateway.edit_message(message_id, text)
        except RequestFailedError:
            self._notices.error("Failed to edit message")
            return
        self._replace(message_id, text=edited.text)

    async def delete_message(self, message_id: MessageId) -> None:
        try:
            await self._gateway.delete_message(message_id)
        except RequestFailedError:
            self._notices.error("Failed to delete message")
            return
        self._remove(message_id)

    # -- push events --------------------------------------------------------

    async def apply_event(self, event: RealtimeEvent) -> None:
        """Apply one push event from the realtime channel."""
        if isinstance(event, NewMessageReceived):
            await self._on_new_message(event.message)
        elif isinstance(event, TypingStarted):
            if self._is_counterpart(event.sender_id):
                self._container.set(is_typing=True)
        elif isinstance(event, TypingStopped):
            if self._is_counterpart(event.sender_id):
                self._container.set(is_typing=False)
        elif isinstance(event, MessagesRead):
            self._container.set(
                messages=message_list.mark_read_by(self.state.messages, event.reader_id),
            )
        elif isinstance(event, ReactionUpdated):
            self._replace(event.message_id, reactions=event.reactions)
        elif isinstance(event, MessageEdited):
            self._replace(event.message_id, text=event.text)
        elif isinstance(event, MessageDeleted):
            self._remove(event.message_id)
        else:
            logger.debug("Ignoring unknown realtime event: %r", event)

    async def _on_new_message(self, message: Message) -> None:
        # Alert for every conversation, not only the open one.
        try:
            await self._notifications.notify(message)
        except NotificationError:
            logger.debug("Notification for message %s failed", message.id, exc_info=True)

        selected = self.state.selected_user
        if selected is None or message.sender_id != selected.id:
            return

        self._container.set(messages=self.state.messages + (message,))
        await self.mark_read(selected.id)

    def _is_counterpart(self, user_id: UserId) -> bool:
        selected = self.state.selected_user
        return selected is not None and selected.id == user_id

    # -- list helpers -------------------------------------------------------

    def _replace(self, message_id: MessageId, **changes: object) -> None:
        messages = self.state.messages
        if message_list.find_by_id(messages, message_id) is None:
            return
        self._container.set(messages=message_list.replace_by_id(messages, message_id, **changes))

    def _remove(self, message_id: MessageId) -> None:
        messages = self.state.messages
        if message_list.find_by_id(messages, message_id) is None:
            return
        self._container.set(messages=message_list.remove_by_id(messages, message_id))
