from __future__ import annotations

import logging

from chat_client.application.ports.channel import RealtimeChannel
from chat_client.domain.entities.user import UserSummary
from chat_client.services.chat_store import ConversationStore
from chat_client.services.subscription import RealtimeSubscription

logger = logging.getLogger(__name__)


class ConversationSession:
    """Drives conversation switches for a view.

    Opening a conversation unbinds the previous one, selects the new
    counterpart, binds realtime handlers, loads its history and acknowledges
    the conversation as read. A push that lands while the history is loading
    is overwritten by the loaded list.
    """

    def __init__(self, store: ConversationStore, channel: RealtimeChannel) -> None:
        self._store = store
        self._subscription = RealtimeSubscription(channel, store)

    @property
    def store(self) -> ConversationStore:
        return self._store

    @property
    def subscription(self) -> RealtimeSubscription:
        return self._subscription

    async def open(self, user: UserSummary) -> None:
        self._subscription.unbind()
        self._store.select_conversation(user)
        logger.info("Opening conversation with %s", user.id)

        self._subscription.bind(user.id)
        await self._store.load_messages(user.id)
        await self._store.mark_read(user.id)

    def close(self) -> None:
        self._subscription.unbind()
        self._store.select_conversation(None)
