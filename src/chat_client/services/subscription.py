"""Binding of the conversation store to the realtime channel.

States: unbound, or bound to exactly one counterpart. ``bind`` always unbinds
first so that no event name ever has more than one handler registered.
"""
from __future__ import annotations

import logging

from chat_client.application.ports.channel import RealtimeChannel
from chat_client.domain.value_objects.enums import RealtimeEventName
from chat_client.domain.value_objects.ids import UserId
from chat_client.services.chat_store import ConversationStore

logger = logging.getLogger(__name__)


class RealtimeSubscription:
    def __init__(self, channel: RealtimeChannel, store: ConversationStore) -> None:
        self._channel = channel
        self._store = store
        self._bound_to: UserId | None = None

    @property
    def bound_to(self) -> UserId | None:
        return self._bound_to

    @property
    def is_bound(self) -> bool:
        return self._bound_to is not None

    def bind(self, user_id: UserId) -> None:
        if self._bound_to is not None:
            self.unbind()
        for name in RealtimeEventName:
            self._channel.on(name, self._store.apply_event)
        self._bound_to = user_id
        logger.debug("Realtime handlers bound for conversation with %s", user_id)

    def unbind(self) -> None:
        if self._bound_to is None:
            return
        for name in RealtimeEventName:
            self._channel.off(name)
        logger.debug("Realtime handlers unbound for conversation with %s", self._bound_to)
        self._bound_to = None
