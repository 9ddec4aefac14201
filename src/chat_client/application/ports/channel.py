from __future__ import annotations

from typing import Awaitable, Callable, Protocol

from chat_client.domain.events.realtime import RealtimeEvent
from chat_client.domain.value_objects.enums import RealtimeEventName

EventHandler = Callable[[RealtimeEvent], Awaitable[None]]


class RealtimeChannel(Protocol):
    """Named-event push channel.

    At most one handler may be registered per event name; registering a second
    one without calling ``off`` first raises ``SubscriptionError``.
    """

    def on(self, name: RealtimeEventName, handler: EventHandler) -> None: ...

    def off(self, name: RealtimeEventName) -> None: ...
