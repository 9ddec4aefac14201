"""Single serialized state container for the active conversation.

Every mutation publishes a new immutable ``ChatState`` snapshot; listeners
receive the snapshot after it has been installed.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Callable

from chat_client.domain.entities.message import Message
from chat_client.domain.entities.user import UserSummary

logger = logging.getLogger(__name__)

StateListener = Callable[["ChatState"], None]


@dataclass(frozen=True, slots=True)
class ChatState:
    messages: tuple[Message, ...] = ()
    users: tuple[UserSummary, ...] = ()
    selected_user: UserSummary | None = None
    is_users_loading: bool = False
    is_messages_loading: bool = False
    is_typing: bool = False


class StateContainer:
    def __init__(self, initial: ChatState | None = None) -> None:
        self._state = initial or ChatState()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> ChatState:
        return self._state

    def set(self, **changes: Any) -> ChatState:
        self._state = dataclasses.replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception("State listener failed")
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe
