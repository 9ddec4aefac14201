from __future__ import annotations

import logging
from typing import Protocol

from chat_client.domain.entities.message import Message

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Best-effort OS notification and audio cue for an incoming message.

    Implementations raise ``NotificationError`` and nothing else on failure.
    """

    async def notify(self, message: Message) -> None: ...


class NoticeSink(Protocol):
    """User-visible, non-blocking failure notices (toasts)."""

    def error(self, text: str) -> None: ...


class LoggingNoticeSink:
    """Default notice sink for headless use."""

    def error(self, text: str) -> None:
        logger.warning("Notice: %s", text)
