"""Best-effort desktop notification and sound for incoming messages."""
from __future__ import annotations

import asyncio
import logging
import shutil

from chat_client.application.exceptions import NotificationError
from chat_client.domain.entities.message import Message

logger = logging.getLogger(__name__)

IMAGE_PLACEHOLDER = "📷 Image message"

_SOUND_PLAYERS = ("paplay", "aplay", "afplay")


def notification_title(message: Message) -> str:
    return f"New message from {message.sender_name or 'someone'}"


def notification_body(message: Message) -> str:
    return message.text or IMAGE_PLACEHOLDER


class DesktopNotificationSink:
    """Implements application.ports.notifier.NotificationSink.

    A missing tool is skipped silently. When a helper process cannot be
    started the remaining cue is still attempted and ``NotificationError`` is
    raised afterwards. Started helpers are reaped in the background.
    """

    def __init__(
        self,
        *,
        sound_path: str | None = None,
        default_icon: str = "/avatar.png",
        enabled: bool = True,
    ) -> None:
        self._sound_path = sound_path
        self._default_icon = default_icon
        self._enabled = enabled
        self._reapers: set[asyncio.Task[int]] = set()

    async def notify(self, message: Message) -> None:
        if not self._enabled:
            return
        failures: list[str] = []
        for cue in (self._show(message), self._play_sound()):
            try:
                await cue
            except OSError as exc:
                failures.append(str(exc))
        if failures:
            raise NotificationError("; ".join(failures))

    async def aclose(self) -> None:
        """Wait for helper processes that are still running."""
        if self._reapers:
            await asyncio.gather(*self._reapers, return_exceptions=True)

    async def _show(self, message: Message) -> None:
        notify_send = shutil.which("notify-send")
        if notify_send is None:
            logger.debug("notify-send not available, skipping notification")
            return
        await self._spawn(
            notify_send,
            "--icon",
            message.profile_pic or self._default_icon,
            notification_title(message),
            notification_body(message),
        )

    async def _play_sound(self) -> None:
        if not self._sound_path:
            return
        for player in _SOUND_PLAYERS:
            path = shutil.which(player)
            if path is not None:
                await self._spawn(path, self._sound_path)
                return
        logger.debug("No audio player available for notification sound")

    async def _spawn(self, *argv: str) -> None:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        reaper = asyncio.create_task(proc.wait(), name=f"reap-{argv[0]}")
        self._reapers.add(reaper)
        reaper.add_done_callback(self._reapers.discard)
