"""Headless client: python -m chat_client <counterpart user id>

Opens one conversation against the configured backend and logs every state
change until interrupted.
"""
from __future__ import annotations

import argparse
import asyncio
import logging

import redis.asyncio as aioredis

from chat_client.application.ports.notifier import LoggingNoticeSink
from chat_client.application.state import ChatState
from chat_client.config import settings
from chat_client.domain.entities.user import UserSummary
from chat_client.domain.value_objects.ids import UserId
from chat_client.infrastructure.http.gateway import HttpRequestGateway
from chat_client.infrastructure.notify.desktop import DesktopNotificationSink
from chat_client.infrastructure.realtime.redis_channel import RedisRealtimeChannel
from chat_client.services.chat_store import ConversationStore
from chat_client.services.conversation_session import ConversationSession

logger = logging.getLogger(__name__)


def _log_state(state: ChatState) -> None:
    logger.info(
        "messages=%d typing=%s loading=%s",
        len(state.messages),
        state.is_typing,
        state.is_messages_loading,
    )


async def run_client(counterpart_id: str, current_user_id: str) -> None:
    gateway = HttpRequestGateway.from_url(
        settings.API_BASE_URL,
        timeout=settings.API_TIMEOUT_SECONDS,
        session_cookie=settings.API_WITH_CREDENTIALS_COOKIE,
    )
    redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    channel = RedisRealtimeChannel(redis, settings.realtime_channel_for(current_user_id))
    notifications = DesktopNotificationSink(
        sound_path=settings.NOTIFICATION_SOUND_PATH,
        default_icon=settings.DEFAULT_AVATAR,
        enabled=settings.NOTIFICATIONS_ENABLED,
    )
    store = ConversationStore(gateway, LoggingNoticeSink(), notifications)
    store.subscribe(_log_state)
    session = ConversationSession(store, channel)

    await channel.start()
    try:
        await store.load_users()
        user = next(
            (u for u in store.state.users if u.id == counterpart_id),
            UserSummary(id=UserId(counterpart_id), full_name=counterpart_id),
        )
        await session.open(user)
        while True:
            await asyncio.sleep(3600)
    except asyncio.CancelledError:
        pass
    finally:
        session.close()
        await channel.stop()
        await redis.aclose()
        await gateway.aclose()
        await notifications.aclose()


def main() -> None:
    parser = argparse.ArgumentParser(prog="chat-client")
    parser.add_argument("counterpart_id", help="user id of the conversation counterpart")
    parser.add_argument("--me", default=settings.CURRENT_USER_ID, help="local user id")
    args = parser.parse_args()
    if not args.me:
        parser.error("local user id required (--me or CURRENT_USER_ID)")

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(run_client(args.counterpart_id, args.me))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
