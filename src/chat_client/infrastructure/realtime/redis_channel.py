"""Redis Pub/Sub backed realtime channel.

The backend fans out push events for a user on ``<prefix><user id>`` as JSON
envelopes ``{"event": <name>, "data": <payload>}``. Events are decoded and
handed to the handler registered for their name, one at a time, in arrival
order.
"""
from __future__ import annotations

import asyncio
import logging

import redis.asyncio as aioredis
from pydantic import ValidationError

from chat_client.application.exceptions import SubscriptionError
from chat_client.application.ports.channel import EventHandler
from chat_client.domain.value_objects.enums import RealtimeEventName
from chat_client.infrastructure.realtime.protocol import parse_event
from chat_client.infrastructure.realtime.serializer import deserialize_event

logger = logging.getLogger(__name__)


class RedisRealtimeChannel:
    """Implements application.ports.channel.RealtimeChannel."""

    def __init__(self, redis: aioredis.Redis, channel: str) -> None:
        self._redis = redis
        self._channel = channel
        self._handlers: dict[RealtimeEventName, EventHandler] = {}
        self._task: asyncio.Task[None] | None = None

    def on(self, name: RealtimeEventName, handler: EventHandler) -> None:
        if name in self._handlers:
            raise SubscriptionError(f"handler already registered for {name}")
        self._handlers[name] = handler

    def off(self, name: RealtimeEventName) -> None:
        self._handlers.pop(name, None)

    def handler_names(self) -> list[RealtimeEventName]:
        return list(self._handlers)

    async def start(self) -> None:
        self._task = asyncio.create_task(self._listen(), name="realtime-channel-listener")
        logger.info("Realtime channel listening on %s", self._channel)

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info("Realtime channel stopped")

    async def dispatch(self, raw: str | bytes) -> None:
        """Decode one envelope and deliver it to its handler, if any."""
        try:
            name, data = deserialize_event(raw)
            event = parse_event(name, data)
        except (ValueError, KeyError, TypeError, ValidationError):
            logger.warning("Dropping malformed realtime envelope", exc_info=True)
            return

        handler = self._handlers.get(event.name)
        if handler is None:
            logger.debug("No handler for %s, dropping", event.name)
            return
        try:
            await handler(event)
        except Exception:
            logger.exception("Error handling realtime event %s", event.name)

    async def _listen(self) -> None:
        pubsub = self._redis.pubsub()
        await pubsub.subscribe(self._channel)
        try:
            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                await self.dispatch(message["data"])
        finally:
            await pubsub.unsubscribe(self._channel)
            await pubsub.aclose()
