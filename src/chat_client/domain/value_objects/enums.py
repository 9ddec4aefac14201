from __future__ import annotations

from enum import StrEnum


class RealtimeEventName(StrEnum):
    NEW_MESSAGE = "newMessage"
    TYPING = "typing"
    STOP_TYPING = "stopTyping"
    MESSAGES_READ = "messagesRead"
    REACTION_UPDATED = "reactionUpdated"
    MESSAGE_EDITED = "messageEdited"
    MESSAGE_DELETED = "messageDeleted"


REACTION_EMOJIS: tuple[str, ...] = ("👍", "❤️", "😂", "😮", "😢", "🎉")
