from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from chat_client.domain.value_objects.ids import MessageId, UserId


@dataclass(frozen=True, slots=True)
class Reaction:
    user_id: UserId
    emoji: str


@dataclass(frozen=True, slots=True)
class Message:
    id: MessageId
    sender_id: UserId
    receiver_id: UserId
    text: str | None
    image: str | None
    created_at: datetime
    read: bool = False
    reactions: tuple[Reaction, ...] = ()
    # Only present on push-delivered messages.
    sender_name: str | None = field(default=None, compare=False)
    profile_pic: str | None = field(default=None, compare=False)

    def is_sent_by(self, user_id: UserId) -> bool:
        return self.sender_id == user_id

    def own_reaction(self, user_id: UserId) -> Reaction | None:
        for reaction in self.reactions:
            if reaction.user_id == user_id:
                return reaction
        return None
