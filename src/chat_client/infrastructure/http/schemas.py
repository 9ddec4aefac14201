"""Backend wire models (camelCase, Mongo-style ``_id``)."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from chat_client.domain.entities.message import Message, Reaction
from chat_client.domain.entities.user import UserSummary
from chat_client.domain.value_objects.ids import MessageId, UserId


class WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ReactionSchema(WireModel):
    user_id: str = Field(alias="userId")
    emoji: str

    def to_entity(self) -> Reaction:
        return Reaction(user_id=UserId(self.user_id), emoji=self.emoji)


class MessageSchema(WireModel):
    id: str = Field(alias="_id")
    sender_id: str = Field(alias="senderId")
    receiver_id: str = Field(alias="receiverId")
    text: str | None = None
    image: str | None = None
    created_at: datetime = Field(alias="createdAt")
    read: bool = False
    reactions: list[ReactionSchema] = []
    sender_name: str | None = Field(default=None, alias="senderName")
    profile_pic: str | None = Field(default=None, alias="profilePic")

    def to_entity(self) -> Message:
        return Message(
            id=MessageId(self.id),
            sender_id=UserId(self.sender_id),
            receiver_id=UserId(self.receiver_id),
            text=self.text,
            image=self.image,
            created_at=self.created_at,
            read=self.read,
            reactions=tuple(r.to_entity() for r in self.reactions),
            sender_name=self.sender_name,
            profile_pic=self.profile_pic,
        )


class UserSummarySchema(WireModel):
    id: str = Field(alias="_id")
    full_name: str = Field(default="", alias="fullName")
    profile_pic: str | None = Field(default=None, alias="profilePic")

    def to_entity(self) -> UserSummary:
        return UserSummary(
            id=UserId(self.id),
            full_name=self.full_name,
            profile_pic=self.profile_pic or None,
        )


class ReactionsResponse(WireModel):
    reactions: list[ReactionSchema]


class EditMessageResponse(WireModel):
    message: MessageSchema


class ErrorResponse(WireModel):
    message: str | None = None
