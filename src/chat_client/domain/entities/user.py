from __future__ import annotations

from dataclasses import dataclass

from chat_client.domain.value_objects.ids import UserId


@dataclass(frozen=True, slots=True)
class UserSummary:
    id: UserId
    full_name: str
    profile_pic: str | None = None
