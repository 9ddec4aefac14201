from __future__ import annotations

from typing import NewType

UserId = NewType("UserId", str)
MessageId = NewType("MessageId", str)
