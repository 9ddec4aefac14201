from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SendMessageDTO:
    text: str | None = None
    image: str | None = None

    @property
    def is_empty(self) -> bool:
        return not (self.text and self.text.strip()) and not self.image

    def to_payload(self) -> dict[str, str]:
        payload: dict[str, str] = {}
        if self.text is not None:
            payload["text"] = self.text
        if self.image is not None:
            payload["image"] = self.image
        return payload
