from __future__ import annotations

import json
from datetime import datetime
from typing import Any


class _Encoder(json.JSONEncoder):
    def default(self, o: object) -> Any:
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)


def serialize_event(event_name: str, payload: dict[str, Any]) -> str:
    envelope = {"event": event_name, "data": payload}
    return json.dumps(envelope, cls=_Encoder, ensure_ascii=False)


def deserialize_event(raw: str | bytes) -> tuple[str, dict[str, Any]]:
    data = json.loads(raw)
    return data["event"], data["data"]
