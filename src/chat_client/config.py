from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    API_BASE_URL: str = "http://localhost:3000/api"
    API_TIMEOUT_SECONDS: float = 10.0
    API_WITH_CREDENTIALS_COOKIE: str | None = None

    REDIS_URL: str = "redis://localhost:6379/0"
    REALTIME_CHANNEL_PREFIX: str = "chat.user."

    CURRENT_USER_ID: str | None = None

    NOTIFICATIONS_ENABLED: bool = True
    NOTIFICATION_SOUND_PATH: str | None = "notification.mp3"
    DEFAULT_AVATAR: str = "/avatar.png"

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    def realtime_channel_for(self, user_id: str) -> str:
        return f"{self.REALTIME_CHANNEL_PREFIX}{user_id}"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
