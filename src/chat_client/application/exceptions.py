from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class RequestFailedError(AppError):
    """A backend request failed or returned an unusable response."""

    def __init__(self, detail: str = "", *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(detail)


class NotificationError(AppError):
    pass


class SubscriptionError(AppError):
    pass
