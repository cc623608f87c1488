from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class NotFoundError(AppError):
    pass


class ForbiddenError(AppError):
    pass


class ValidationError(AppError):
    pass


class StorageError(AppError):
    """Persistence is unavailable, failed, or timed out."""


class ChannelUnavailable(AppError):
    """A push hit a closed or superseded channel. Never surfaced to senders."""
