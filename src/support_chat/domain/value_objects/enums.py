from __future__ import annotations

from enum import StrEnum


class ParticipantKind(StrEnum):
    USER = "user"
    ADMIN = "admin"


class Direction(StrEnum):
    """Which of the two fixed parties authored a message."""

    USER = "user"
    OPERATOR = "operator"

    @property
    def counterpart(self) -> Direction:
        return Direction.OPERATOR if self is Direction.USER else Direction.USER


class MediaType(StrEnum):
    IMAGE = "image"
    VIDEO = "video"
    FILE = "file"
