from __future__ import annotations

from dataclasses import dataclass

from support_chat.domain.value_objects.enums import MediaType

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "webp", "gif"})
VIDEO_EXTENSIONS = frozenset({"mp4", "mkv", "mov", "avi"})


@dataclass(frozen=True, slots=True)
class Attachment:
    id: int
    url: str
    file_name: str
    media_type: str


def media_type_for(file_name: str) -> MediaType:
    """Classify a file by its extension (case-insensitive)."""
    _, dot, extension = file_name.rpartition(".")
    if not dot:
        return MediaType.FILE
    extension = extension.lower()
    if extension in IMAGE_EXTENSIONS:
        return MediaType.IMAGE
    if extension in VIDEO_EXTENSIONS:
        return MediaType.VIDEO
    return MediaType.FILE
