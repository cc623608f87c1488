from __future__ import annotations

from typing import Protocol

from support_chat.domain.entities.attachment import Attachment


class AttachmentReader(Protocol):
    async def get_by_id(self, attachment_id: int) -> Attachment | None: ...


class AttachmentWriter(Protocol):
    async def create(self, url: str, file_name: str, media_type: str) -> Attachment: ...
