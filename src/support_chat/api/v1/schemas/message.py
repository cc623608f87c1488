from __future__ import annotations

from datetime import datetime
from typing import Self

from pydantic import BaseModel, Field, model_validator

from support_chat.config import settings


class SendMessageRequest(BaseModel):
    owner_id: int | None = None
    content: str | None = Field(None, max_length=settings.MESSAGE_MAX_LENGTH)
    attachment_id: int | None = None

    @model_validator(mode="after")
    def _require_body(self) -> Self:
        if (self.content is None or not self.content.strip()) and self.attachment_id is None:
            raise ValueError("content or attachment_id is required")
        return self


class AttachmentResponse(BaseModel):
    id: int
    url: str
    file_name: str
    media_type: str

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    id: int
    owner_id: int
    owner_address: str
    direction: str
    content: str | None
    attachment: AttachmentResponse | None
    timestamp: datetime
    seen: bool

    model_config = {"from_attributes": True}
