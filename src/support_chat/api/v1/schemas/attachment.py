from __future__ import annotations

from pydantic import BaseModel, Field


class RegisterAttachmentRequest(BaseModel):
    url: str = Field(..., min_length=1, max_length=2048)
    file_name: str = Field(..., min_length=1, max_length=255)
