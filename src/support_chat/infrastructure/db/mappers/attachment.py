from __future__ import annotations

from support_chat.domain.entities.attachment import Attachment
from support_chat.infrastructure.db.models.attachment import AttachmentModel


def model_to_entity(model: AttachmentModel) -> Attachment:
    return Attachment(
        id=model.id,
        url=model.url,
        file_name=model.file_name,
        media_type=model.media_type,
    )
