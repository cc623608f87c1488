from __future__ import annotations

from support_chat.application.exceptions import ValidationError
from support_chat.application.uow import UnitOfWork
from support_chat.domain.entities.attachment import Attachment, media_type_for


async def register_attachment(url: str, file_name: str, uow: UnitOfWork) -> Attachment:
    """Record an uploaded file so messages can reference it by id."""
    if not url.strip() or not file_name.strip():
        raise ValidationError("Attachment needs a url and a file name")
    attachment = await uow.attachments_w.create(url, file_name, media_type_for(file_name))
    await uow.commit()
    return attachment


async def get_attachment(attachment_id: int, uow: UnitOfWork) -> Attachment | None:
    return await uow.attachments.get_by_id(attachment_id)
