from __future__ import annotations

from fastapi import APIRouter

from support_chat.api.deps import CurrentPrincipal, UoWDep
from support_chat.api.v1.schemas.attachment import RegisterAttachmentRequest
from support_chat.api.v1.schemas.message import AttachmentResponse
from support_chat.application.exceptions import NotFoundError
from support_chat.services import attachment_service

router = APIRouter(prefix="/api/v1/chat/attachments", tags=["attachments"])


@router.post("", response_model=AttachmentResponse, status_code=201)
async def register_attachment(
    body: RegisterAttachmentRequest,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> AttachmentResponse:
    attachment = await attachment_service.register_attachment(body.url, body.file_name, uow)
    return AttachmentResponse.model_validate(attachment, from_attributes=True)


@router.get("/{attachment_id}", response_model=AttachmentResponse)
async def get_attachment(
    attachment_id: int,
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> AttachmentResponse:
    attachment = await attachment_service.get_attachment(attachment_id, uow)
    if attachment is None:
        raise NotFoundError("Attachment not found")
    return AttachmentResponse.model_validate(attachment, from_attributes=True)
