from __future__ import annotations

from fastapi import APIRouter, Response, status

from support_chat.api.deps import BrokerDep, CurrentAdmin, UoWDep
from support_chat.api.v1.schemas.message import MessageResponse, SendMessageRequest
from support_chat.application.dto.message import SendMessageDTO
from support_chat.services import conversation_service, read_state_service

router = APIRouter(prefix="/api/v1/chat/admin/conversations", tags=["admin"])


@router.get("", response_model=dict[str, MessageResponse])
async def get_inbox(
    admin: CurrentAdmin,
    uow: UoWDep,
) -> dict[str, MessageResponse]:
    inbox = await conversation_service.build(uow)
    return {
        address: MessageResponse.model_validate(message, from_attributes=True)
        for address, message in inbox.items()
    }


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def purge_conversations(
    admin: CurrentAdmin,
    uow: UoWDep,
) -> Response:
    await conversation_service.purge_all(uow)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{owner_id}/messages", response_model=list[MessageResponse])
async def list_messages(
    owner_id: int,
    admin: CurrentAdmin,
    uow: UoWDep,
) -> list[MessageResponse]:
    messages = await conversation_service.build_for(owner_id, uow)
    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.post("/{owner_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_read(
    owner_id: int,
    admin: CurrentAdmin,
    uow: UoWDep,
) -> Response:
    await read_state_service.mark_read(owner_id, uow)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{owner_id}/messages", response_model=MessageResponse, status_code=201)
async def send_message(
    owner_id: int,
    body: SendMessageRequest,
    admin: CurrentAdmin,
    broker: BrokerDep,
) -> MessageResponse:
    delivery = await broker.send(
        admin,
        SendMessageDTO(
            owner_id=owner_id,
            content=body.content,
            attachment_id=body.attachment_id,
        ),
    )
    return MessageResponse.model_validate(delivery.message, from_attributes=True)
