from __future__ import annotations

from fastapi import APIRouter

from support_chat.api.deps import BrokerDep, CurrentPrincipal, UoWDep
from support_chat.api.v1.schemas.message import MessageResponse, SendMessageRequest
from support_chat.application.dto.message import SendMessageDTO
from support_chat.services import conversation_service

router = APIRouter(prefix="/api/v1/chat/messages", tags=["messages"])


@router.get("", response_model=list[MessageResponse])
async def list_own_messages(
    principal: CurrentPrincipal,
    uow: UoWDep,
) -> list[MessageResponse]:
    messages = await conversation_service.build_for(principal.subject_id, uow)
    return [MessageResponse.model_validate(m, from_attributes=True) for m in messages]


@router.post("", response_model=MessageResponse, status_code=201)
async def send_message(
    body: SendMessageRequest,
    principal: CurrentPrincipal,
    broker: BrokerDep,
) -> MessageResponse:
    delivery = await broker.send(
        principal,
        SendMessageDTO(
            owner_id=body.owner_id,
            content=body.content,
            attachment_id=body.attachment_id,
        ),
    )
    return MessageResponse.model_validate(delivery.message, from_attributes=True)
