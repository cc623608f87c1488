from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect
from pydantic import ValidationError as SchemaError
from starlette.datastructures import State

from support_chat.api.deps import get_verifier
from support_chat.api.v1.schemas.message import SendMessageRequest
from support_chat.application.dto.message import SendMessageDTO, message_to_event
from support_chat.application.dto.principal import Principal
from support_chat.application.exceptions import (
    AppError,
    ChannelUnavailable,
    ForbiddenError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from support_chat.application.policies.permissions import assert_admin, resolve_owner
from support_chat.config import settings
from support_chat.infrastructure.ws.channel import WebSocketChannel
from support_chat.infrastructure.ws.protocol import WsInbound
from support_chat.services import conversation_service, read_state_service
from support_chat.services.delivery_broker import DeliveryBroker

logger = logging.getLogger(__name__)
router = APIRouter(tags=["websocket"])

_ERROR_CODES: dict[type[AppError], str] = {
    ValidationError: "invalid_message",
    ForbiddenError: "forbidden",
    NotFoundError: "not_found",
    StorageError: "send_failed",
}


async def _authenticate(token: str) -> Principal | None:
    try:
        verifier = get_verifier()
        return await verifier.verify(token)
    except Exception:
        logger.debug("WS auth failed", exc_info=True)
        return None


@router.websocket("/ws/chat")
async def ws_chat(
    websocket: WebSocket,
    token: str = Query(...),
) -> None:
    principal = await _authenticate(token)
    if principal is None:
        await websocket.close(code=4001, reason="Authentication failed")
        return

    broker: DeliveryBroker = websocket.app.state.broker
    await websocket.accept()
    channel = WebSocketChannel(websocket, principal.presence_key)
    broker.presence.register(channel.key, channel)

    heartbeat_task = asyncio.create_task(
        _heartbeat(channel), name=f"ws-heartbeat-{channel.key}",
    )
    try:
        await _read_loop(websocket, channel, principal, websocket.app.state)
    except (WebSocketDisconnect, ChannelUnavailable):
        pass
    except Exception:
        logger.exception("WS error for %s", channel.key)
    finally:
        broker.presence.unregister(channel.key, channel)
        await _stop(heartbeat_task)


async def _stop(task: asyncio.Task[None]) -> None:
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task


async def _heartbeat(channel: WebSocketChannel) -> None:
    interval = settings.WS_HEARTBEAT_SECONDS
    try:
        while True:
            await asyncio.sleep(interval)
            await channel.send_event("pong", {})
    except ChannelUnavailable:
        logger.debug("Heartbeat stopped for %s", channel.key)


async def _read_loop(
    ws: WebSocket,
    channel: WebSocketChannel,
    principal: Principal,
    state: State,
) -> None:
    while True:
        raw = await ws.receive_text()
        try:
            msg = WsInbound.model_validate_json(raw)
        except SchemaError:
            await channel.send_event("error", {"code": "invalid_payload"})
            continue

        try:
            if msg.type == "ping":
                await channel.send_event("pong", {})

            elif msg.type == "message.send":
                await _handle_send(channel, principal, state.broker, msg.data)

            elif msg.type == "conversation.fetch":
                await _handle_fetch_thread(channel, principal, state, msg.data)

            elif msg.type == "inbox.fetch":
                await _handle_fetch_inbox(channel, principal, state)

            elif msg.type == "conversation.read":
                await _handle_mark_read(channel, principal, state, msg.data)

            else:
                await channel.send_event("error", {"code": "unknown_type", "type": msg.type})
        except AppError as exc:
            if isinstance(exc, ChannelUnavailable):
                raise
            code = _ERROR_CODES.get(type(exc), "error")
            await channel.send_event("error", {"code": code, "detail": exc.detail, "type": msg.type})


def _owner_id_from(data: dict[str, Any]) -> int | None:
    raw = data.get("owner_id")
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError("owner_id must be an integer") from exc


async def _handle_send(
    channel: WebSocketChannel,
    principal: Principal,
    broker: DeliveryBroker,
    data: dict[str, Any],
) -> None:
    try:
        body = SendMessageRequest.model_validate(data)
    except SchemaError as exc:
        raise ValidationError(str(exc)) from exc

    await broker.send(
        principal,
        SendMessageDTO(
            owner_id=body.owner_id,
            content=body.content,
            attachment_id=body.attachment_id,
        ),
        reply_to=channel,
    )


async def _handle_fetch_thread(
    channel: WebSocketChannel,
    principal: Principal,
    state: State,
    data: dict[str, Any],
) -> None:
    owner_id = resolve_owner(principal, _owner_id_from(data))
    async with state.uow_factory() as uow:
        messages = await conversation_service.build_for(owner_id, uow)
    await channel.send_event(
        "conversation.messages",
        {"owner_id": owner_id, "messages": [message_to_event(m) for m in messages]},
    )


async def _handle_fetch_inbox(
    channel: WebSocketChannel,
    principal: Principal,
    state: State,
) -> None:
    assert_admin(principal)
    async with state.uow_factory() as uow:
        inbox = await conversation_service.build(uow)
    await channel.send_event(
        "conversation.inbox",
        {"conversations": {address: message_to_event(m) for address, m in inbox.items()}},
    )


async def _handle_mark_read(
    channel: WebSocketChannel,
    principal: Principal,
    state: State,
    data: dict[str, Any],
) -> None:
    assert_admin(principal)
    owner_id = resolve_owner(principal, _owner_id_from(data))
    async with state.uow_factory() as uow:
        await read_state_service.mark_read(owner_id, uow)
    await channel.send_event("conversation.read", {"owner_id": owner_id})
