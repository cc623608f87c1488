"""Persist-then-push delivery of chat messages."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum

from support_chat.application.dto.message import SendMessageDTO, message_to_event
from support_chat.application.dto.principal import Principal, presence_key_for
from support_chat.application.exceptions import (
    ChannelUnavailable,
    NotFoundError,
    StorageError,
    ValidationError,
)
from support_chat.application.policies.message_rules import (
    assert_has_body,
    normalize_content,
)
from support_chat.application.policies.permissions import resolve_owner
from support_chat.application.ports.channel import Channel
from support_chat.application.uow import UoWFactory
from support_chat.domain.entities.message import Message
from support_chat.domain.entities.owner import Owner
from support_chat.domain.value_objects.enums import Direction
from support_chat.infrastructure.ws.presence import PresenceRegistry

logger = logging.getLogger(__name__)


class DeliveryState(StrEnum):
    DELIVERED = "delivered"
    QUEUED = "queued"


@dataclass(frozen=True, slots=True)
class Delivery:
    message: Message
    state: DeliveryState


class DeliveryBroker:
    """The only write path for new messages.

    A send goes Received -> Persisted -> Delivered | Queued -> Acknowledged.
    Storage failures abort the send before anything is pushed or
    acknowledged; push failures only downgrade the send to Queued, since the
    message stays retrievable from the counterpart's thread.
    """

    def __init__(
        self,
        presence: PresenceRegistry,
        uow_factory: UoWFactory,
        *,
        storage_timeout: float = 5.0,
        push_timeout: float = 2.0,
        max_content_length: int | None = None,
    ) -> None:
        self._presence = presence
        self._uow_factory = uow_factory
        self._storage_timeout = storage_timeout
        self._push_timeout = push_timeout
        self._max_content_length = max_content_length

    @property
    def presence(self) -> PresenceRegistry:
        return self._presence

    async def send(
        self,
        principal: Principal,
        request: SendMessageDTO,
        reply_to: Channel | None = None,
    ) -> Delivery:
        owner_id = resolve_owner(principal, request.owner_id)
        content = normalize_content(request.content, self._max_content_length)
        assert_has_body(content, request.attachment_id)

        message = await self._persist(principal, owner_id, content, request.attachment_id)

        counterpart = presence_key_for(principal.direction.counterpart, owner_id)
        state = await self._push(counterpart, message)

        if reply_to is not None:
            await self._acknowledge(reply_to, message)

        logger.info(
            "Message %d in conversation %d from %s %s",
            message.id,
            owner_id,
            principal.direction,
            state,
        )
        return Delivery(message=message, state=state)

    async def _persist(
        self,
        principal: Principal,
        owner_id: int,
        content: str | None,
        attachment_id: int | None,
    ) -> Message:
        try:
            return await asyncio.wait_for(
                self._append(principal, owner_id, content, attachment_id),
                timeout=self._storage_timeout,
            )
        except TimeoutError as exc:
            logger.warning("Persisting message for conversation %d timed out", owner_id)
            raise StorageError("Timed out persisting message") from exc

    async def _append(
        self,
        principal: Principal,
        owner_id: int,
        content: str | None,
        attachment_id: int | None,
    ) -> Message:
        async with self._uow_factory() as uow:
            if principal.direction is Direction.USER:
                await uow.owners_w.ensure(Owner(id=owner_id, address=principal.address))
            elif await uow.owners.get_by_id(owner_id) is None:
                raise NotFoundError(f"Conversation {owner_id} not found")

            if attachment_id is not None and await uow.attachments.get_by_id(attachment_id) is None:
                raise ValidationError(f"Attachment {attachment_id} not found")

            message = await uow.messages_w.append(
                owner_id,
                principal.direction,
                content=content,
                attachment_id=attachment_id,
            )
            await uow.commit()
            return message

    async def _push(self, key: str, message: Message) -> DeliveryState:
        channel = self._presence.lookup(key)
        if channel is None:
            return DeliveryState.QUEUED
        try:
            await asyncio.wait_for(
                channel.send_event("message.created", message_to_event(message)),
                timeout=self._push_timeout,
            )
        except ChannelUnavailable:
            logger.debug("Channel %s closed, message %d left queued", key, message.id, exc_info=True)
            self._presence.unregister(key, channel)
            return DeliveryState.QUEUED
        except TimeoutError:
            # The socket is still open; only this push falls back to the thread.
            logger.debug("Push of message %d to %s timed out, leaving it queued", message.id, key)
            return DeliveryState.QUEUED
        return DeliveryState.DELIVERED

    async def _acknowledge(self, channel: Channel, message: Message) -> None:
        ack = {
            "id": message.id,
            "owner_id": message.owner_id,
            "timestamp": message.timestamp,
        }
        try:
            await asyncio.wait_for(channel.send_event("message.ack", ack), timeout=self._push_timeout)
        except (ChannelUnavailable, TimeoutError):
            logger.debug("Sender channel closed before ack of message %d", message.id)
