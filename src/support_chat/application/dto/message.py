from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from support_chat.domain.entities.message import Message


@dataclass(frozen=True, slots=True)
class SendMessageDTO:
    owner_id: int | None = None
    content: str | None = None
    attachment_id: int | None = None


def message_to_event(message: Message) -> dict[str, Any]:
    """Payload of ``message.created`` pushes and thread listings."""
    return {
        "id": message.id,
        "owner_id": message.owner_id,
        "owner_address": message.owner_address,
        "direction": message.direction,
        "content": message.content,
        "attachment": asdict(message.attachment) if message.attachment else None,
        "timestamp": message.timestamp,
        "seen": message.seen,
    }
