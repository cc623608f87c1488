from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from support_chat.domain.entities.attachment import Attachment


@dataclass(frozen=True, slots=True)
class Message:
    id: int
    owner_id: int
    owner_address: str
    direction: str
    content: str | None
    attachment: Attachment | None
    timestamp: datetime
    seen: bool = False

    @property
    def sort_key(self) -> tuple[datetime, int]:
        return self.timestamp, self.id


def latest_by_owner(messages: Iterable[Message]) -> list[Message]:
    """Keep each owner's most recent message, newest first.

    Recency is ``(timestamp, id)`` so a timestamp collision is won by the
    message the store assigned last.
    """
    latest: dict[int, Message] = {}
    for message in messages:
        current = latest.get(message.owner_id)
        if current is None or message.sort_key > current.sort_key:
            latest[message.owner_id] = message
    return sorted(latest.values(), key=lambda m: m.sort_key, reverse=True)
