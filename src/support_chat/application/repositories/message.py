from __future__ import annotations

from typing import Protocol

from support_chat.domain.entities.message import Message
from support_chat.domain.value_objects.enums import Direction


class MessageReader(Protocol):
    async def list_by_owner(self, owner_id: int) -> list[Message]:
        """Whole thread of one owner, newest first, attachments resolved."""
        ...

    async def latest_per_owner(self) -> list[Message]:
        """One message per owner (max timestamp, then max id), newest first."""
        ...


class MessageWriter(Protocol):
    async def append(
        self,
        owner_id: int,
        direction: Direction,
        content: str | None = None,
        attachment_id: int | None = None,
    ) -> Message:
        """Persist a new unseen message stamped with the current time.

        Raises ValidationError when there is neither content nor attachment.
        """
        ...

    async def mark_seen(self, owner_id: int) -> None: ...

    async def purge_all(self) -> None: ...
