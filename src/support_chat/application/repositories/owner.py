from __future__ import annotations

from typing import Protocol

from support_chat.domain.entities.owner import Owner


class OwnerReader(Protocol):
    async def get_by_id(self, owner_id: int) -> Owner | None: ...


class OwnerWriter(Protocol):
    async def ensure(self, owner: Owner) -> None:
        """Insert the owner, or refresh its address if it already exists."""
        ...
