from __future__ import annotations

import logging

from support_chat.application.uow import UnitOfWork
from support_chat.domain.entities.message import Message

logger = logging.getLogger(__name__)


async def build(uow: UnitOfWork) -> dict[str, Message]:
    """Operator inbox: each owner's latest message, keyed by owner address.

    Recomputed from the store on every call. Entries are inserted oldest
    latest-message first, so conversations waiting longest come first when
    the mapping is iterated.
    """
    latest = await uow.messages.latest_per_owner()
    return {message.owner_address: message for message in reversed(latest)}


async def build_for(owner_id: int, uow: UnitOfWork) -> list[Message]:
    """Full thread of one owner, newest first."""
    return await uow.messages.list_by_owner(owner_id)


async def purge_all(uow: UnitOfWork) -> None:
    await uow.messages_w.purge_all()
    await uow.commit()
    logger.info("Purged all conversations")
