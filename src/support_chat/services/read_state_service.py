from __future__ import annotations

import logging

from support_chat.application.uow import UnitOfWork

logger = logging.getLogger(__name__)


async def mark_read(owner_id: int, uow: UnitOfWork) -> None:
    """Mark every message in ``owner_id``'s thread as seen.

    Called when the operator opens the thread, never on delivery. An empty
    thread is a no-op.
    """
    await uow.messages_w.mark_seen(owner_id)
    await uow.commit()
    logger.debug("Conversation %d marked read", owner_id)
