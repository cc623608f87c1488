from __future__ import annotations

from support_chat.domain.entities.message import Message
from support_chat.infrastructure.db.mappers import attachment as attachment_mapper
from support_chat.infrastructure.db.models.message import MessageModel


def model_to_entity(model: MessageModel) -> Message:
    """Owner and attachment must already be loaded on ``model``."""
    return Message(
        id=model.id,
        owner_id=model.owner_id,
        owner_address=model.owner.address,
        direction=model.direction,
        content=model.content,
        attachment=(
            attachment_mapper.model_to_entity(model.attachment)
            if model.attachment is not None
            else None
        ),
        timestamp=model.timestamp,
        seen=model.seen,
    )
