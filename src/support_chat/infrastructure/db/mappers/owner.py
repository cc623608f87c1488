from __future__ import annotations

from support_chat.domain.entities.owner import Owner
from support_chat.infrastructure.db.models.owner import OwnerModel


def model_to_entity(model: OwnerModel) -> Owner:
    return Owner(id=model.id, address=model.address)
