from __future__ import annotations

from typing import Any

from support_chat.application.dto.principal import Principal
from support_chat.domain.value_objects.enums import ParticipantKind


def principal_from_claims(payload: dict[str, Any]) -> Principal:
    """Build a Principal from verified token claims.

    ``sub`` is the conversation owner id; ``address`` is the owner identity
    the operator inbox is keyed by.
    """
    kind_raw = payload.get("kind", payload.get("role", "user"))
    kind = ParticipantKind(kind_raw) if kind_raw in ParticipantKind.__members__.values() else ParticipantKind.USER
    subject_id = int(payload["sub"])
    return Principal(
        kind=kind,
        subject_id=subject_id,
        address=str(payload.get("address") or subject_id),
        roles=payload.get("roles", []),
    )
