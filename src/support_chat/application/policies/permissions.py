from __future__ import annotations

from support_chat.application.dto.principal import Principal
from support_chat.application.exceptions import ForbiddenError, ValidationError


def assert_admin(principal: Principal) -> None:
    if not principal.is_admin:
        raise ForbiddenError("Admin access required")


def resolve_owner(principal: Principal, requested_owner_id: int | None) -> int:
    """Return the conversation key a send from ``principal`` belongs to.

    Users always write into their own thread; the operator must name one.
    """
    if not principal.is_admin:
        if requested_owner_id is not None and requested_owner_id != principal.subject_id:
            raise ForbiddenError("Users can only write to their own conversation")
        return principal.subject_id

    if requested_owner_id is None:
        raise ValidationError("owner_id is required for operator messages")
    return requested_owner_id
