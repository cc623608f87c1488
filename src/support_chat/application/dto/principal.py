from __future__ import annotations

from dataclasses import dataclass, field

from support_chat.domain.value_objects.enums import Direction, ParticipantKind

OPERATOR_PRESENCE_KEY = "operator"


def user_presence_key(owner_id: int) -> str:
    return f"user:{owner_id}"


def presence_key_for(direction: Direction, owner_id: int) -> str:
    """Presence key of the party on ``direction``'s side of ``owner_id``'s thread."""
    if direction is Direction.OPERATOR:
        return OPERATOR_PRESENCE_KEY
    return user_presence_key(owner_id)


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated caller identity extracted from JWT."""

    kind: ParticipantKind
    subject_id: int
    address: str = ""
    roles: list[str] = field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        return self.kind == ParticipantKind.ADMIN or "admin" in self.roles

    @property
    def direction(self) -> Direction:
        return Direction.OPERATOR if self.is_admin else Direction.USER

    @property
    def presence_key(self) -> str:
        """Key of this caller's single tracked channel.

        All admins share the operator key: the operator is one party.
        """
        return presence_key_for(self.direction, self.subject_id)
