"""Shared test fixtures."""
from __future__ import annotations

import asyncio
import dataclasses
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, AsyncIterator

import jwt
import pytest

from support_chat.application.dto.principal import Principal
from support_chat.application.exceptions import ChannelUnavailable, StorageError
from support_chat.application.policies.message_rules import assert_has_body
from support_chat.application.uow import UoWFactory
from support_chat.config import settings
from support_chat.domain.entities.attachment import Attachment
from support_chat.domain.entities.message import Message, latest_by_owner
from support_chat.domain.entities.owner import Owner
from support_chat.domain.value_objects.enums import Direction, ParticipantKind

USER_ADDRESS = "0x00000000000000000000000000000000000000aa"


@pytest.fixture
def user_principal() -> Principal:
    return Principal(kind=ParticipantKind.USER, subject_id=42, address=USER_ADDRESS, roles=[])


@pytest.fixture
def admin_principal() -> Principal:
    return Principal(kind=ParticipantKind.ADMIN, subject_id=1, address="operator", roles=["admin"])


def address_for(owner_id: int) -> str:
    return f"0x{owner_id:040x}"


class FakeClock:
    """Advances one second on every reading unless frozen."""

    def __init__(self, start: datetime | None = None, *, frozen: bool = False) -> None:
        self._now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.frozen = frozen

    def now(self) -> datetime:
        current = self._now
        if not self.frozen:
            self._now += timedelta(seconds=1)
        return current


def make_message(
    *,
    id: int,
    owner_id: int = 42,
    direction: str = Direction.USER,
    content: str | None = "hello",
    timestamp: datetime | None = None,
    seen: bool = False,
) -> Message:
    return Message(
        id=id,
        owner_id=owner_id,
        owner_address=address_for(owner_id),
        direction=direction,
        content=content,
        attachment=None,
        timestamp=timestamp or datetime.now(timezone.utc),
        seen=seen,
    )


@dataclass
class FakeOwnerReader:
    _owners: dict[int, Owner] = field(default_factory=dict)

    async def get_by_id(self, owner_id: int) -> Owner | None:
        return self._owners.get(owner_id)


@dataclass
class FakeOwnerWriter:
    _reader: FakeOwnerReader

    async def ensure(self, owner: Owner) -> None:
        self._reader._owners[owner.id] = owner


@dataclass
class FakeAttachmentReader:
    _attachments: dict[int, Attachment] = field(default_factory=dict)

    async def get_by_id(self, attachment_id: int) -> Attachment | None:
        return self._attachments.get(attachment_id)


@dataclass
class FakeAttachmentWriter:
    _reader: FakeAttachmentReader

    async def create(self, url: str, file_name: str, media_type: str) -> Attachment:
        attachment = Attachment(
            id=len(self._reader._attachments) + 1,
            url=url,
            file_name=file_name,
            media_type=str(media_type),
        )
        self._reader._attachments[attachment.id] = attachment
        return attachment


@dataclass
class FakeMessageReader:
    _messages: list[Message] = field(default_factory=list)

    async def list_by_owner(self, owner_id: int) -> list[Message]:
        thread = [m for m in self._messages if m.owner_id == owner_id]
        return sorted(thread, key=lambda m: m.sort_key, reverse=True)

    async def latest_per_owner(self) -> list[Message]:
        return latest_by_owner(self._messages)


@dataclass
class FakeMessageWriter:
    _reader: FakeMessageReader
    _owners: FakeOwnerReader
    _attachments: FakeAttachmentReader
    clock: FakeClock = field(default_factory=FakeClock)
    fail_with: Exception | None = None
    delay: float = 0.0
    _next_id: int = 1

    async def append(
        self,
        owner_id: int,
        direction: Direction,
        content: str | None = None,
        attachment_id: int | None = None,
    ) -> Message:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with is not None:
            raise self.fail_with
        assert_has_body(content, attachment_id)
        owner = self._owners._owners.get(owner_id)
        if owner is None:
            raise StorageError("foreign key violation: owners")

        message = Message(
            id=self._next_id,
            owner_id=owner_id,
            owner_address=owner.address,
            direction=direction.value,
            content=content,
            attachment=self._attachments._attachments.get(attachment_id) if attachment_id else None,
            timestamp=self.clock.now(),
            seen=False,
        )
        self._next_id += 1
        self._reader._messages.append(message)
        return message

    async def mark_seen(self, owner_id: int) -> None:
        self._reader._messages[:] = [
            dataclasses.replace(m, seen=True) if m.owner_id == owner_id else m
            for m in self._reader._messages
        ]

    async def purge_all(self) -> None:
        self._reader._messages.clear()


@dataclass
class FakeUoW:
    """In-memory UoW for unit tests."""
    owners: FakeOwnerReader = field(default_factory=FakeOwnerReader)
    owners_w: FakeOwnerWriter | None = None
    attachments: FakeAttachmentReader = field(default_factory=FakeAttachmentReader)
    attachments_w: FakeAttachmentWriter | None = None
    messages: FakeMessageReader = field(default_factory=FakeMessageReader)
    messages_w: FakeMessageWriter | None = None
    commits: int = 0

    def __post_init__(self) -> None:
        if self.owners_w is None:
            self.owners_w = FakeOwnerWriter(self.owners)
        if self.attachments_w is None:
            self.attachments_w = FakeAttachmentWriter(self.attachments)
        if self.messages_w is None:
            self.messages_w = FakeMessageWriter(self.messages, self.owners, self.attachments)

    @property
    def _committed(self) -> bool:
        return self.commits > 0

    def add_owner(self, owner_id: int) -> Owner:
        owner = Owner(id=owner_id, address=address_for(owner_id))
        self.owners._owners[owner_id] = owner
        return owner

    async def flush(self) -> None:
        pass

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        pass


def fake_uow_factory(uow: FakeUoW) -> UoWFactory:
    @asynccontextmanager
    async def _open() -> AsyncIterator[FakeUoW]:
        yield uow

    return _open


@dataclass(eq=False)
class FakeChannel:
    """Records pushed events; behaves like a dropped socket once closed."""
    key: str
    events: list[tuple[str, dict[str, Any]]] = field(default_factory=list)
    closed: bool = False
    delay: float = 0.0

    async def send_event(self, event_type: str, data: dict[str, Any]) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.closed:
            raise ChannelUnavailable(f"Channel {self.key} is closed")
        self.events.append((event_type, data))

    def of_type(self, event_type: str) -> list[dict[str, Any]]:
        return [data for kind, data in self.events if kind == event_type]


ADMIN_CLAIMS: dict[str, Any] = {"sub": 1, "kind": "admin", "roles": ["admin"]}


def make_token(sub: int = 42, kind: str = "user", roles: list[str] | None = None) -> str:
    return jwt.encode(
        {"sub": str(sub), "kind": kind, "address": address_for(sub), "roles": roles or []},
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
    )
