from __future__ import annotations

from contextlib import asynccontextmanager
from types import TracebackType
from typing import AsyncIterator, Self

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from support_chat.application.exceptions import StorageError
from support_chat.application.ports.clock import Clock
from support_chat.infrastructure.db.repositories.attachment import (
    AttachmentReaderRepo,
    AttachmentWriterRepo,
)
from support_chat.infrastructure.db.repositories.message import (
    MessageReaderRepo,
    MessageWriterRepo,
)
from support_chat.infrastructure.db.repositories.owner import (
    OwnerReaderRepo,
    OwnerWriterRepo,
)
from support_chat.infrastructure.db.session import AsyncSessionLocal


class SqlAlchemyUoW:
    """Concrete Unit-of-Work backed by a single AsyncSession."""

    def __init__(self, session: AsyncSession, clock: Clock | None = None) -> None:
        self._session = session
        self.owners = OwnerReaderRepo(session)
        self.owners_w = OwnerWriterRepo(session)
        self.attachments = AttachmentReaderRepo(session)
        self.attachments_w = AttachmentWriterRepo(session)
        self.messages = MessageReaderRepo(session)
        self.messages_w = MessageWriterRepo(session, clock)

    async def flush(self) -> None:
        await self._session.flush()

    async def commit(self) -> None:
        await self._session.commit()

    async def rollback(self) -> None:
        await self._session.rollback()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is not None:
            await self.rollback()


@asynccontextmanager
async def open_uow() -> AsyncIterator[SqlAlchemyUoW]:
    """Open a session-scoped UoW; driver failures surface as StorageError."""
    try:
        async with AsyncSessionLocal() as session, SqlAlchemyUoW(session) as uow:
            yield uow
    except (SQLAlchemyError, OSError) as exc:
        raise StorageError("Message storage unavailable") from exc
