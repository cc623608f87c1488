from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Callable, Protocol

from support_chat.application.repositories.attachment import (
    AttachmentReader,
    AttachmentWriter,
)
from support_chat.application.repositories.message import MessageReader, MessageWriter
from support_chat.application.repositories.owner import OwnerReader, OwnerWriter


class UnitOfWork(Protocol):
    owners: OwnerReader
    owners_w: OwnerWriter
    attachments: AttachmentReader
    attachments_w: AttachmentWriter
    messages: MessageReader
    messages_w: MessageWriter

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
    async def flush(self) -> None: ...


UoWFactory = Callable[[], AbstractAsyncContextManager[UnitOfWork]]
