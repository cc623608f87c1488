from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from support_chat.domain.entities.attachment import Attachment
from support_chat.infrastructure.db.mappers import attachment as mapper
from support_chat.infrastructure.db.models.attachment import AttachmentModel


class AttachmentReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, attachment_id: int) -> Attachment | None:
        result = await self._session.get(AttachmentModel, attachment_id)
        return mapper.model_to_entity(result) if result else None


class AttachmentWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, url: str, file_name: str, media_type: str) -> Attachment:
        model = AttachmentModel(url=url, file_name=file_name, media_type=media_type)
        self._session.add(model)
        await self._session.flush()
        return mapper.model_to_entity(model)
