from __future__ import annotations

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from support_chat.application.policies.message_rules import assert_has_body
from support_chat.application.ports.clock import Clock, SystemClock
from support_chat.domain.entities.message import Message, latest_by_owner
from support_chat.domain.value_objects.enums import Direction
from support_chat.infrastructure.db.mappers import message as mapper
from support_chat.infrastructure.db.models.message import MessageModel

# Owner and attachment are always fetched alongside a message.
_WITH_RELATIONS = (
    selectinload(MessageModel.owner),
    selectinload(MessageModel.attachment),
)


class MessageReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_by_owner(self, owner_id: int) -> list[Message]:
        stmt = (
            select(MessageModel)
            .where(MessageModel.owner_id == owner_id)
            .options(*_WITH_RELATIONS)
            .order_by(MessageModel.timestamp.desc(), MessageModel.id.desc())
        )
        result = await self._session.execute(stmt)
        return [mapper.model_to_entity(m) for m in result.scalars().all()]

    async def latest_per_owner(self) -> list[Message]:
        # DISTINCT ON keeps the first row of each owner group in ORDER BY order.
        stmt = (
            select(MessageModel)
            .distinct(MessageModel.owner_id)
            .options(*_WITH_RELATIONS)
            .order_by(
                MessageModel.owner_id,
                MessageModel.timestamp.desc(),
                MessageModel.id.desc(),
            )
        )
        result = await self._session.execute(stmt)
        return latest_by_owner(mapper.model_to_entity(m) for m in result.scalars().all())


class MessageWriterRepo:
    def __init__(self, session: AsyncSession, clock: Clock | None = None) -> None:
        self._session = session
        self._clock = clock or SystemClock()

    async def append(
        self,
        owner_id: int,
        direction: Direction,
        content: str | None = None,
        attachment_id: int | None = None,
    ) -> Message:
        assert_has_body(content, attachment_id)
        model = MessageModel(
            owner_id=owner_id,
            direction=direction.value,
            content=content,
            attachment_id=attachment_id,
            timestamp=self._clock.now(),
            seen=False,
        )
        self._session.add(model)
        await self._session.flush()

        stmt = (
            select(MessageModel)
            .where(MessageModel.id == model.id)
            .options(*_WITH_RELATIONS)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return mapper.model_to_entity(result.scalar_one())

    async def mark_seen(self, owner_id: int) -> None:
        stmt = (
            update(MessageModel)
            .where(MessageModel.owner_id == owner_id, MessageModel.seen.is_(False))
            .values(seen=True)
        )
        await self._session.execute(stmt)

    async def purge_all(self) -> None:
        await self._session.execute(delete(MessageModel))
