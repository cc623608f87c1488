from __future__ import annotations

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from support_chat.domain.entities.owner import Owner
from support_chat.infrastructure.db.mappers import owner as mapper
from support_chat.infrastructure.db.models.owner import OwnerModel


class OwnerReaderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, owner_id: int) -> Owner | None:
        result = await self._session.get(OwnerModel, owner_id)
        return mapper.model_to_entity(result) if result else None


class OwnerWriterRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def ensure(self, owner: Owner) -> None:
        stmt = (
            pg_insert(OwnerModel)
            .values(id=owner.id, address=owner.address)
            .on_conflict_do_update(
                index_elements=[OwnerModel.id],
                set_={"address": owner.address},
            )
        )
        await self._session.execute(stmt)
