"""Create the schema and optionally seed a demo support thread."""
from __future__ import annotations

import argparse
import asyncio
import logging

from support_chat.domain.entities.owner import Owner
from support_chat.domain.value_objects.enums import Direction
from support_chat.infrastructure.db import models  # noqa: F401
from support_chat.infrastructure.db.base import Base
from support_chat.infrastructure.db.session import AsyncSessionLocal, engine
from support_chat.infrastructure.db.uow import SqlAlchemyUoW
from support_chat.logging_setup import configure_logging

logger = logging.getLogger(__name__)

DEMO_OWNER = Owner(id=42, address="0x52908400098527886E0F7030069857D2E4169EE7")

DEMO_THREAD = [
    (Direction.USER, "Hi! My withdrawal has been pending for an hour."),
    (Direction.OPERATOR, "Hello! Could you share the transaction hash?"),
    (Direction.USER, "0x9fc7...e1a3"),
    (Direction.OPERATOR, "Thanks, checking it now."),
]


async def create_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema created: %s", ", ".join(sorted(Base.metadata.tables)))


async def seed() -> None:
    async with AsyncSessionLocal() as session:
        uow = SqlAlchemyUoW(session)
        await uow.owners_w.ensure(DEMO_OWNER)
        for direction, content in DEMO_THREAD:
            await uow.messages_w.append(DEMO_OWNER.id, direction, content=content)
        await uow.commit()
    logger.info("Seeded conversation %d with %d messages", DEMO_OWNER.id, len(DEMO_THREAD))


async def run(with_seed: bool) -> None:
    try:
        await create_schema()
        if with_seed:
            await seed()
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", action="store_true", help="insert a demo conversation")
    args = parser.parse_args()

    configure_logging("INFO")
    asyncio.run(run(args.seed))


if __name__ == "__main__":
    main()
