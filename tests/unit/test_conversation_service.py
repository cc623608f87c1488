from __future__ import annotations

import pytest

from support_chat.domain.value_objects.enums import Direction
from support_chat.services import conversation_service
from tests.conftest import FakeUoW, address_for


@pytest.fixture
def uow() -> FakeUoW:
    uow = FakeUoW()
    for owner_id in (1, 2, 3):
        uow.add_owner(owner_id)
    return uow


@pytest.mark.asyncio
async def test_build_keys_latest_message_by_owner_address(uow):
    w = uow.messages_w
    await w.append(1, Direction.USER, content="a1")
    await w.append(2, Direction.USER, content="b1")
    await w.append(1, Direction.OPERATOR, content="a2")
    await w.append(3, Direction.USER, content="c1")

    inbox = await conversation_service.build(uow)

    assert set(inbox) == {address_for(1), address_for(2), address_for(3)}
    assert inbox[address_for(1)].content == "a2"
    assert inbox[address_for(2)].content == "b1"
    assert inbox[address_for(3)].content == "c1"


@pytest.mark.asyncio
async def test_build_iterates_oldest_latest_message_first(uow):
    w = uow.messages_w
    await w.append(1, Direction.USER, content="a1")
    await w.append(2, Direction.USER, content="b1")
    await w.append(3, Direction.USER, content="c1")
    await w.append(1, Direction.USER, content="a2")

    inbox = await conversation_service.build(uow)

    assert list(inbox) == [address_for(2), address_for(3), address_for(1)]


@pytest.mark.asyncio
async def test_build_for_returns_whole_thread_newest_first(uow):
    w = uow.messages_w
    await w.append(1, Direction.USER, content="first")
    await w.append(2, Direction.USER, content="other thread")
    await w.append(1, Direction.OPERATOR, content="reply")
    await w.append(1, Direction.USER, content="thanks")

    thread = await conversation_service.build_for(1, uow)

    assert [m.content for m in thread] == ["thanks", "reply", "first"]
    assert all(m.owner_id == 1 for m in thread)


@pytest.mark.asyncio
async def test_build_for_unknown_owner_is_empty(uow):
    assert await conversation_service.build_for(999, uow) == []


@pytest.mark.asyncio
async def test_purge_all_empties_inbox(uow):
    await uow.messages_w.append(1, Direction.USER, content="a")
    await uow.messages_w.append(2, Direction.USER, content="b")

    await conversation_service.purge_all(uow)

    assert await conversation_service.build(uow) == {}
    assert uow._committed is True


@pytest.mark.asyncio
async def test_purge_all_on_empty_store_is_a_no_op(uow):
    await conversation_service.purge_all(uow)
    await conversation_service.purge_all(uow)

    assert await conversation_service.build(uow) == {}
