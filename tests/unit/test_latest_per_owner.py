from __future__ import annotations

from datetime import datetime, timedelta, timezone

from support_chat.domain.entities.message import latest_by_owner
from tests.conftest import make_message

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_one_message_per_owner_with_max_timestamp():
    messages = [
        make_message(id=1, owner_id=1, timestamp=T0),
        make_message(id=2, owner_id=2, timestamp=T0 + timedelta(seconds=1)),
        make_message(id=3, owner_id=1, timestamp=T0 + timedelta(seconds=5)),
        make_message(id=4, owner_id=3, timestamp=T0 + timedelta(seconds=2)),
        make_message(id=5, owner_id=2, timestamp=T0 + timedelta(seconds=3)),
    ]

    latest = latest_by_owner(messages)

    assert [m.id for m in latest] == [3, 5, 4]
    assert len({m.owner_id for m in latest}) == len(latest)


def test_timestamp_collision_is_won_by_highest_id():
    messages = [
        make_message(id=7, owner_id=1, timestamp=T0),
        make_message(id=9, owner_id=1, timestamp=T0),
        make_message(id=8, owner_id=1, timestamp=T0),
    ]

    assert [m.id for m in latest_by_owner(messages)] == [9]


def test_input_order_does_not_matter():
    messages = [
        make_message(id=3, owner_id=1, timestamp=T0 + timedelta(seconds=3)),
        make_message(id=1, owner_id=1, timestamp=T0 + timedelta(seconds=1)),
        make_message(id=2, owner_id=1, timestamp=T0 + timedelta(seconds=2)),
    ]

    assert latest_by_owner(messages) == latest_by_owner(reversed(messages))
    assert latest_by_owner(messages)[0].id == 3


def test_empty_store_has_no_latest():
    assert latest_by_owner([]) == []
