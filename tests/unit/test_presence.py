from __future__ import annotations

from support_chat.infrastructure.ws.presence import PresenceRegistry
from tests.conftest import FakeChannel


def test_register_and_lookup():
    registry = PresenceRegistry()
    channel = FakeChannel("user:1")

    assert registry.register("user:1", channel) is None
    assert registry.lookup("user:1") is channel
    assert "user:1" in registry
    assert registry.lookup("user:2") is None


def test_second_registration_supersedes_first():
    registry = PresenceRegistry()
    first = FakeChannel("user:1")
    second = FakeChannel("user:1")

    registry.register("user:1", first)
    superseded = registry.register("user:1", second)

    assert superseded is first
    assert registry.lookup("user:1") is second
    assert len(registry) == 1


def test_stale_unregister_keeps_newer_entry():
    registry = PresenceRegistry()
    stale = FakeChannel("user:1")
    current = FakeChannel("user:1")
    registry.register("user:1", stale)
    registry.register("user:1", current)

    assert registry.unregister("user:1", stale) is False
    assert registry.lookup("user:1") is current


def test_unregister_current_handle_removes_entry():
    registry = PresenceRegistry()
    channel = FakeChannel("operator")
    registry.register("operator", channel)

    assert registry.unregister("operator", channel) is True
    assert registry.lookup("operator") is None
    assert registry.unregister("operator", channel) is False


def test_registering_same_handle_twice_is_not_a_supersede():
    registry = PresenceRegistry()
    channel = FakeChannel("user:1")

    registry.register("user:1", channel)

    assert registry.register("user:1", channel) is None
