"""In-process registry of open real-time channels."""
from __future__ import annotations

import logging

from support_chat.application.ports.channel import Channel

logger = logging.getLogger(__name__)


class PresenceRegistry:
    """Tracks at most one open channel per presence key.

    None of the methods await, so each call runs to completion on the event
    loop before any other connection lifecycle can touch the same key.
    """

    def __init__(self) -> None:
        self._channels: dict[str, Channel] = {}

    def register(self, key: str, channel: Channel) -> Channel | None:
        """Make ``channel`` the addressed handle for ``key``.

        Returns the superseded handle, which is no longer addressed.
        """
        previous = self._channels.get(key)
        self._channels[key] = channel
        if previous is not None and previous is not channel:
            logger.info("Presence %s superseded by a new channel", key)
            return previous
        logger.debug("Presence %s registered (online=%d)", key, len(self._channels))
        return None

    def unregister(self, key: str, channel: Channel) -> bool:
        """Drop ``key`` only while ``channel`` is still its current handle."""
        if self._channels.get(key) is not channel:
            logger.debug("Ignoring stale unregister for %s", key)
            return False
        del self._channels[key]
        logger.debug("Presence %s unregistered (online=%d)", key, len(self._channels))
        return True

    def lookup(self, key: str) -> Channel | None:
        return self._channels.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._channels

    def __len__(self) -> int:
        return len(self._channels)
