from __future__ import annotations

from typing import Any, Protocol


class Channel(Protocol):
    """Handle to one party's open real-time connection.

    Implementations raise ``ChannelUnavailable`` when the peer is gone.
    """

    async def send_event(self, event_type: str, data: dict[str, Any]) -> None: ...
