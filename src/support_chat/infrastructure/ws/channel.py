from __future__ import annotations

from typing import Any

from fastapi import WebSocket, WebSocketDisconnect

from support_chat.application.exceptions import ChannelUnavailable
from support_chat.infrastructure.ws.protocol import WsOutbound


class WebSocketChannel:
    """Channel handle for one accepted WebSocket connection."""

    def __init__(self, websocket: WebSocket, key: str) -> None:
        self._websocket = websocket
        self.key = key

    async def send_event(self, event_type: str, data: dict[str, Any]) -> None:
        raw = WsOutbound(type=event_type, data=data).model_dump_json()
        try:
            await self._websocket.send_text(raw)
        except (WebSocketDisconnect, RuntimeError, OSError) as exc:
            raise ChannelUnavailable(f"Channel {self.key} is closed") from exc

    def __repr__(self) -> str:
        return f"<WebSocketChannel {self.key} at {id(self):#x}>"
