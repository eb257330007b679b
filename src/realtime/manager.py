"""Best-effort push channel to connected WebSocket clients.

Events are advisory. The HTTP response stays the source of truth, so a failed
send only drops that socket.
"""

import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self) -> None:
        self._connections: list[WebSocket] = []

    @property
    def active(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.append(websocket)
        logger.info("WebSocket client connected (%d active)", self.active)

    def disconnect(self, websocket: WebSocket) -> None:
        if websocket in self._connections:
            self._connections.remove(websocket)
            logger.info("WebSocket client disconnected (%d active)", self.active)

    async def send(self, websocket: WebSocket, event: dict[str, Any]) -> None:
        try:
            await websocket.send_json(event)
        except Exception:
            logger.warning("Dropping WebSocket client after failed send", exc_info=True)
            self.disconnect(websocket)

    async def broadcast(self, event: dict[str, Any]) -> None:
        for websocket in list(self._connections):
            await self.send(websocket, event)

    async def typing(self, companion_id: int, is_typing: bool) -> None:
        await self.broadcast({"type": "typing_indicator", "companionId": companion_id, "isTyping": is_typing})

    async def companion_message(self, companion_id: int, content: str, message_id: int) -> None:
        await self.broadcast(
            {"type": "companion_message", "content": content, "companionId": companion_id, "messageId": message_id}
        )

    async def notify(self, websocket: WebSocket, content: str, level: str = "info") -> None:
        await self.send(websocket, {"type": "system_notification", "content": content, "level": level})


manager = ConnectionManager()
