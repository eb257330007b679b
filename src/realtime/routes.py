"""WebSocket endpoint for typing indicators and companion messages."""

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from src.exceptions import AppError
from src.messages.service import send_message
from src.realtime.manager import manager
from src.utils.validators import CamelModel

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Realtime"])


class UserMessageEvent(CamelModel):
    type: str
    companion_id: int
    content: str = Field(min_length=1)
    model: str | None = None


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await manager.connect(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                data = json.loads(raw)
            except ValueError:
                await manager.notify(websocket, "Message is not valid JSON", level="error")
                continue
            if not isinstance(data, dict) or data.get("type") != "user_message":
                await manager.notify(websocket, "Unsupported message type", level="warning")
                continue
            try:
                event = UserMessageEvent.model_validate(data)
                await send_message(event.companion_id, event.content, event.model)
            except PydanticValidationError:
                await manager.notify(websocket, "Invalid user_message payload", level="error")
            except AppError as exc:
                logger.warning("WebSocket message failed: %s", exc.message)
                await manager.notify(websocket, exc.message, level="error")
            except Exception:
                logger.exception("Unexpected error handling WebSocket message")
                await manager.notify(websocket, "Could not process message", level="error")
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)
