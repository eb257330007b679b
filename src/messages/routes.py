"""Message endpoints: list and send, addressed by companion."""

from fastapi import APIRouter

from src.messages.schemas import ExchangeResponse, MessageResponse, SendMessageRequest
from src.messages.service import list_messages, send_message

router = APIRouter(prefix="/api/conversations/{companion_id}", tags=["Messages"])


@router.get("/messages", response_model=list[MessageResponse], summary="List messages", description="The companion's conversation, oldest message first. Creates the conversation on first access.")
async def list_all(companion_id: int):
    return list_messages(companion_id)


@router.post("/messages", response_model=ExchangeResponse, summary="Send a message", description="Save the user message, generate the companion's reply with provider fallback, and return both.")
async def send(companion_id: int, body: SendMessageRequest):
    exchange = await send_message(companion_id, body.content, body.model)
    return ExchangeResponse(
        user_message=MessageResponse.model_validate(exchange.user_message),
        assistant_message=MessageResponse.model_validate(exchange.assistant_message),
        model=exchange.result.model,
    )
