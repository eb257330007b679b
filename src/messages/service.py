"""Message business logic shared by the HTTP and WebSocket entry points."""

import logging

from src.companions.service import get_companion
from src.conversations import repository as conversations
from src.db.models import Message
from src.exceptions import ValidationError
from src.llm.orchestrator import Exchange, get_orchestrator
from src.llm.registry import TEXT_PROVIDERS
from src.preferences import repository as preferences
from src.realtime.manager import manager

logger = logging.getLogger(__name__)


def list_messages(companion_id: int) -> list[Message]:
    companion = get_companion(companion_id)
    conversation = conversations.get_or_create(companion)
    return conversations.list_messages(conversation.id)


def resolve_model(model: str | None) -> str:
    """Requested provider, else the active model preference."""
    model = model or preferences.get_or_create().active_model
    if model not in TEXT_PROVIDERS:
        raise ValidationError(f"Unknown model: {model}")
    return model


async def send_message(companion_id: int, content: str, model: str | None = None) -> Exchange:
    """Persist the user message, generate and persist the reply, notify viewers."""
    if not content or not content.strip():
        raise ValidationError("Message content must not be empty")
    provider = resolve_model(model)
    get_companion(companion_id)

    await manager.typing(companion_id, True)
    try:
        exchange = await get_orchestrator().respond(companion_id, content, provider)
    finally:
        await manager.typing(companion_id, False)

    await manager.companion_message(companion_id, exchange.result.text, exchange.assistant_message.id)
    logger.info(
        "Companion %s replied via %s (requested %s)", companion_id, exchange.result.model, provider,
    )
    return exchange
