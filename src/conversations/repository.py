"""Data access layer for conversations and their messages."""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.db.client import get_session_factory, session_scope
from src.db.models import Companion, Conversation, Message, utcnow
from src.exceptions import PersistenceError

logger = logging.getLogger(__name__)


def get_by_companion(companion_id: int) -> Conversation | None:
    with session_scope() as db:
        return db.scalar(select(Conversation).where(Conversation.companion_id == companion_id))


def get_or_create(companion: Companion) -> Conversation:
    """Return the companion's conversation, creating it on first access.

    The unique constraint on companion_id decides concurrent creations: the
    loser's insert fails and it reads back the winner's row.
    """
    conv = get_by_companion(companion.id)
    if conv is not None:
        return conv

    db = get_session_factory()()
    try:
        conv = Conversation(companion_id=companion.id, name=f"Chat with {companion.name}")
        db.add(conv)
        db.commit()
        return conv
    except IntegrityError:
        db.rollback()
        logger.info("Conversation for companion %s created concurrently, reusing it", companion.id)
    except SQLAlchemyError as exc:
        db.rollback()
        raise PersistenceError("Failed to create conversation") from exc
    finally:
        db.close()

    conv = get_by_companion(companion.id)
    if conv is None:
        raise PersistenceError("Failed to create conversation")
    return conv


def list_messages(conversation_id: int) -> list[Message]:
    with session_scope() as db:
        result = db.execute(
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.id)
        )
        return list(result.scalars())


def recent_messages(conversation_id: int, limit: int) -> list[Message]:
    """Last `limit` messages, oldest first."""
    with session_scope() as db:
        result = db.execute(
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.id.desc())
            .limit(limit)
        )
        return list(reversed(result.scalars().all()))


def append_message(
    conversation: Conversation,
    role: str,
    content: str,
    image_url: str | None = None,
) -> Message:
    """Insert a message and bump the conversation and companion timestamps in one transaction."""
    now = utcnow()
    with session_scope() as db:
        db.execute(update(Conversation).where(Conversation.id == conversation.id).values(updated_at=now))
        db.execute(update(Companion).where(Companion.id == conversation.companion_id).values(last_interaction=now))
        msg = Message(
            conversation_id=conversation.id,
            role=role,
            content=content,
            image_url=image_url,
            created_at=now,
        )
        db.add(msg)
        db.flush()
        return msg
