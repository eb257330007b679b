"""Conversation context rendering for LLM calls."""

from src.db.models import ROLE_USER, Companion, Message

CONTEXT_HEADER = "You are {name}, the user's {role}. Here are the most recent messages in our conversation:\n"
CONTEXT_FOOTER = "\nContinue the conversation as {name}.\n"


def build_context(companion: Companion, history: list[Message]) -> str:
    """Render recent messages (oldest first) as a transcript block.

    Returns an empty string when there is no history.
    """
    if not history:
        return ""
    lines = [CONTEXT_HEADER.format(name=companion.name, role=companion.role.lower())]
    for msg in history:
        speaker = "Human" if msg.role == ROLE_USER else companion.name
        lines.append(f"{speaker}: {msg.content}\n")
    lines.append(CONTEXT_FOOTER.format(name=companion.name))
    return "".join(lines)


def build_user_turn(context: str, user_text: str) -> str:
    return f"{context}\n{user_text}" if context else user_text
