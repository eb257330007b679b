"""Business logic for companions."""

import logging

from src.companions import repository
from src.db.models import Companion
from src.exceptions import NotFoundError

logger = logging.getLogger(__name__)

DEFAULT_COMPANIONS: list[dict] = [
    {
        "name": "Luna",
        "role": "Creative Friend",
        "personality": "creative",
        "avatar": "/avatars/luna.jpg",
        "description": "A creative and artistic companion who helps with inspiration and creative projects.",
        "is_online": True,
    },
    {
        "name": "Max",
        "role": "Productivity Coach",
        "personality": "coach",
        "avatar": "/avatars/max.jpg",
        "description": "A motivational companion who helps you stay organized and achieve your goals.",
        "is_online": False,
    },
    {
        "name": "Sophia",
        "role": "Wellness Guide",
        "personality": "friendly",
        "avatar": "/avatars/sophia.jpg",
        "description": "A compassionate companion focused on mental and physical wellbeing.",
        "is_online": False,
    },
    {
        "name": "Alex",
        "role": "Study Buddy",
        "personality": "analytical",
        "avatar": "/avatars/alex.jpg",
        "description": "A detail-oriented companion who helps with learning, research, and academic pursuits.",
        "is_online": True,
    },
    {
        "name": "Zen",
        "role": "Philosophy Guide",
        "personality": "philosophical",
        "avatar": "/avatars/zen.jpg",
        "description": "A thoughtful companion who explores deep questions about life, meaning, and existence.",
        "is_online": True,
    },
    {
        "name": "Mia",
        "role": "Comedy Partner",
        "personality": "witty",
        "avatar": "/avatars/mia.jpg",
        "description": "A humorous companion who brightens your day with jokes, wordplay, and witty observations.",
        "is_online": False,
    },
    {
        "name": "Oliver",
        "role": "Emotional Support",
        "personality": "supportive",
        "avatar": "/avatars/oliver.jpg",
        "description": "A gentle companion who listens without judgment and offers comfort during tough times.",
        "is_online": True,
    },
    {
        "name": "Sage",
        "role": "Life Mentor",
        "personality": "mentor",
        "avatar": "/avatars/sage.jpg",
        "description": "A wise companion who guides personal growth with experience and thoughtful advice.",
        "is_online": False,
    },
]


def create_companion(data: dict) -> Companion:
    companion = repository.create({**data, "is_online": True})
    logger.info("Created companion id=%s name=%s", companion.id, companion.name)
    return companion


def list_companions() -> list[Companion]:
    return repository.list_all()


def get_companion(companion_id: int) -> Companion:
    companion = repository.get_by_id(companion_id)
    if companion is None:
        raise NotFoundError("Companion not found")
    return companion


def seed_default_companions() -> int:
    """Insert the default companions when none exist. Returns how many were added."""
    if repository.count() > 0:
        return 0
    for data in DEFAULT_COMPANIONS:
        repository.create(dict(data))
    logger.info("Seeded %d default companions", len(DEFAULT_COMPANIONS))
    return len(DEFAULT_COMPANIONS)
