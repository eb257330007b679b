"""Data access layer for companions."""

from typing import Any

from sqlalchemy import func, select

from src.db.client import session_scope
from src.db.models import Companion


def create(data: dict[str, Any]) -> Companion:
    with session_scope() as db:
        companion = Companion(**data)
        db.add(companion)
        db.flush()
        return companion


def list_all() -> list[Companion]:
    with session_scope() as db:
        result = db.execute(select(Companion).order_by(Companion.created_at.desc(), Companion.id.desc()))
        return list(result.scalars())


def get_by_id(companion_id: int) -> Companion | None:
    with session_scope() as db:
        return db.get(Companion, companion_id)


def count() -> int:
    with session_scope() as db:
        return db.scalar(select(func.count()).select_from(Companion)) or 0
