"""Data access layer for provider API keys."""

from sqlalchemy import select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from src.db.client import session_scope
from src.db.models import ApiKey, utcnow


def get_valid_key(provider: str) -> str | None:
    with session_scope() as db:
        return db.scalar(select(ApiKey.key).where(ApiKey.provider == provider, ApiKey.is_valid.is_(True)))


def _insert(db: Session):
    return postgresql.insert if db.get_bind().dialect.name == "postgresql" else sqlite.insert


def upsert(provider: str, key: str) -> ApiKey:
    """Insert or replace the provider's key in a single statement."""
    now = utcnow()
    with session_scope() as db:
        stmt = _insert(db)(ApiKey).values(provider=provider, key=key, is_valid=True, created_at=now, updated_at=now)
        stmt = stmt.on_conflict_do_update(
            index_elements=[ApiKey.provider],
            set_={"key": key, "is_valid": True, "updated_at": now},
        ).returning(ApiKey)
        return db.scalars(stmt, execution_options={"populate_existing": True}).one()


def list_all() -> list[ApiKey]:
    with session_scope() as db:
        return list(db.execute(select(ApiKey).order_by(ApiKey.updated_at.desc())).scalars())


def mark_invalid(provider: str) -> None:
    with session_scope() as db:
        db.execute(
            update(ApiKey).where(ApiKey.provider == provider).values(is_valid=False, updated_at=utcnow())
        )
