"""Data access for the single application settings row."""

from typing import Any

from sqlalchemy import select

from src.db.client import session_scope
from src.db.models import AppSettings, utcnow


def get_or_create() -> AppSettings:
    with session_scope() as db:
        row = db.scalar(select(AppSettings).order_by(AppSettings.id).limit(1))
        if row is None:
            row = AppSettings()
            db.add(row)
            db.flush()
        return row


def update(data: dict[str, Any]) -> AppSettings:
    with session_scope() as db:
        row = db.scalar(select(AppSettings).order_by(AppSettings.id).limit(1))
        if row is None:
            row = AppSettings()
            db.add(row)
        for field, value in data.items():
            setattr(row, field, value)
        row.updated_at = utcnow()
        db.flush()
        return row
