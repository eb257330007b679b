"""Pydantic schemas for application preferences."""

from datetime import datetime
from typing import Any

from src.utils.validators import CamelModel


class UpdatePreferencesRequest(CamelModel):
    active_model: str | None = None
    theme: str | None = None
    voice_enabled: bool | None = None
    preferences: dict[str, Any] | None = None


class PreferencesResponse(CamelModel):
    active_model: str
    theme: str
    voice_enabled: bool
    preferences: dict[str, Any]
    updated_at: datetime
