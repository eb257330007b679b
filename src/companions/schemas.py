"""Pydantic schemas for companion requests and responses."""

from datetime import datetime

from pydantic import ConfigDict, Field

from src.utils.validators import CamelModel


# --- Requests ---

class CreateCompanionRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=2, max_length=100)
    role: str = Field(min_length=2, max_length=100)
    personality: str = Field(min_length=2, max_length=50)
    description: str | None = None
    avatar: str | None = None


# --- Responses ---

class CompanionResponse(CamelModel):
    id: int
    name: str
    role: str
    personality: str
    description: str | None
    avatar: str | None
    is_online: bool
    created_at: datetime
    last_interaction: datetime | None
