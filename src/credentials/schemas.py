"""Pydantic schemas for API key management."""

from pydantic import BaseModel


class SaveApiKeysRequest(BaseModel):
    gemini: str | None = None
    deepseek: str | None = None
    groq: str | None = None
    stability: str | None = None


class ApiKeyStatus(BaseModel):
    gemini: bool
    deepseek: bool
    groq: bool
    stability: bool


class PartialSaveResponse(BaseModel):
    message: str
    status: ApiKeyStatus
    failed: list[str]
