"""Pydantic schemas for message requests and responses."""

from datetime import datetime

from pydantic import ConfigDict, Field

from src.utils.validators import CamelModel


class SendMessageRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(min_length=1, max_length=8000)
    model: str | None = None


class MessageResponse(CamelModel):
    id: int
    conversation_id: int
    role: str
    content: str
    image_url: str | None = None
    created_at: datetime


class ExchangeResponse(CamelModel):
    user_message: MessageResponse
    assistant_message: MessageResponse
    model: str
