"""Pydantic schemas for image generation."""

from pydantic import ConfigDict, Field

from src.utils.validators import CamelModel


class GenerateImageRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    prompt: str = Field(min_length=1, max_length=2000)


class GenerateImageResponse(CamelModel):
    image_url: str
    prompt: str
