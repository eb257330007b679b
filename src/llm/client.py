"""Provider client abstractions shared by the text and image adapters."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from src.config.settings import Settings, get_settings
from src.credentials.service import CredentialStore
from src.llm.errors import MissingCredentialError, UpstreamFormatError, classify_http_error

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Prompt:
    """Full prompt for one generation: persona instructions plus the user turn (context included)."""

    system: str
    text: str


@dataclass(frozen=True)
class GenerationParams:
    temperature: float = 0.7
    max_tokens: int = 800


@dataclass(frozen=True)
class Completion:
    text: str
    provider: str


class ProviderClient:
    name: str = ""

    def __init__(self, credentials: CredentialStore, settings: Settings | None = None):
        self._credentials = credentials
        self._settings = settings or get_settings()

    @property
    def timeout(self) -> float:
        return self._settings.PROVIDER_TIMEOUT_SECONDS

    def _api_key(self) -> str:
        # Read on every call so keys rotated through the settings API apply immediately.
        key = self._credentials.get(self.name)
        if not key:
            raise MissingCredentialError(self.name)
        return key

    async def _post(self, url: str, *, headers: dict[str, str], json: dict[str, Any]) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout, connect=10.0)) as client:
                response = await client.post(url, headers=headers, json=json)
                response.raise_for_status()
                return response
        except httpx.HTTPError as exc:
            raise classify_http_error(self.name, exc) from exc

    async def _post_json(self, url: str, *, headers: dict[str, str], json: dict[str, Any]) -> dict:
        response = await self._post(url, headers=headers, json=json)
        try:
            data = response.json()
        except ValueError as exc:
            raise UpstreamFormatError(self.name, "response body is not JSON") from exc
        if not isinstance(data, dict):
            raise UpstreamFormatError(self.name, "response body is not a JSON object")
        return data


class LLMClient(ProviderClient, ABC):
    @abstractmethod
    async def generate_text(self, prompt: Prompt, params: GenerationParams) -> Completion:
        """Return the generated text, or raise a ProviderError subclass."""
        ...


class ImageClient(ProviderClient, ABC):
    @abstractmethod
    async def generate_image(self, prompt: str) -> str:
        """Return an image URL or data URI, or raise a ProviderError subclass."""
        ...
