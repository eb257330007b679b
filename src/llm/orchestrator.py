"""Response orchestration: context assembly, provider fallback and persistence.

One call to `respond` produces exactly one assistant reply:

1. the requested provider is tried once;
2. on any provider failure the default provider is tried once with the same prompt
   (skipped when the default is what just failed);
3. if that fails too, an in-persona apology is returned, tagged with the requested
   provider, so the conversation continues.

Provider errors never leave this module. Persistence errors do.
"""

import asyncio
import logging
from collections import Counter
from contextlib import asynccontextmanager
from dataclasses import dataclass
from functools import lru_cache

from src.companions.service import get_companion
from src.config.settings import Settings, get_settings
from src.conversations import repository as conversations
from src.credentials.service import CredentialStore, get_credential_store
from src.db.models import ROLE_ASSISTANT, ROLE_USER, Companion, Message
from src.exceptions import PersistenceError
from src.llm.client import Completion, GenerationParams, LLMClient, Prompt
from src.llm.context import build_context, build_user_turn
from src.llm.errors import (
    InvalidCredentialError,
    ProviderConfigurationError,
    ProviderError,
    UpstreamUnavailableError,
)
from src.llm.media import extract_image
from src.llm.prompts import build_apology, build_persona_prompt
from src.llm.registry import TEXT_PROVIDERS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LLMResult:
    text: str
    model: str
    image_url: str | None = None


@dataclass(frozen=True)
class Exchange:
    user_message: Message
    assistant_message: Message
    result: LLMResult


class ResponseOrchestrator:
    def __init__(
        self,
        credentials: CredentialStore | None = None,
        providers: dict[str, type[LLMClient]] | None = None,
        settings: Settings | None = None,
    ):
        self._credentials = credentials or get_credential_store()
        self._providers = providers if providers is not None else TEXT_PROVIDERS
        self._settings = settings or get_settings()
        # Serializes exchanges per companion so concurrent messages cannot interleave context.
        self._locks: dict[int, asyncio.Lock] = {}
        self._lock_users: Counter[int] = Counter()

    @asynccontextmanager
    async def _companion_lock(self, companion_id: int):
        """Hold the companion's lock; it is discarded once no exchange holds or awaits it."""
        lock = self._locks.setdefault(companion_id, asyncio.Lock())
        self._lock_users[companion_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[companion_id] -= 1
            if not self._lock_users[companion_id]:
                del self._lock_users[companion_id]
                del self._locks[companion_id]

    async def respond(self, companion_id: int, user_text: str, requested_provider: str) -> Exchange:
        companion = get_companion(companion_id)

        async with self._companion_lock(companion.id):
            conversation = conversations.get_or_create(companion)
            history = conversations.recent_messages(conversation.id, self._settings.CONTEXT_MESSAGE_LIMIT)

            # Written before generation so the user's message survives any provider failure.
            user_message = conversations.append_message(conversation, ROLE_USER, user_text)

            prompt = Prompt(
                system=build_persona_prompt(companion),
                text=build_user_turn(build_context(companion, history), user_text),
            )
            result = await self.generate(companion, prompt, requested_provider)

            try:
                assistant_message = conversations.append_message(
                    conversation, ROLE_ASSISTANT, result.text, image_url=result.image_url
                )
            except PersistenceError:
                logger.error(
                    "Failed to save assistant reply for companion=%s model=%s text=%r",
                    companion.id, result.model, result.text,
                )
                raise

        return Exchange(user_message=user_message, assistant_message=assistant_message, result=result)

    async def generate(self, companion: Companion, prompt: Prompt, requested_provider: str) -> LLMResult:
        """Run the fallback chain. Never raises for provider failures."""
        params = GenerationParams(
            temperature=self._settings.DEFAULT_TEMPERATURE,
            max_tokens=self._settings.DEFAULT_MAX_TOKENS,
        )
        chain = [requested_provider]
        if self._settings.DEFAULT_PROVIDER != requested_provider:
            chain.append(self._settings.DEFAULT_PROVIDER)

        completion: Completion | None = None
        for provider in chain:
            try:
                completion = await self._attempt(provider, prompt, params)
                break
            except ProviderError as exc:
                self._record_failure(exc)

        if completion is None:
            logger.warning("All providers failed for companion=%s, replying with apology", companion.id)
            text, model = build_apology(companion), requested_provider
        else:
            text, model = completion.text, completion.provider

        text, image_url = extract_image(text)
        return LLMResult(text=text, model=model, image_url=image_url)

    async def _attempt(self, provider: str, prompt: Prompt, params: GenerationParams) -> Completion:
        client_cls = self._providers.get(provider)
        if client_cls is None:
            raise ProviderConfigurationError(provider, "unknown provider")
        client = client_cls(self._credentials, self._settings)
        timeout = self._settings.PROVIDER_TIMEOUT_SECONDS
        try:
            return await asyncio.wait_for(client.generate_text(prompt, params), timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise UpstreamUnavailableError(provider, f"no response within {timeout}s") from exc
        except ProviderError:
            raise
        except Exception as exc:
            logger.exception("Unexpected error from provider=%s", provider)
            raise UpstreamUnavailableError(provider, type(exc).__name__) from exc

    def _record_failure(self, exc: ProviderError) -> None:
        logger.warning("Provider %s failed (%s): %s", exc.provider, type(exc).__name__, exc.message)
        if isinstance(exc, InvalidCredentialError):
            try:
                self._credentials.mark_invalid(exc.provider)
            except PersistenceError:
                logger.warning("Could not mark credential for provider=%s invalid", exc.provider)


@lru_cache()
def get_orchestrator() -> ResponseOrchestrator:
    return ResponseOrchestrator()
