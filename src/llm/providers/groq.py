"""Groq adapter using the official SDK. A client is built per call with the current key."""

import groq
from groq import AsyncGroq

from src.llm.client import Completion, GenerationParams, LLMClient, Prompt
from src.llm.errors import InvalidCredentialError, UpstreamFormatError, UpstreamUnavailableError


class GroqClient(LLMClient):
    name = "groq"

    async def generate_text(self, prompt: Prompt, params: GenerationParams) -> Completion:
        # No SDK retries; the orchestrator owns the fallback policy.
        client = AsyncGroq(api_key=self._api_key(), timeout=self.timeout, max_retries=0)
        try:
            response = await client.chat.completions.create(
                model=self._settings.GROQ_MODEL,
                messages=[
                    {"role": "system", "content": prompt.system},
                    {"role": "user", "content": prompt.text},
                ],
                temperature=params.temperature,
                max_tokens=params.max_tokens,
            )
        except (groq.AuthenticationError, groq.PermissionDeniedError) as exc:
            raise InvalidCredentialError(self.name, f"credential rejected with HTTP {exc.status_code}") from exc
        except groq.APIStatusError as exc:
            raise UpstreamUnavailableError(self.name, f"HTTP {exc.status_code}") from exc
        except groq.APIError as exc:
            raise UpstreamUnavailableError(self.name, type(exc).__name__) from exc
        finally:
            await client.close()

        if not response.choices or not response.choices[0].message.content:
            raise UpstreamFormatError(self.name, "no choices in response")
        return Completion(text=response.choices[0].message.content, provider=self.name)
