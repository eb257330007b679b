"""DeepSeek adapter (OpenAI-compatible chat completions)."""

from src.llm.client import Completion, GenerationParams, LLMClient, Prompt
from src.llm.errors import UpstreamFormatError


class DeepSeekClient(LLMClient):
    name = "deepseek"

    async def generate_text(self, prompt: Prompt, params: GenerationParams) -> Completion:
        headers = {"Content-Type": "application/json", "Authorization": f"Bearer {self._api_key()}"}
        body = {
            "model": self._settings.DEEPSEEK_MODEL,
            "messages": [
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.text},
            ],
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
        }
        data = await self._post_json(f"{self._settings.DEEPSEEK_BASE_URL}/chat/completions", headers=headers, json=body)
        try:
            text = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise UpstreamFormatError(self.name, "no choices in response") from exc
        if not isinstance(text, str) or not text:
            raise UpstreamFormatError(self.name, "empty message content")
        return Completion(text=text, provider=self.name)
