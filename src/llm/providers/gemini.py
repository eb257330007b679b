"""Google Gemini adapter: text via generateContent, images via Imagen predict.

The key travels in the x-goog-api-key header, never in the query string.
"""

from src.llm.client import Completion, GenerationParams, ImageClient, LLMClient, Prompt
from src.llm.errors import UpstreamFormatError


class GeminiClient(LLMClient, ImageClient):
    name = "gemini"

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", "x-goog-api-key": self._api_key()}

    async def generate_text(self, prompt: Prompt, params: GenerationParams) -> Completion:
        headers = self._headers()
        body = {
            "systemInstruction": {"parts": [{"text": prompt.system}]},
            "contents": [{"role": "user", "parts": [{"text": prompt.text}]}],
            "generationConfig": {
                "temperature": params.temperature,
                "maxOutputTokens": params.max_tokens,
                "topP": 0.95,
                "topK": 40,
            },
        }
        url = f"{self._settings.GEMINI_BASE_URL}/{self._settings.GEMINI_MODEL}:generateContent"
        data = await self._post_json(url, headers=headers, json=body)
        return Completion(text=self._extract_text(data), provider=self.name)

    def _extract_text(self, data: dict) -> str:
        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as exc:
            raise UpstreamFormatError(self.name, "no candidates in response") from exc
        if not text:
            raise UpstreamFormatError(self.name, "empty candidate text")
        return text

    async def generate_image(self, prompt: str) -> str:
        headers = self._headers()
        body = {"instances": [{"prompt": prompt}], "parameters": {"sampleCount": 1}}
        url = f"{self._settings.GEMINI_BASE_URL}/{self._settings.GEMINI_IMAGE_MODEL}:predict"
        data = await self._post_json(url, headers=headers, json=body)
        try:
            prediction = data["predictions"][0]
            encoded = prediction["bytesBase64Encoded"]
        except (KeyError, IndexError, TypeError) as exc:
            raise UpstreamFormatError(self.name, "no predictions in response") from exc
        mime_type = prediction.get("mimeType") or "image/png"
        return f"data:{mime_type};base64,{encoded}"
