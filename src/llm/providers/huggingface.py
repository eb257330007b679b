"""Hugging Face inference adapter. Works without a key; uses one when stored."""

import base64

from src.llm.client import ImageClient
from src.llm.errors import UpstreamFormatError


class HuggingFaceClient(ImageClient):
    name = "huggingface"

    async def generate_image(self, prompt: str) -> str:
        headers = {"Content-Type": "application/json"}
        token = self._credentials.get(self.name)
        if token:
            headers["Authorization"] = f"Bearer {token}"

        response = await self._post(self._settings.HUGGINGFACE_IMAGE_URL, headers=headers, json={"inputs": prompt})
        content_type = response.headers.get("content-type", "").split(";")[0].strip()
        if not content_type.startswith("image/") or not response.content:
            raise UpstreamFormatError(self.name, f"expected image bytes, got {content_type or 'no content type'}")
        encoded = base64.b64encode(response.content).decode("ascii")
        return f"data:{content_type};base64,{encoded}"
