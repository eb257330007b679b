"""Stability AI text-to-image adapter (SDXL)."""

from src.llm.client import ImageClient
from src.llm.errors import UpstreamFormatError


class StabilityClient(ImageClient):
    name = "stability"

    async def generate_image(self, prompt: str) -> str:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {self._api_key()}",
        }
        body = {
            "text_prompts": [{"text": prompt}],
            "cfg_scale": 7,
            "height": 1024,
            "width": 1024,
            "steps": 30,
            "samples": 1,
        }
        data = await self._post_json(self._settings.STABILITY_URL, headers=headers, json=body)
        artifacts = data.get("artifacts")
        if not artifacts or not isinstance(artifacts, list) or not artifacts[0].get("base64"):
            raise UpstreamFormatError(self.name, "no artifacts in response")
        return f"data:image/png;base64,{artifacts[0]['base64']}"
