"""Image generation with a provider chain that always yields something displayable."""

import logging
from urllib.parse import quote

from src.config.settings import get_settings
from src.credentials.service import CredentialStore, get_credential_store
from src.llm.errors import ProviderError
from src.llm.registry import get_image_client

logger = logging.getLogger(__name__)

# Primary, secondary, then the free inference endpoint.
IMAGE_CHAIN = ("stability", "gemini", "huggingface")


def placeholder_image_url(prompt: str) -> str:
    keywords = " ".join(prompt.split(" ")[:3])
    return f"{get_settings().PLACEHOLDER_IMAGE_URL}?{quote(keywords, safe='!~*()')}"


async def generate_image(prompt: str, credentials: CredentialStore | None = None) -> str:
    credentials = credentials or get_credential_store()
    for provider in IMAGE_CHAIN:
        client = get_image_client(provider, credentials)
        try:
            image = await client.generate_image(prompt)
        except ProviderError as exc:
            logger.info("Image provider %s failed (%s): %s", provider, type(exc).__name__, exc.message)
            continue
        except Exception:
            logger.exception("Unexpected error from image provider=%s", provider)
            continue
        logger.info("Generated image with provider=%s", provider)
        return image

    logger.warning("All image providers failed, using placeholder")
    return placeholder_image_url(prompt)
