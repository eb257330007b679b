"""Provider lookup tables. Adding a provider means adding a client class and an entry here."""

from src.credentials.service import CredentialStore
from src.llm.client import ImageClient, LLMClient
from src.llm.providers.deepseek import DeepSeekClient
from src.llm.providers.gemini import GeminiClient
from src.llm.providers.groq import GroqClient
from src.llm.providers.huggingface import HuggingFaceClient
from src.llm.providers.stability import StabilityClient

TEXT_PROVIDERS: dict[str, type[LLMClient]] = {
    "gemini": GeminiClient,
    "deepseek": DeepSeekClient,
    "groq": GroqClient,
}

IMAGE_PROVIDERS: dict[str, type[ImageClient]] = {
    "stability": StabilityClient,
    "gemini": GeminiClient,
    "huggingface": HuggingFaceClient,
}


def get_image_client(provider: str, credentials: CredentialStore) -> ImageClient:
    try:
        return IMAGE_PROVIDERS[provider](credentials)
    except KeyError:
        raise ValueError(f"Unknown image provider: {provider}") from None
