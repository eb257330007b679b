"""Application settings loaded from environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./companions.db"
    SEED_DEFAULT_COMPANIONS: bool = True

    # LLM
    DEFAULT_PROVIDER: str = "gemini"
    PROVIDER_TIMEOUT_SECONDS: float = 20.0
    CONTEXT_MESSAGE_LIMIT: int = 10
    DEFAULT_TEMPERATURE: float = 0.7
    DEFAULT_MAX_TOKENS: int = 800

    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_IMAGE_MODEL: str = "imagen-3.0-generate-002"
    DEEPSEEK_BASE_URL: str = "https://api.deepseek.com/v1"
    DEEPSEEK_MODEL: str = "deepseek-chat"
    GROQ_MODEL: str = "llama-3.1-8b-instant"

    # Images
    STABILITY_URL: str = "https://api.stability.ai/v1/generation/stable-diffusion-xl-1024-v1-0/text-to-image"
    HUGGINGFACE_IMAGE_URL: str = "https://api-inference.huggingface.co/models/runwayml/stable-diffusion-v1-5"
    PLACEHOLDER_IMAGE_URL: str = "https://source.unsplash.com/800x600/"

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Rate limiting
    RATE_LIMIT_STANDARD: int = 60
    RATE_LIMIT_AI: int = 10

    LOG_LEVEL: str = "INFO"

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache()
def get_settings() -> Settings:
    return Settings()
