"""Companion Chat API — FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.companions.routes import router as companions_router
from src.companions.service import seed_default_companions
from src.config.cors import SecurityHeadersMiddleware, configure_cors
from src.config.settings import get_settings
from src.credentials.routes import router as credentials_router
from src.db.client import init_db
from src.images.routes import router as images_router
from src.messages.routes import router as messages_router
from src.middleware.error_handler import register_error_handlers
from src.middleware.rate_limiter import RateLimiterMiddleware
from src.middleware.request_id import RequestIDMiddleware
from src.preferences.routes import router as preferences_router
from src.realtime.routes import router as realtime_router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=get_settings().LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    init_db()
    if get_settings().SEED_DEFAULT_COMPANIONS:
        seed_default_companions()
    logger.info("Companion Chat API started")
    yield


app = FastAPI(
    title="Companion Chat API",
    description=(
        "Chat with AI companions backed by pluggable language-model and image providers.\n\n"
        "## Features\n"
        "- Companion personas with personality-driven system prompts\n"
        "- Multi-provider text generation (Gemini, DeepSeek, Groq) with fallback\n"
        "- Image generation chain (Stability, Gemini Imagen, Hugging Face, placeholder)\n"
        "- Write-only provider key management\n"
        "- WebSocket typing indicators and message notifications at `/ws`"
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Companions", "description": "Create and browse companions"},
        {"name": "Messages", "description": "Conversation history and sending messages"},
        {"name": "Images", "description": "Text-to-image generation"},
        {"name": "Settings", "description": "API keys and app preferences"},
    ],
)

# --- Middleware (last added runs first) ---
app.add_middleware(RateLimiterMiddleware)
configure_cors(app)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIDMiddleware)

# --- Error handlers ---
register_error_handlers(app)

# --- Routes ---
app.include_router(companions_router)
app.include_router(messages_router)
app.include_router(images_router)
app.include_router(credentials_router)
app.include_router(preferences_router)
app.include_router(realtime_router)


@app.get("/health", tags=["Health"], summary="Health check", description="Returns OK if the service is running.")
async def health_check():
    return {"status": "ok"}
