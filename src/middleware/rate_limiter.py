"""In-memory sliding window rate limiter keyed by client address."""

import time
from collections import defaultdict, deque

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from src.config.settings import get_settings

EXEMPT_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


class RateLimiterMiddleware(BaseHTTPMiddleware):
    def __init__(self, app):
        super().__init__(app)
        # client -> request timestamps within the last minute
        self._standard_windows: dict[str, deque[float]] = defaultdict(deque)
        self._ai_windows: dict[str, deque[float]] = defaultdict(deque)

    def _is_ai_request(self, request: Request) -> bool:
        if request.method != "POST":
            return False
        parts = request.url.path.rstrip("/").split("/")
        # /api/conversations/<companion_id>/messages
        if len(parts) == 5 and parts[1:3] == ["api", "conversations"] and parts[4] == "messages":
            return True
        return request.url.path.rstrip("/") == "/api/image/generate"

    def _check_limit(self, window: deque[float], limit: int, now: float) -> tuple[bool, int]:
        """Remove expired entries, check if under limit. Returns (allowed, retry_after_seconds)."""
        cutoff = now - 60.0
        while window and window[0] < cutoff:
            window.popleft()

        if len(window) >= limit:
            retry_after = int(window[0] - cutoff) + 1
            return False, retry_after

        window.append(now)
        return True, 0

    def _limited(self, message: str, retry_after: int) -> Response:
        return JSONResponse(
            status_code=429,
            content={"status": "error", "error": {"type": "rate_limit", "message": message}},
            headers={"Retry-After": str(retry_after)},
        )

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        settings = get_settings()
        now = time.time()

        if self._is_ai_request(request):
            allowed, retry_after = self._check_limit(self._ai_windows[client], settings.RATE_LIMIT_AI, now)
            if not allowed:
                return self._limited("AI generation rate limit exceeded", retry_after)

        allowed, retry_after = self._check_limit(self._standard_windows[client], settings.RATE_LIMIT_STANDARD, now)
        if not allowed:
            return self._limited("Rate limit exceeded", retry_after)

        return await call_next(request)
