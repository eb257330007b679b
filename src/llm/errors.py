"""Provider-layer error taxonomy.

The orchestrator's fallback decision depends only on the error class, so
adapters must translate every expected failure into one of these:

    ProviderError
    ├── ProviderConfigurationError    do not call this provider again for the request
    │   ├── MissingCredentialError    no key stored
    │   └── InvalidCredentialError    provider rejected the key (401/403)
    ├── UpstreamUnavailableError      network failure, timeout, 429, 5xx
    └── UpstreamFormatError           success status with an unexpected body
"""

import httpx


class ProviderError(Exception):
    def __init__(self, provider: str, message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"{provider}: {message}")


class ProviderConfigurationError(ProviderError):
    pass


class MissingCredentialError(ProviderConfigurationError):
    def __init__(self, provider: str):
        super().__init__(provider, "API key not configured")


class InvalidCredentialError(ProviderConfigurationError):
    pass


class UpstreamUnavailableError(ProviderError):
    pass


class UpstreamFormatError(ProviderError):
    pass


def classify_http_error(provider: str, exc: httpx.HTTPError) -> ProviderError:
    """Map an httpx failure onto the provider taxonomy."""
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if status in (401, 403):
            return InvalidCredentialError(provider, f"credential rejected with HTTP {status}")
        return UpstreamUnavailableError(provider, f"HTTP {status}")
    if isinstance(exc, httpx.TimeoutException):
        return UpstreamUnavailableError(provider, "request timed out")
    return UpstreamUnavailableError(provider, f"{type(exc).__name__}")
