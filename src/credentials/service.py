"""Credential store: per-provider secrets with presence/validity reporting."""

import logging
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache

from src.credentials import repository
from src.exceptions import ValidationError

logger = logging.getLogger(__name__)

# Providers whose keys are managed through the settings API.
MANAGED_PROVIDERS = ("gemini", "deepseek", "groq", "stability")


@dataclass(frozen=True)
class StoredCredential:
    provider: str
    is_valid: bool
    updated_at: datetime


class CredentialStore:
    """Reads go to the database every time so rotated keys apply immediately."""

    def get(self, provider: str) -> str | None:
        return repository.get_valid_key(provider)

    def upsert(self, provider: str, secret: str | None) -> StoredCredential:
        if secret is None or not secret.strip():
            raise ValidationError(f"API key for {provider} must not be empty")
        row = repository.upsert(provider, secret.strip())
        logger.info("Saved API key for provider=%s", provider)
        return StoredCredential(provider=row.provider, is_valid=row.is_valid, updated_at=row.updated_at)

    def list_status(self) -> dict[str, bool]:
        status = {provider: False for provider in MANAGED_PROVIDERS}
        for row in repository.list_all():
            if row.provider in status:
                status[row.provider] = row.is_valid
        return status

    def mark_invalid(self, provider: str) -> None:
        repository.mark_invalid(provider)
        logger.warning("Marked API key for provider=%s as invalid", provider)


@lru_cache()
def get_credential_store() -> CredentialStore:
    return CredentialStore()
