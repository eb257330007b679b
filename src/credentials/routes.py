"""API key management endpoints. Keys are write-only; reads return presence flags."""

import logging

from fastapi import APIRouter
from starlette.responses import JSONResponse

from src.credentials.schemas import ApiKeyStatus, PartialSaveResponse, SaveApiKeysRequest
from src.credentials.service import get_credential_store
from src.exceptions import AppError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings/api-keys", tags=["Settings"])


@router.get("", response_model=ApiKeyStatus, summary="API key status", description="Which providers have a valid key configured.")
async def status():
    return get_credential_store().list_status()


@router.post(
    "",
    response_model=ApiKeyStatus,
    summary="Save API keys",
    description="Save any subset of provider keys. Returns 207 with the status payload if some keys could not be saved.",
    responses={207: {"model": PartialSaveResponse}},
)
async def save(body: SaveApiKeysRequest):
    store = get_credential_store()
    submitted = {provider: getattr(body, provider) for provider in sorted(body.model_fields_set)}
    if not submitted:
        raise ValidationError("No API keys provided")

    failed: list[str] = []
    for provider, key in submitted.items():
        try:
            store.upsert(provider, key)
        except AppError as exc:
            logger.warning("Could not save API key for provider=%s: %s", provider, exc.message)
            failed.append(provider)

    key_status = store.list_status()
    if failed:
        payload = PartialSaveResponse(
            message="Some API keys could not be saved",
            status=ApiKeyStatus(**key_status),
            failed=failed,
        )
        return JSONResponse(status_code=207, content=payload.model_dump())
    return key_status
