"""Application preference endpoints."""

from fastapi import APIRouter

from src.exceptions import ValidationError
from src.llm.registry import TEXT_PROVIDERS
from src.preferences import repository
from src.preferences.schemas import PreferencesResponse, UpdatePreferencesRequest

router = APIRouter(prefix="/api/settings", tags=["Settings"])


@router.get("", response_model=PreferencesResponse, summary="Get preferences")
async def get():
    return repository.get_or_create()


@router.patch("", response_model=PreferencesResponse, summary="Update preferences", description="Update the active model, theme, voice toggle or free-form preferences.")
async def patch(body: UpdatePreferencesRequest):
    data = body.model_dump(exclude_none=True)
    if "active_model" in data and data["active_model"] not in TEXT_PROVIDERS:
        raise ValidationError(f"Unknown model: {data['active_model']}")
    if not data:
        return repository.get_or_create()
    return repository.update(data)
