"""Companion endpoints."""

from fastapi import APIRouter

from src.companions.schemas import CompanionResponse, CreateCompanionRequest
from src.companions.service import create_companion, get_companion, list_companions

router = APIRouter(prefix="/api/companions", tags=["Companions"])


@router.get("", response_model=list[CompanionResponse], summary="List companions", description="All companions, most recently created first.")
async def list_all():
    return list_companions()


@router.get("/{companion_id}", response_model=CompanionResponse, summary="Get a companion")
async def get(companion_id: int):
    return get_companion(companion_id)


@router.post("", status_code=201, response_model=CompanionResponse, summary="Create a companion", description="Create a new companion persona. Name, role and personality need at least 2 characters.")
async def create(body: CreateCompanionRequest):
    return create_companion(body.model_dump(exclude_none=True))
