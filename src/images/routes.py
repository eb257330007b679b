"""Image generation endpoint."""

from fastapi import APIRouter

from src.images.schemas import GenerateImageRequest, GenerateImageResponse
from src.images.service import generate_image

router = APIRouter(prefix="/api/image", tags=["Images"])


@router.post("/generate", response_model=GenerateImageResponse, summary="Generate an image", description="Try Stability, then Gemini Imagen, then the free Hugging Face endpoint; falls back to a placeholder URL.")
async def generate(body: GenerateImageRequest):
    image_url = await generate_image(body.prompt)
    return GenerateImageResponse(image_url=image_url, prompt=body.prompt)
