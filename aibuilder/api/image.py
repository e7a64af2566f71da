# FILE: aibuilder/api/image.py
from fastapi import APIRouter, Depends

from aibuilder.api.deps import get_current_user
from aibuilder.schemas.envelope import ok
from aibuilder.schemas.media import ImageRequest
from aibuilder.services import image_service
from aibuilder.services.auth_service import Identity

router = APIRouter(prefix="/api/image", tags=["image"])


@router.post("/generate")
async def generate_image(req: ImageRequest, user: Identity = Depends(get_current_user)):
    result = await image_service.generate_image(req.prompt, style=req.style, provider=req.provider)
    return ok(result.model_dump())


@router.get("/styles")
async def styles():
    return ok(image_service.IMAGE_STYLES)
