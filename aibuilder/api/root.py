from fastapi import APIRouter

from aibuilder.schemas.envelope import ok

router = APIRouter(prefix="/api", tags=["root"])

@router.get("/")
async def api_root():
    return ok(message="AI Builder API - prompt to front-end code")
