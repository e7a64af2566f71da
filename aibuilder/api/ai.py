# FILE: aibuilder/api/ai.py
# Billable AI endpoints: each call is charged before the vendor is contacted.

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from aibuilder.api.deps import get_current_user
from aibuilder.core.config import GENERATION_COST
from aibuilder.core.database import get_db
from aibuilder.schemas.envelope import ok
from aibuilder.schemas.generate import (
    DescriptionRequest,
    ExplainRequest,
    GenerateRequest,
    GenerationResult,
    ImproveRequest,
)
from aibuilder.services import ai_service
from aibuilder.services.auth_service import Identity
from aibuilder.services.credit_service import require_credits

router = APIRouter(prefix="/api/ai", tags=["ai"])
logger = logging.getLogger("aibuilder.ai")


def _result(result: GenerationResult) -> dict:
    return ok(result.model_dump(by_alias=True))


@router.post("/generate")
async def generate(
        req: GenerateRequest,
        user: Identity = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    await require_credits(db, user.user_id, GENERATION_COST, ref="ai.generate")
    result = await ai_service.generate_code(req.prompt, req.type)
    return _result(result)


@router.post("/landing")
async def landing(
        req: DescriptionRequest,
        user: Identity = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    await require_credits(db, user.user_id, GENERATION_COST, ref="ai.landing")
    return _result(await ai_service.generate_landing_page(req.description))


@router.post("/dashboard")
async def dashboard(
        req: DescriptionRequest,
        user: Identity = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    await require_credits(db, user.user_id, GENERATION_COST, ref="ai.dashboard")
    return _result(await ai_service.generate_dashboard(req.description))


@router.post("/improve")
async def improve(
        req: ImproveRequest,
        user: Identity = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    await require_credits(db, user.user_id, GENERATION_COST, ref="ai.improve")
    code = await ai_service.improve_code(req.code, req.instructions)
    return ok({"code": code})


@router.post("/explain")
async def explain(
        req: ExplainRequest,
        user: Identity = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    # same flat price as generation
    await require_credits(db, user.user_id, GENERATION_COST, ref="ai.explain")
    explanation = await ai_service.explain_code(req.code)
    return ok({"explanation": explanation})
