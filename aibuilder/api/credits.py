# /aibuilder/api/credits.py
"""Credit balance and usage history for the authenticated user."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from aibuilder.api.deps import get_current_user
from aibuilder.core.database import get_db
from aibuilder.schemas.envelope import ok
from aibuilder.services.auth_service import Identity
from aibuilder.services.credit_service import get_account, get_balance, list_usage
from aibuilder.services.demo_user_service import demo_account, is_demo_user

router = APIRouter(prefix="/api", tags=["credits"])


@router.get("/credits/balance")
async def credit_balance(user: Identity = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    if is_demo_user(user.user_id):
        account = demo_account(user.user_id, user.email)
        return ok({k: account[k] for k in ("plan", "credits", "credits_used", "unlimited")})
    return ok(await get_balance(db, user.user_id))


@router.get("/credits/history")
async def credit_history(
        limit: int = Query(50, ge=1, le=200),
        user: Identity = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
):
    if is_demo_user(user.user_id):
        return ok([])
    return ok(await list_usage(db, user.user_id, limit))


@router.get("/users/profile")
async def profile(user: Identity = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    if is_demo_user(user.user_id):
        return ok(demo_account(user.user_id, user.email))
    account = await get_account(db, user.user_id)
    return ok({
        "id": account.id,
        "email": account.email,
        "name": account.name,
        "plan": account.plan,
        "credits": account.credits,
        "credits_used": account.credits_used,
    })
