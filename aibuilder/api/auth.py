# FILE: aibuilder/api/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from aibuilder.api.deps import get_current_user
from aibuilder.core.database import get_db
from aibuilder.models.user import User
from aibuilder.schemas.auth import UserCreate, UserLogin, TokenResponse, UserResponse
from aibuilder.schemas.envelope import ok
from aibuilder.services.auth_service import Identity, authenticate_user, register_user
from aibuilder.services.credit_service import get_account
from aibuilder.services.demo_user_service import demo_account, is_demo_user

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name or user.email.split("@")[0],
        plan=user.plan,
        credits=user.credits,
        credits_used=user.credits_used,
        created_at=user.created_at.isoformat() if user.created_at else None,
    )


@router.post("/register", status_code=201)
async def register(data: UserCreate, db: AsyncSession = Depends(get_db)):
    user, token = await register_user(db, data.email, data.password, data.name)
    return ok(TokenResponse(token=token, user=_user_response(user)).model_dump())


@router.post("/login")
async def login(data: UserLogin, db: AsyncSession = Depends(get_db)):
    user, token = await authenticate_user(db, data.email, data.password)
    return ok(TokenResponse(token=token, user=_user_response(user)).model_dump())


@router.post("/logout")
async def logout():
    # tokens are stateless; the client drops it
    return ok(message="Logged out successfully")


@router.get("/me")
async def auth_me(user: Identity = Depends(get_current_user), db: AsyncSession = Depends(get_db)):
    if is_demo_user(user.user_id):
        return ok(UserResponse(**demo_account(user.user_id, user.email)).model_dump())
    account = await get_account(db, user.user_id)
    return ok(_user_response(account).model_dump())
