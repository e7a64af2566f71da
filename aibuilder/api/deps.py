# FILE: aibuilder/api/deps.py

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from aibuilder.core.database import get_db
from aibuilder.core.errors import AuthError, RateLimitError
from aibuilder.services.auth_service import Identity, decode_token
from aibuilder.services.demo_user_service import is_demo_user
from aibuilder.services.project_store import DemoProjectStore, SqlProjectStore

security = HTTPBearer(auto_error=False)


async def get_current_user(
        credentials: HTTPAuthorizationCredentials = Depends(security),
) -> Identity:
    if not credentials or not credentials.credentials:
        raise AuthError("Access token required")
    return decode_token(credentials.credentials)


def get_demo_store(request: Request) -> DemoProjectStore:
    return request.app.state.demo_projects


async def get_project_store(
        user: Identity = Depends(get_current_user),
        db: AsyncSession = Depends(get_db),
        demo_store: DemoProjectStore = Depends(get_demo_store),
):
    if is_demo_user(user.user_id):
        return demo_store
    return SqlProjectStore(db)


def client_address(request: Request) -> str:
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


async def enforce_rate_limit(request: Request) -> None:
    limiter = request.app.state.rate_limiter
    if not limiter.hit(client_address(request)):
        raise RateLimitError()
