import asyncio
import os
import tempfile
import uuid
from pathlib import Path

# Configure the environment before the application modules are imported:
# a throwaway SQLite file and no vendor credentials.
_DB_DIR = Path(tempfile.mkdtemp(prefix="aibuilder-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR / 'test.db'}"
VENDOR_KEYS = [
    "OPENAI_API_KEY",
    "GROQ_API_KEY",
    "STABILITY_API_KEY",
    "HUGGINGFACE_API_KEY",
    "ELEVENLABS_API_KEY",
    "DEEPGRAM_API_KEY",
]
for _key in VENDOR_KEYS:
    os.environ[_key] = ""

import pytest
from fastapi.testclient import TestClient

from aibuilder.core.database import SessionLocal, drop_models, init_models
from aibuilder.models.user import User
from aibuilder.services.auth_service import create_token


@pytest.fixture(autouse=True)
def fresh_db():
    asyncio.run(drop_models())
    asyncio.run(init_models())
    yield


@pytest.fixture(autouse=True)
def no_vendor_keys(monkeypatch):
    for key in VENDOR_KEYS:
        monkeypatch.setenv(key, "")


@pytest.fixture
def app():
    from aibuilder.server import create_app
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


async def _create_user(plan: str, credits: int) -> User:
    async with SessionLocal() as db:
        user = User(
            id=str(uuid.uuid4()),
            email=f"{uuid.uuid4().hex[:10]}@example.com",
            password_hash="!",
            name="Test User",
            plan=plan,
            credits=credits,
            credits_used=0,
        )
        db.add(user)
        await db.commit()
        return user


@pytest.fixture
def make_user():
    def _make(plan: str = "free", credits: int = 10):
        user = asyncio.run(_create_user(plan, credits))
        return user, create_token(user.id, user.email)
    return _make


async def _load_user(user_id: str) -> User:
    async with SessionLocal() as db:
        return await db.get(User, user_id)


@pytest.fixture
def load_user():
    def _load(user_id: str) -> User:
        return asyncio.run(_load_user(user_id))
    return _load


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
