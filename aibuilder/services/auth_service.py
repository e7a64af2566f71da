# FILE: aibuilder/services/auth_service.py
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone, timedelta
from typing import Tuple

import bcrypt
import jwt
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from aibuilder.core.config import (
    DEFAULT_CREDITS,
    DEMO_TOKEN,
    DEMO_USER_EMAIL,
    DEMO_USER_ID,
    JWT_ALGORITHM,
    JWT_EXPIRATION_HOURS,
    JWT_SECRET,
)
from aibuilder.core.errors import AuthError, StoreError, ValidationError
from aibuilder.models.user import User

logger = logging.getLogger("aibuilder.auth")


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: str


DEMO_IDENTITY = Identity(user_id=DEMO_USER_ID, email=DEMO_USER_EMAIL)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))


def create_token(user_id: str, email: str) -> str:
    payload = {
        "user_id": user_id,
        "email": email,
        "sub": email,
        "exp": datetime.now(timezone.utc) + timedelta(hours=JWT_EXPIRATION_HOURS),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> Identity:
    """Map a bearer token to an identity. The demo sentinel skips verification."""
    token = (token or "").strip()
    if token == DEMO_TOKEN:
        return DEMO_IDENTITY

    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthError("Invalid or expired token", status_code=403)
    except jwt.InvalidTokenError:
        raise AuthError("Invalid or expired token", status_code=403)

    user_id = payload.get("user_id") or payload.get("userId") or payload.get("id")
    if not user_id or not isinstance(user_id, str):
        raise AuthError("Invalid or expired token", status_code=403)

    return Identity(user_id=user_id, email=str(payload.get("email") or ""))


async def register_user(db: AsyncSession, email: str, password: str, name: str) -> Tuple[User, str]:
    try:
        existing = (await db.execute(select(User).where(User.email == email))).scalar_one_or_none()
        if existing:
            raise ValidationError("User already exists")

        user = User(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=hash_password(password),
            name=name,
            plan="free",
            credits=DEFAULT_CREDITS,
            credits_used=0,
            created_at=datetime.utcnow(),
        )
        db.add(user)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Registration failed for {email}: {e}")
        raise StoreError("Registration failed") from e

    logger.info(f"Registered user {user.id}")
    return user, create_token(user.id, user.email)


async def authenticate_user(db: AsyncSession, email: str, password: str) -> Tuple[User, str]:
    try:
        user = (await db.execute(select(User).where(User.email == email))).scalar_one_or_none()
    except SQLAlchemyError as e:
        raise StoreError("Login failed") from e

    if not user or not verify_password(password, user.password_hash):
        raise AuthError("Invalid credentials")

    return user, create_token(user.id, user.email)
