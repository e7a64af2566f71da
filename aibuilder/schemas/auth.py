# FILE: aibuilder/schemas/auth.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _lower_email(value: str) -> str:
    return value.strip().lower()


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=100)
    name: str = Field(min_length=1, max_length=100)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str):
        return _lower_email(v)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: str):
        return _lower_email(v)


class UserResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")
    id: str
    email: str
    name: str
    plan: str = "free"
    credits: int = 0
    credits_used: int = 0
    created_at: Optional[str] = None


class TokenResponse(BaseModel):
    token: str
    user: UserResponse
