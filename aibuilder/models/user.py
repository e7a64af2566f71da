# FILE: aibuilder/models/user.py
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, DateTime

from aibuilder.core.config import DEFAULT_CREDITS
from aibuilder.core.database import Base


class User(Base):
    """Account record. `credits` is the remaining balance, `credits_used` what was spent."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str] = mapped_column(String(190), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    name: Mapped[str] = mapped_column(String(120))

    # Plan: free, pro, enterprise
    plan: Mapped[str] = mapped_column(String(20), default="free")

    credits: Mapped[int] = mapped_column(Integer, default=DEFAULT_CREDITS)
    credits_used: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
