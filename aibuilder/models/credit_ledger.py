# FILE: aibuilder/models/credit_ledger.py
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, ForeignKey, DateTime

from aibuilder.core.database import Base


class CreditLedger(Base):
    """Credit transactions ledger - one row per balance movement."""
    __tablename__ = "credit_ledger"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True)

    # Kind: usage (only debits are recorded today)
    kind: Mapped[str] = mapped_column(String(30))

    # Credits moved (negative for debit)
    amount: Mapped[int] = mapped_column(Integer)

    # Operation that caused the movement, e.g. "ai.generate"
    ref_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
