# FILE: aibuilder/services/credit_service.py
"""Credit ledger: gate every billable operation on the caller's balance.

The check and the decrement happen in one conditional UPDATE
(``credits >= cost`` is part of the WHERE clause), so two concurrent requests
from the same user can never both spend the same credits. Credits are not
refunded when the operation they paid for fails afterwards.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from aibuilder.core.errors import CreditError, NotFoundError, StoreError
from aibuilder.models.credit_ledger import CreditLedger
from aibuilder.models.user import User
from aibuilder.services.demo_user_service import is_demo_user

logger = logging.getLogger("aibuilder.credits")

UNLIMITED_PLANS = {"pro"}


@dataclass(frozen=True)
class CreditDecision:
    allowed: bool
    reason: Optional[str] = None


async def _read_balance(db: AsyncSession, user_id: str):
    return (
        await db.execute(
            select(User.credits, User.plan).where(User.id == user_id)
        )
    ).first()


async def authorize_and_debit(
        db: AsyncSession,
        user_id: str,
        cost: int,
        ref: Optional[str] = None,
) -> CreditDecision:
    if is_demo_user(user_id):
        return CreditDecision(allowed=True)

    try:
        row = await _read_balance(db, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Credit lookup failed for {user_id}: {e}")
        row = None

    if row is None:
        return CreditDecision(allowed=False, reason="User profile not found")

    credits, plan = row
    if plan in UNLIMITED_PLANS:
        return CreditDecision(allowed=True)

    if credits < cost:
        logger.info(f"Credit denial for {user_id}: required {cost}, available {credits}")
        return CreditDecision(
            allowed=False,
            reason=f"Not enough credits. Required: {cost}, Available: {credits}",
        )

    try:
        res = await db.execute(
            update(User)
            .where(User.id == user_id, User.credits >= cost)
            .values(
                credits=User.credits - cost,
                credits_used=User.credits_used + cost,
            )
            .execution_options(synchronize_session=False)
        )

        if res.rowcount == 0:
            # lost the race against a concurrent debit
            await db.rollback()
            fresh = await _read_balance(db, user_id)
            available = fresh[0] if fresh else 0
            logger.info(f"Credit denial for {user_id} after concurrent debit: available {available}")
            return CreditDecision(
                allowed=False,
                reason=f"Not enough credits. Required: {cost}, Available: {available}",
            )

        db.add(CreditLedger(
            user_id=user_id,
            kind="usage",
            amount=-cost,
            ref_id=ref,
            created_at=datetime.utcnow(),
        ))
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Credit update failed for {user_id}: {e}")
        return CreditDecision(allowed=False, reason="Failed to update credits")

    return CreditDecision(allowed=True)


async def require_credits(db: AsyncSession, user_id: str, cost: int, ref: Optional[str] = None) -> None:
    decision = await authorize_and_debit(db, user_id, cost, ref)
    if not decision.allowed:
        raise CreditError(decision.reason or "Insufficient credits")


async def get_account(db: AsyncSession, user_id: str) -> User:
    try:
        user = (await db.execute(select(User).where(User.id == user_id))).scalar_one_or_none()
    except SQLAlchemyError as e:
        raise StoreError("Failed to load account") from e
    if not user:
        raise NotFoundError("User profile not found")
    return user


async def get_balance(db: AsyncSession, user_id: str) -> Dict[str, Any]:
    user = await get_account(db, user_id)
    return {
        "plan": user.plan,
        "credits": user.credits,
        "credits_used": user.credits_used,
        "unlimited": user.plan in UNLIMITED_PLANS,
    }


async def list_usage(db: AsyncSession, user_id: str, limit: int = 50) -> List[Dict[str, Any]]:
    try:
        rows = (
            await db.execute(
                select(CreditLedger)
                .where(CreditLedger.user_id == user_id)
                .order_by(CreditLedger.created_at.desc(), CreditLedger.id.desc())
                .limit(limit)
            )
        ).scalars().all()
    except SQLAlchemyError as e:
        raise StoreError("Failed to load credit history") from e

    return [
        {
            "id": t.id,
            "kind": t.kind,
            "amount": t.amount,
            "ref_id": t.ref_id,
            "created_at": t.created_at.isoformat(),
        }
        for t in rows
    ]
