# FILE: aibuilder/services/demo_user_service.py
from typing import Any, Dict

from aibuilder.core.config import DEFAULT_CREDITS, DEMO_USER_ID, DEMO_USER_PREFIX

DEMO_PLAN = "demo"
DEMO_USER_NAME = "Demo User"


def is_demo_user(user_id: str) -> bool:
    if not user_id:
        return False
    user_id = str(user_id).strip()
    return user_id == DEMO_USER_ID or user_id.startswith(DEMO_USER_PREFIX)


def demo_account(user_id: str, email: str) -> Dict[str, Any]:
    """Account view for the demo identity: never charged, so unlimited."""
    return {
        "id": user_id,
        "email": email,
        "name": DEMO_USER_NAME,
        "plan": DEMO_PLAN,
        "credits": DEFAULT_CREDITS,
        "credits_used": 0,
        "unlimited": True,
    }
