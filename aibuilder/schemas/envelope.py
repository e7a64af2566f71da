# FILE: aibuilder/schemas/envelope.py
#
# Every route answers with one of these two shapes.

from typing import Any, Optional

from pydantic import BaseModel


class Ok(BaseModel):
    success: bool = True
    data: Any = None
    message: Optional[str] = None


class Err(BaseModel):
    success: bool = False
    error: str
    code: Optional[str] = None


def ok(data: Any = None, message: Optional[str] = None) -> dict:
    # only top-level empties are dropped; nulls inside data are kept
    body = Ok(data=data, message=message).model_dump()
    return {k: v for k, v in body.items() if v is not None}
