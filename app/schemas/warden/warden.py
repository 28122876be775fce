# --- File: app/schemas/warden/warden.py ---
"""
Warden schemas. Each block has at most one warden.
"""

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.models.base.enums import Block
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema

__all__ = ["WardenAssign", "WardenResponse"]


class WardenAssign(BaseCreateSchema):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    mobile: str = Field(..., pattern=r"^\+?[0-9][0-9 \-]{6,18}$")
    block: Block
    user_id: Optional[str] = Field(
        default=None,
        description="Login account of the warden, if one exists",
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class WardenResponse(BaseResponseSchema):
    name: str
    email: str
    mobile: str
    block: Block
    user_id: Optional[str] = None
