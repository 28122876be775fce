# --- File: app/schemas/student/student_base.py ---
"""
Student request schemas: admission, profile update and room transfer.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.models.base.enums import Block
from app.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "StudentProfile",
    "StudentAdmit",
    "StudentUpdate",
    "RoomTransferRequest",
]

_PHONE_PATTERN = r"^\+?[0-9][0-9 \-]{6,18}$"


class StudentProfile(BaseSchema):
    """Personal details captured at admission."""

    name: str = Field(..., min_length=2, max_length=255, description="Full name")
    email: EmailStr = Field(..., description="Unique contact email")
    mobile: str = Field(..., pattern=_PHONE_PATTERN, description="Student mobile number")
    parent_mobile: str = Field(..., pattern=_PHONE_PATTERN, description="Parent/guardian mobile")
    address: str = Field(..., min_length=3, max_length=1000, description="Permanent address")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class StudentAdmit(StudentProfile, BaseCreateSchema):
    """
    Admission request.

    A room is optional; when given, the room must sit in the same block and
    a bed is resolved automatically unless a free bed_number is requested.
    """

    block: Block = Field(..., description="Block the student is admitted to")
    admission_date: Date = Field(..., description="Date of admission")
    room_id: Optional[str] = Field(default=None, description="Room to allocate")
    bed_number: Optional[int] = Field(default=None, ge=1, description="Preferred bed")

    @property
    def profile(self) -> StudentProfile:
        return StudentProfile.model_validate(
            self.model_dump(include=set(StudentProfile.model_fields))
        )


class StudentUpdate(BaseUpdateSchema):
    """
    Profile patch. Room, bed, block, status and code change only through
    the dedicated lifecycle operations.
    """

    name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    email: Optional[EmailStr] = None
    mobile: Optional[str] = Field(default=None, pattern=_PHONE_PATTERN)
    parent_mobile: Optional[str] = Field(default=None, pattern=_PHONE_PATTERN)
    address: Optional[str] = Field(default=None, min_length=3, max_length=1000)
    admission_date: Optional[Date] = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v is not None else v


class RoomTransferRequest(BaseSchema):
    room_id: str = Field(..., description="Destination room")
    bed_number: Optional[int] = Field(default=None, ge=1, description="Preferred bed")
