# --- File: app/schemas/complaint/complaint.py ---
"""
Complaint schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import ConfigDict, Field

from app.models.base.enums import Block, ComplaintCategory, ComplaintStatus
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "ComplaintCreate",
    "ComplaintStatusUpdate",
    "ComplaintResponse",
    "ComplaintStats",
]


class ComplaintCreate(BaseCreateSchema):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "student_ref": "HSTL2025A001",
                "category": "room",
                "title": "Broken window latch",
                "description": "The window in room 101 does not close.",
            }
        }
    )

    student_ref: str = Field(..., description="Student id or student code")
    category: ComplaintCategory
    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field(..., min_length=3, max_length=2000)


class ComplaintStatusUpdate(BaseSchema):
    status: ComplaintStatus
    admin_note: Optional[str] = Field(default=None, max_length=2000)


class ComplaintResponse(BaseResponseSchema):
    complaint_code: str
    student_id: str
    student_code: str
    student_name: str
    student_mobile: str
    block: Block
    room_number: str
    category: ComplaintCategory
    title: str
    description: str
    status: ComplaintStatus
    admin_note: Optional[str] = None
    handled_by: Optional[str] = None


class ComplaintStats(BaseSchema):
    """Complaint counts per status."""

    new: int = 0
    in_progress: int = 0
    resolved: int = 0
    total: int = 0
