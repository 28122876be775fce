# --- File: app/schemas/leave/leave_application.py ---
"""
Leave application schemas.

Provides the request schema for applying, the decision payload used by
wardens and admins, and the response shape.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional

from pydantic import ConfigDict, Field

from app.models.base.enums import Block, LeaveStatus
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "LeaveCreate",
    "LeaveStatusUpdate",
    "LeaveResponse",
]


class LeaveCreate(BaseCreateSchema):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "student_ref": "HSTL2025A001",
                "start_date": "2025-03-10",
                "end_date": "2025-03-12",
                "reason": "Family function",
            }
        }
    )

    student_ref: str = Field(..., description="Student id or student code")
    start_date: Date = Field(..., description="First day of leave")
    end_date: Date = Field(..., description="Last day of leave (inclusive)")
    reason: str = Field(..., min_length=3, max_length=1000)


class LeaveStatusUpdate(BaseSchema):
    """Decision on a pending leave."""

    status: LeaveStatus = Field(..., description="approved or rejected")


class LeaveResponse(BaseResponseSchema):
    student_id: str
    student_code: str
    student_name: str
    block: Block
    room_number: str
    start_date: Date
    end_date: Date
    reason: str
    status: LeaveStatus
    approved_by: Optional[str] = None
