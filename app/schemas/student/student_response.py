# --- File: app/schemas/student/student_response.py ---
"""
Student response schemas.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional

from app.models.base.enums import Block, StudentStatus
from app.schemas.common.base import BaseResponseSchema

__all__ = ["StudentResponse"]


class StudentResponse(BaseResponseSchema):
    student_code: str
    name: str
    email: str
    mobile: str
    parent_mobile: str
    address: str
    block: Block
    admission_date: Date
    status: StudentStatus
    room_id: Optional[str] = None
    room_number: Optional[str] = None
    bed_number: Optional[int] = None
