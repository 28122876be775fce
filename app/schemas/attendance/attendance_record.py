# --- File: app/schemas/attendance/attendance_record.py ---
"""
Attendance schemas for the daily roster of a block.

A bulk submission replaces the whole day for the block: students missing
from the roster lose any record they had for that date.
"""

from __future__ import annotations

from datetime import date as Date
from typing import List, Optional

from pydantic import Field

from app.models.base.enums import AttendanceStatus, Block, UnresolvedRosterPolicy
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "RosterEntry",
    "BulkAttendanceRequest",
    "SkippedRosterEntry",
    "AttendanceRecordResponse",
    "BulkAttendanceResponse",
    "RosterDayEntry",
]


class RosterEntry(BaseSchema):
    student_ref: str = Field(
        ...,
        min_length=1,
        description="Student id or student code",
        examples=["HSTL2025A001"],
    )
    status: AttendanceStatus = Field(default=AttendanceStatus.PRESENT)
    room_number: Optional[str] = Field(
        default=None,
        max_length=50,
        description="Overrides the student's current room number on the record",
    )


class BulkAttendanceRequest(BaseCreateSchema):
    block: Block
    date: Date
    entries: List[RosterEntry] = Field(
        default_factory=list,
        description="Full roster for the day; an empty list clears the day",
    )
    policy: Optional[UnresolvedRosterPolicy] = Field(
        default=None,
        description="How to treat unresolved entries; defaults to the configured policy",
    )


class SkippedRosterEntry(BaseSchema):
    student_ref: str
    reason: str = Field(..., description="not_found | inactive | other_block | duplicate")


class AttendanceRecordResponse(BaseResponseSchema):
    student_id: str
    student_code: str
    student_name: str
    block: Block
    room_number: str
    date: Date
    status: AttendanceStatus
    marked_by: str


class BulkAttendanceResponse(BaseSchema):
    block: Block
    date: Date
    recorded: int = Field(..., ge=0)
    records: List[AttendanceRecordResponse] = Field(default_factory=list)
    skipped: List[SkippedRosterEntry] = Field(default_factory=list)


class RosterDayEntry(BaseSchema):
    """One active student on a block's roster with their status for the day."""

    student_id: str
    student_code: str
    student_name: str
    room_number: Optional[str] = None
    status: AttendanceStatus
    marked: bool = Field(..., description="True when a record exists for the day")
