# --- File: app/schemas/attendance/__init__.py ---
"""
Attendance schemas package.
"""

from app.schemas.attendance.attendance_record import (
    AttendanceRecordResponse,
    BulkAttendanceRequest,
    BulkAttendanceResponse,
    RosterDayEntry,
    RosterEntry,
    SkippedRosterEntry,
)

__all__ = [
    "RosterEntry",
    "BulkAttendanceRequest",
    "SkippedRosterEntry",
    "AttendanceRecordResponse",
    "BulkAttendanceResponse",
    "RosterDayEntry",
]
