"""
Attendance models package.
"""

from app.models.attendance.attendance_record import AttendanceRecord

__all__ = ["AttendanceRecord"]
