# app/repositories/attendance/__init__.py
from .attendance_record_repository import AttendanceRecordRepository

__all__ = ["AttendanceRecordRepository"]
