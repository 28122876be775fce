# app/services/attendance/__init__.py
from .attendance_batch_service import AttendanceBatchService, month_bounds

__all__ = ["AttendanceBatchService", "month_bounds"]
