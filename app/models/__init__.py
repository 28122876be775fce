# models/__init__.py
from app.models.attendance import AttendanceRecord
from app.models.base import Base, BaseModel
from app.models.complaint import Complaint
from app.models.counter import CodeCounter
from app.models.fee import Fee
from app.models.leave import LeaveApplication
from app.models.room import Room
from app.models.student import Student
from app.models.warden import Warden

__all__ = [
    "Base",
    "BaseModel",
    "AttendanceRecord",
    "CodeCounter",
    "Complaint",
    "Fee",
    "LeaveApplication",
    "Room",
    "Student",
    "Warden",
]
