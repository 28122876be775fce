# --- File: app/schemas/student/__init__.py ---
"""
Student schemas package.
"""

from app.schemas.student.student_base import (
    RoomTransferRequest,
    StudentAdmit,
    StudentProfile,
    StudentUpdate,
)
from app.schemas.student.student_response import StudentResponse

__all__ = [
    "StudentProfile",
    "StudentAdmit",
    "StudentUpdate",
    "RoomTransferRequest",
    "StudentResponse",
]
