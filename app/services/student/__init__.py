# app/services/student/__init__.py
"""
Student services: admission, transfer, removal and student codes.
"""
from .student_code import StudentCode, format_student_code, is_student_code, parse_student_code
from .student_lifecycle_service import StudentLifecycleService

__all__ = [
    "StudentLifecycleService",
    "StudentCode",
    "format_student_code",
    "parse_student_code",
    "is_student_code",
]
