"""
Base models package.

Provides the declarative base, mixins and enums for all database models.
"""

from app.models.base.base_model import Base, BaseModel, enum_column
from app.models.base.enums import (
    AttendanceStatus,
    Block,
    FeeStatus,
    LeaveStatus,
    StudentStatus,
    UnresolvedRosterPolicy,
    UserRole,
)
from app.models.base.mixins import TimestampMixin

__all__ = [
    "Base",
    "BaseModel",
    "enum_column",
    "TimestampMixin",
    "AttendanceStatus",
    "Block",
    "FeeStatus",
    "LeaveStatus",
    "StudentStatus",
    "UnresolvedRosterPolicy",
    "UserRole",
]
