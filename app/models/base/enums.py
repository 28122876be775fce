"""
Database enums mirroring schema enums.

Provides SQLAlchemy-compatible enum definitions that match
the Pydantic schema enums for consistency.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    ADMIN = "admin"
    WARDEN = "warden"
    STUDENT = "student"


class Block(str, enum.Enum):
    """Administrative subdivision of the hostel."""
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class StudentStatus(str, enum.Enum):
    """Student lifecycle status."""
    ACTIVE = "active"
    REMOVED = "removed"


class FeeStatus(str, enum.Enum):
    """Fee ledger status."""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class AttendanceStatus(str, enum.Enum):
    """Attendance record status."""
    PRESENT = "present"
    ABSENT = "absent"


class LeaveStatus(str, enum.Enum):
    """Leave application status."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UnresolvedRosterPolicy(str, enum.Enum):
    """What bulk attendance does with roster entries it cannot resolve."""
    SKIP = "skip"
    FAIL_FAST = "fail_fast"


class ComplaintCategory(str, enum.Enum):
    """What a complaint is about."""
    MESS = "mess"
    ROOM = "room"
    CLEANLINESS = "cleanliness"
    SAFETY = "safety"
    OTHER = "other"


class ComplaintStatus(str, enum.Enum):
    """Complaint handling status."""
    NEW = "new"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
