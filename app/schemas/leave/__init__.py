# --- File: app/schemas/leave/__init__.py ---
"""
Leave schemas package.
"""

from app.schemas.leave.leave_application import (
    LeaveCreate,
    LeaveResponse,
    LeaveStatusUpdate,
)

__all__ = [
    "LeaveCreate",
    "LeaveStatusUpdate",
    "LeaveResponse",
]
