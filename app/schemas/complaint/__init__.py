# --- File: app/schemas/complaint/__init__.py ---
"""
Complaint schemas package.
"""

from app.schemas.complaint.complaint import (
    ComplaintCreate,
    ComplaintResponse,
    ComplaintStats,
    ComplaintStatusUpdate,
)

__all__ = [
    "ComplaintCreate",
    "ComplaintStatusUpdate",
    "ComplaintResponse",
    "ComplaintStats",
]
