# app/services/complaint/__init__.py
from .complaint_desk_service import ComplaintDeskService, format_complaint_code

__all__ = ["ComplaintDeskService", "format_complaint_code"]
