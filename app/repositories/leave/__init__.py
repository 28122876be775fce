# app/repositories/leave/__init__.py
from .leave_application_repository import LeaveApplicationRepository

__all__ = ["LeaveApplicationRepository"]
