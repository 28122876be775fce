# app/repositories/complaint/__init__.py
from .complaint_repository import ComplaintRepository

__all__ = ["ComplaintRepository"]
