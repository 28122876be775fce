# app/services/warden/__init__.py
from .warden_service import WardenService

__all__ = ["WardenService"]
