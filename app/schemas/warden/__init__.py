# --- File: app/schemas/warden/__init__.py ---
"""
Warden schemas package.
"""

from app.schemas.warden.warden import WardenAssign, WardenResponse

__all__ = ["WardenAssign", "WardenResponse"]
