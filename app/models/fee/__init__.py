"""
Fee models package.
"""

from app.models.fee.fee import Fee

__all__ = ["Fee"]
