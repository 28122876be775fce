"""
Room models package.
"""

from app.models.room.room import Room

__all__ = ["Room"]
