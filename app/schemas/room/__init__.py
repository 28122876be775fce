# --- File: app/schemas/room/__init__.py ---
"""
Room schemas package.
"""

from app.schemas.room.room_base import (
    OccupancyAdjust,
    OccupancyOverride,
    RoomCreate,
    RoomUpdate,
)
from app.schemas.room.room_response import (
    OccupancyCorrectionResponse,
    RoomResponse,
)

__all__ = [
    "RoomCreate",
    "RoomUpdate",
    "OccupancyAdjust",
    "OccupancyOverride",
    "RoomResponse",
    "OccupancyCorrectionResponse",
]
