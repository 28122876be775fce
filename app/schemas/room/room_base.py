# --- File: app/schemas/room/room_base.py ---
"""
Room request schemas.

The occupancy counter is deliberately absent from create and update
payloads; it only moves through admissions, transfers, removals and the
explicit administrative override.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from app.models.base.enums import Block
from app.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "RoomCreate",
    "RoomUpdate",
    "OccupancyAdjust",
    "OccupancyOverride",
]


class RoomCreate(BaseCreateSchema):
    """Create a room inside a block."""

    block: Block = Field(..., description="Block the room belongs to")
    room_number: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Room number, unique within its block",
        examples=["101", "G-04"],
    )
    floor: int = Field(default=0, ge=0, le=50, description="Floor (0 for ground)")
    capacity: int = Field(..., ge=1, le=20, description="Number of beds")


class RoomUpdate(BaseUpdateSchema):
    """Partial room update. Unset fields are left untouched."""

    block: Optional[Block] = Field(default=None, description="New block")
    room_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    floor: Optional[int] = Field(default=None, ge=0, le=50)
    capacity: Optional[int] = Field(default=None, ge=1, le=20)


class OccupancyAdjust(BaseSchema):
    """Move the counter by exactly one bed."""

    delta: int = Field(..., description="+1 to take a bed, -1 to release one")


class OccupancyOverride(BaseSchema):
    """Administrative rewrite of the occupancy counter."""

    occupied: int = Field(..., description="New occupancy value")
