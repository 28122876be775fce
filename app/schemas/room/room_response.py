# --- File: app/schemas/room/room_response.py ---
"""
Room response schemas.
"""

from __future__ import annotations

from pydantic import Field, computed_field

from app.models.base.enums import Block
from app.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = [
    "RoomResponse",
    "OccupancyCorrectionResponse",
]


class RoomResponse(BaseResponseSchema):
    block: Block
    room_number: str
    floor: int
    capacity: int
    occupied: int = Field(..., description="Active students assigned to the room")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def available_beds(self) -> int:
        return self.capacity - self.occupied

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_full(self) -> bool:
        return self.occupied >= self.capacity


class OccupancyCorrectionResponse(BaseSchema):
    """One counter rewritten by the reconciliation pass."""

    room_id: str
    block: Block
    room_number: str
    recorded: int = Field(..., description="Counter value before the fix")
    actual: int = Field(..., description="Active occupants found")
