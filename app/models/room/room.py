# app/models/room/room.py
"""
Room model.

A room owns its denormalized occupancy counter. The counter mirrors the
number of active students referencing the room and is only changed through
guarded UPDATE statements issued by the room repository.
"""

from sqlalchemy import CheckConstraint, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel, enum_column
from app.models.base.enums import Block
from app.models.base.mixins import TimestampMixin

__all__ = ["Room"]


class Room(BaseModel, TimestampMixin):
    """
    Physical room within a block.

    Invariants:
        - (block, room_number) is unique
        - 0 <= occupied <= capacity
    """

    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("block", "room_number", name="uq_rooms_block_room_number"),
        CheckConstraint("floor >= 0", name="ck_rooms_floor_non_negative"),
        CheckConstraint("capacity >= 1", name="ck_rooms_capacity_positive"),
        CheckConstraint(
            "occupied >= 0 AND occupied <= capacity",
            name="ck_rooms_occupied_within_capacity",
        ),
    )

    room_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
    )
    block: Mapped[Block] = mapped_column(
        enum_column(Block, length=2),
        nullable=False,
        index=True,
    )
    floor: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )
    capacity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    occupied: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Number of active students assigned to this room",
    )

    @property
    def available_beds(self) -> int:
        return self.capacity - self.occupied

    @property
    def is_full(self) -> bool:
        return self.occupied >= self.capacity

    def __repr__(self) -> str:
        return (
            f"<Room(id={self.id}, block={self.block}, number={self.room_number}, "
            f"occupied={self.occupied}/{self.capacity})>"
        )
