# app/repositories/core/room_repository.py
from typing import Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from app.models.base.enums import Block, StudentStatus
from app.models.room import Room
from app.models.student import Student
from app.repositories.base import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """
    Room persistence.

    The occupancy counter is only moved by single conditional UPDATE
    statements; the database evaluates the guard and the write together so
    concurrent admissions can never push it past capacity.
    """

    def __init__(self, session: Session):
        super().__init__(session, Room)

    def get_for_update(self, room_id: str) -> Optional[Room]:
        """Load a room with a row lock where the backend supports one."""
        stmt = self._base_select().where(Room.id == room_id).with_for_update()
        return self.session.execute(stmt).scalar_one_or_none()

    def reload(self, room_id: str) -> Optional[Room]:
        return self.session.get(Room, room_id, populate_existing=True)

    def find_by_block_and_number(self, block: Block, room_number: str) -> Optional[Room]:
        stmt = self._base_select().where(
            Room.block == block,
            Room.room_number == room_number,
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list_rooms(
        self,
        *,
        block: Optional[Block] = None,
        only_available: bool = False,
    ) -> List[Room]:
        stmt = self._base_select()
        if block is not None:
            stmt = stmt.where(Room.block == block)
        if only_available:
            stmt = stmt.where(Room.occupied < Room.capacity)
        stmt = stmt.order_by(Room.block.asc(), Room.floor.asc(), Room.room_number.asc())
        return list(self.session.execute(stmt).scalars().all())

    # ------------------------------------------------------------------ #
    # Occupancy counter
    # ------------------------------------------------------------------ #
    def try_increment_occupied(self, room_id: str) -> bool:
        """Take one bed. False when the room is already full (or missing)."""
        stmt = (
            update(Room)
            .where(Room.id == room_id, Room.occupied < Room.capacity)
            .values(occupied=Room.occupied + 1)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount == 1

    def try_decrement_occupied(self, room_id: str) -> bool:
        """Release one bed. False when the counter is already zero."""
        stmt = (
            update(Room)
            .where(Room.id == room_id, Room.occupied > 0)
            .values(occupied=Room.occupied - 1)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount == 1

    def set_occupied(self, room_id: str, value: int) -> bool:
        stmt = (
            update(Room)
            .where(Room.id == room_id, Room.capacity >= value)
            .values(occupied=value)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount == 1

    def active_occupant_counts(self) -> Dict[str, int]:
        """Number of active students per room, keyed by room id."""
        stmt = (
            select(Student.room_id, func.count(Student.id))
            .where(
                Student.status == StudentStatus.ACTIVE,
                Student.room_id.is_not(None),
            )
            .group_by(Student.room_id)
        )
        return {room_id: count for room_id, count in self.session.execute(stmt).all()}

    def count_active_occupants(self, room_id: str) -> int:
        stmt = select(func.count(Student.id)).where(
            Student.room_id == room_id,
            Student.status == StudentStatus.ACTIVE,
        )
        return self.session.execute(stmt).scalar_one()
