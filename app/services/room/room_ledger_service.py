# app/services/room/room_ledger_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.base.enums import Block
from app.models.room import Room
from app.repositories.core import RoomRepository, StudentRepository
from app.schemas.room import RoomCreate, RoomUpdate
from app.services.common import UnitOfWork, errors
from app.services.common.locking import room_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OccupancyCorrection:
    room_id: str
    block: Block
    room_number: str
    recorded: int
    actual: int


def apply_occupancy_delta(rooms: RoomRepository, room_id: str, delta: int) -> Room:
    """
    Move a room's counter by one inside the caller's transaction.

    Raises:
        ValidationError: If delta is not +1 or -1
        RoomFullError: If +1 would exceed capacity
        InvalidStateError: If -1 would go below zero
    """
    if delta not in (1, -1):
        raise errors.ValidationError("Occupancy can only move by +1 or -1", field="delta")

    if delta == 1:
        if not rooms.try_increment_occupied(room_id):
            room = rooms.reload(room_id)
            if room is None:
                raise errors.NotFoundError("Room", room_id)
            raise errors.RoomFullError(room_id, room.capacity)
    elif not rooms.try_decrement_occupied(room_id):
        room = rooms.reload(room_id)
        if room is None:
            raise errors.NotFoundError("Room", room_id)
        raise errors.InvalidStateError(
            f"Room '{room_id}' has no occupant to release",
            current_state=f"occupied={room.occupied}",
        )

    room = rooms.reload(room_id)
    if room is None:
        raise errors.NotFoundError("Room", room_id)
    return room


class RoomLedgerService:
    """
    Room inventory and the per-room occupancy counter.

    The counter is denormalized: it must equal the number of active students
    assigned to the room. Normal traffic keeps it in step through
    apply_occupancy_delta; set_occupied_directly and reconcile_occupancy
    exist for administrative repair.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_room_repo(self, uow: UnitOfWork) -> RoomRepository:
        return uow.get_repo(RoomRepository)

    # ------------------------------------------------------------------ #
    # Inventory
    # ------------------------------------------------------------------ #
    def create_room(self, data: RoomCreate) -> Room:
        with UnitOfWork(self._session_factory) as uow:
            rooms = self._get_room_repo(uow)
            if rooms.find_by_block_and_number(data.block, data.room_number):
                raise errors.AlreadyExistsError(
                    "Room", "room_number", f"{data.block.value}-{data.room_number}"
                )
            try:
                room = rooms.create(
                    {
                        "block": data.block,
                        "room_number": data.room_number,
                        "floor": data.floor,
                        "capacity": data.capacity,
                        "occupied": 0,
                    }
                )
            except IntegrityError as exc:
                raise errors.ConflictError(
                    f"Room {data.block.value}-{data.room_number} already exists",
                    conflicting_field="room_number",
                ) from exc

        logger.info("Created room %s-%s (capacity %s)", room.block.value, room.room_number, room.capacity)
        return room

    def get_room(self, room_id: str) -> Room:
        with UnitOfWork(self._session_factory) as uow:
            room = self._get_room_repo(uow).get(room_id)
            if room is None:
                raise errors.NotFoundError("Room", room_id)
            return room

    def list_rooms(self, block: Optional[Block] = None) -> List[Room]:
        with UnitOfWork(self._session_factory) as uow:
            return self._get_room_repo(uow).list_rooms(block=block)

    def list_available_rooms(self, block: Optional[Block] = None) -> List[Room]:
        with UnitOfWork(self._session_factory) as uow:
            return self._get_room_repo(uow).list_rooms(block=block, only_available=True)

    def update_room(self, room_id: str, data: RoomUpdate) -> Room:
        patch = data.model_dump(exclude_unset=True, exclude_none=True)

        with UnitOfWork(self._session_factory) as uow:
            uow.lock(room_key(room_id))
            rooms = self._get_room_repo(uow)
            room = rooms.get_for_update(room_id)
            if room is None:
                raise errors.NotFoundError("Room", room_id)

            new_block = patch.get("block", room.block)
            new_number = patch.get("room_number", room.room_number)
            if (new_block, new_number) != (room.block, room.room_number):
                clash = rooms.find_by_block_and_number(new_block, new_number)
                if clash is not None and clash.id != room.id:
                    raise errors.AlreadyExistsError(
                        "Room", "room_number", f"{Block(new_block).value}-{new_number}"
                    )

            if new_block != room.block and room.occupied > 0:
                raise errors.InvalidStateError(
                    "Cannot move an occupied room to another block",
                    current_state=f"occupied={room.occupied}",
                )

            if "capacity" in patch and patch["capacity"] < room.occupied:
                raise errors.InvalidStateError(
                    f"Capacity {patch['capacity']} is below current occupancy {room.occupied}",
                    current_state=f"occupied={room.occupied}",
                )

            students = uow.get_repo(StudentRepository)
            if "capacity" in patch:
                highest_bed = max(students.used_beds(room_id), default=0)
                if highest_bed > patch["capacity"]:
                    raise errors.InvalidStateError(
                        f"Bed {highest_bed} is occupied; capacity cannot drop to {patch['capacity']}",
                        current_state=f"highest_bed={highest_bed}",
                    )

            renamed = new_number != room.room_number
            room = rooms.update(room, patch)
            if renamed:
                moved = students.set_room_number(room_id, new_number)
                logger.info("Room %s renamed to %s for %s occupants", room_id, new_number, moved)

        logger.info("Updated room %s: %s", room_id, sorted(patch))
        return room

    def delete_room(self, room_id: str) -> None:
        with UnitOfWork(self._session_factory) as uow:
            uow.lock(room_key(room_id))
            rooms = self._get_room_repo(uow)
            room = rooms.get_for_update(room_id)
            if room is None:
                raise errors.NotFoundError("Room", room_id)
            if room.occupied > 0 or rooms.count_active_occupants(room_id) > 0:
                raise errors.ConflictError(
                    f"Room {room.block.value}-{room.room_number} still has occupants",
                    details={"occupied": room.occupied},
                )
            try:
                rooms.delete(room)
            except IntegrityError as exc:
                raise errors.ConflictError(
                    f"Room {room.block.value}-{room.room_number} is still referenced",
                ) from exc

        logger.info("Deleted room %s", room_id)

    # ------------------------------------------------------------------ #
    # Occupancy counter
    # ------------------------------------------------------------------ #
    def increment_occupied(self, room_id: str, delta: int) -> Room:
        with UnitOfWork(self._session_factory) as uow:
            uow.lock(room_key(room_id))
            room = apply_occupancy_delta(self._get_room_repo(uow), room_id, delta)
        return room

    def set_occupied_directly(self, room_id: str, value: int) -> Room:
        """Administrative override of the counter."""
        with UnitOfWork(self._session_factory) as uow:
            uow.lock(room_key(room_id))
            rooms = self._get_room_repo(uow)
            room = rooms.get_for_update(room_id)
            if room is None:
                raise errors.NotFoundError("Room", room_id)
            if value < 0 or value > room.capacity:
                raise errors.InvalidStateError(
                    f"Occupancy {value} is outside 0..{room.capacity}",
                    current_state=f"occupied={room.occupied}",
                )
            if not rooms.set_occupied(room_id, value):
                raise errors.InvalidStateError(f"Occupancy {value} exceeds capacity")
            previous = room.occupied
            room = rooms.reload(room_id)

        logger.warning("Occupancy of room %s overridden: %s -> %s", room_id, previous, value)
        return room

    def reconcile_occupancy(self) -> List[OccupancyCorrection]:
        """
        Rewrite every counter that disagrees with the active occupant count.

        Returns the corrections made; an empty list means no drift.
        """
        corrections: List[OccupancyCorrection] = []
        with UnitOfWork(self._session_factory) as uow:
            rooms = self._get_room_repo(uow)
            actual_counts = rooms.active_occupant_counts()
            for room in rooms.list_rooms():
                actual = actual_counts.get(room.id, 0)
                recorded = room.occupied
                if recorded == actual:
                    continue
                if actual > room.capacity:
                    logger.error(
                        "Room %s holds %s active students but has capacity %s",
                        room.id, actual, room.capacity,
                    )
                    continue
                rooms.set_occupied(room.id, actual)
                corrections.append(
                    OccupancyCorrection(
                        room_id=room.id,
                        block=room.block,
                        room_number=room.room_number,
                        recorded=recorded,
                        actual=actual,
                    )
                )
                logger.warning(
                    "Occupancy drift on room %s-%s: recorded %s, actual %s",
                    room.block.value, room.room_number, recorded, actual,
                )

        return corrections
