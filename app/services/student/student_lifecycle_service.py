# app/services/student/student_lifecycle_service.py
from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config.settings import Settings, get_settings
from app.models.base.enums import Block, StudentStatus
from app.models.counter import CodeCounter
from app.models.room import Room
from app.models.student import Student
from app.repositories.core import CodeCounterRepository, RoomRepository, StudentRepository
from app.schemas.student import StudentAdmit, StudentUpdate
from app.services.common import UnitOfWork, errors
from app.services.common.locking import room_key
from app.services.room.bed_assignment import resolve_bed
from app.services.room.room_ledger_service import apply_occupancy_delta
from app.services.student.student_code import format_student_code

logger = logging.getLogger(__name__)


class StudentLifecycleService:
    """
    Admission, transfer and removal of students.

    Every operation that touches a room runs as one transaction holding the
    affected room locks, so the student row, the bed and the room counters
    are committed together or not at all.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        settings: Optional[Settings] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings or get_settings()
        self._today = today

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _get_student_repo(self, uow: UnitOfWork) -> StudentRepository:
        return uow.get_repo(StudentRepository)

    def _get_room_repo(self, uow: UnitOfWork) -> RoomRepository:
        return uow.get_repo(RoomRepository)

    def _require_student(self, uow: UnitOfWork, student_ref: str) -> Student:
        student = self._get_student_repo(uow).get_by_ref(student_ref)
        if student is None:
            raise errors.NotFoundError("Student", student_ref)
        return student

    def _require_room_in_block(self, uow: UnitOfWork, room_id: str, block: Block) -> Room:
        room = self._get_room_repo(uow).get_for_update(room_id)
        if room is None:
            raise errors.NotFoundError("Room", room_id)
        if room.block != block:
            raise errors.InvalidStateError(
                f"Room {room.block.value}-{room.room_number} is not in block {Block(block).value}",
                details={"room_block": room.block.value, "student_block": Block(block).value},
            )
        return room

    @staticmethod
    def _pick_bed(room: Room, used_beds: set[int], preferred: Optional[int]) -> int:
        try:
            return resolve_bed(room.capacity, used_beds, preferred)
        except errors.RoomFullError:
            raise errors.RoomFullError(room.id, room.capacity) from None

    def _next_code(self, uow: UnitOfWork, block: Block) -> str:
        year = self._today().year
        key = CodeCounter.student_key(year, Block(block).value)
        seq = uow.get_repo(CodeCounterRepository).next_value(key)
        return format_student_code(year, block, seq, prefix=self._settings.STUDENT_CODE_PREFIX)

    # ------------------------------------------------------------------ #
    # Admission
    # ------------------------------------------------------------------ #
    def admit_student(self, data: StudentAdmit) -> Student:
        """
        Admit a student, optionally allocating a room and bed.

        The student code is minted after every allocation check has passed,
        inside the same transaction, so a failed admission consumes no code.
        """
        with UnitOfWork(self._session_factory) as uow:
            if data.room_id:
                uow.lock(room_key(data.room_id))

            students = self._get_student_repo(uow)
            if students.get_by_email(data.email):
                raise errors.AlreadyExistsError("Student", "email", data.email)

            room: Optional[Room] = None
            bed: Optional[int] = None
            if data.room_id:
                room = self._require_room_in_block(uow, data.room_id, data.block)
                bed = self._pick_bed(room, students.used_beds(room.id), data.bed_number)
                room = apply_occupancy_delta(self._get_room_repo(uow), room.id, 1)

            code = self._next_code(uow, data.block)
            try:
                student = students.create(
                    {
                        "student_code": code,
                        **data.profile.model_dump(),
                        "block": data.block,
                        "admission_date": data.admission_date,
                        "status": StudentStatus.ACTIVE,
                        "room_id": room.id if room else None,
                        "room_number": room.room_number if room else None,
                        "bed_number": bed,
                    }
                )
            except IntegrityError as exc:
                raise errors.ConflictError(
                    "Student email or bed was claimed concurrently",
                    details={"room_id": data.room_id, "bed_number": bed},
                ) from exc

        logger.info(
            "Admitted student %s to block %s (room=%s, bed=%s)",
            student.student_code, student.block.value, student.room_number, student.bed_number,
        )
        return student

    # ------------------------------------------------------------------ #
    # Profile
    # ------------------------------------------------------------------ #
    def update_student(self, student_ref: str, data: StudentUpdate) -> Student:
        patch = data.model_dump(exclude_unset=True, exclude_none=True)

        with UnitOfWork(self._session_factory) as uow:
            students = self._get_student_repo(uow)
            student = self._require_student(uow, student_ref)

            new_email = patch.get("email")
            if new_email and new_email != student.email:
                clash = students.get_by_email(new_email)
                if clash is not None and clash.id != student.id:
                    raise errors.AlreadyExistsError("Student", "email", new_email)

            try:
                student = students.update(student, patch)
            except IntegrityError as exc:
                raise errors.ConflictError(
                    "Student email was claimed concurrently", conflicting_field="email"
                ) from exc

        logger.info("Updated student %s: %s", student.student_code, sorted(patch))
        return student

    # ------------------------------------------------------------------ #
    # Room changes
    # ------------------------------------------------------------------ #
    def transfer_room(
        self,
        student_ref: str,
        new_room_id: str,
        bed_preference: Optional[int] = None,
    ) -> Student:
        """
        Move an active student to another room (or another bed in the same one).

        The destination counter is taken before the source is released, and
        both happen in the same transaction.
        """
        with UnitOfWork(self._session_factory) as uow:
            students = self._get_student_repo(uow)
            rooms = self._get_room_repo(uow)
            student = self._require_student(uow, student_ref)

            source_room_id = student.room_id
            keys = [room_key(new_room_id)]
            if source_room_id:
                keys.append(room_key(source_room_id))
            uow.lock(*keys)

            uow.session.refresh(student)
            if student.room_id != source_room_id:
                raise errors.ConflictError(
                    f"Student {student.student_code} was moved concurrently",
                    conflicting_field="room_id",
                )
            if not student.is_active:
                raise errors.InvalidStateError(
                    f"Student {student.student_code} has been removed",
                    current_state=student.status.value,
                )

            new_room = self._require_room_in_block(uow, new_room_id, student.block)
            used = students.used_beds(new_room.id, exclude_student_id=student.id)

            if source_room_id == new_room.id:
                bed = student.bed_number
                if (
                    bed_preference is not None
                    and bed_preference != bed
                    and 1 <= bed_preference <= new_room.capacity
                    and bed_preference not in used
                ):
                    bed = bed_preference
                elif bed is None:
                    bed = self._pick_bed(new_room, used, bed_preference)
            else:
                bed = self._pick_bed(new_room, used, bed_preference)
                apply_occupancy_delta(rooms, new_room.id, 1)
                if source_room_id:
                    apply_occupancy_delta(rooms, source_room_id, -1)

            try:
                student = students.update(
                    student,
                    {
                        "room_id": new_room.id,
                        "room_number": new_room.room_number,
                        "bed_number": bed,
                    },
                )
            except IntegrityError as exc:
                raise errors.ConflictError(
                    f"Bed {bed} in room {new_room.room_number} was claimed concurrently",
                    conflicting_field="bed_number",
                ) from exc

        logger.info(
            "Transferred student %s from room %s to room %s (bed %s)",
            student.student_code, source_room_id, student.room_id, student.bed_number,
        )
        return student

    def remove_student(self, student_ref: str) -> Student:
        """
        Remove a student and release their bed.

        Removing an already-removed student changes nothing and returns the
        record as it is.
        """
        with UnitOfWork(self._session_factory) as uow:
            students = self._get_student_repo(uow)
            student = self._require_student(uow, student_ref)

            if not student.is_active:
                logger.debug("Student %s already removed", student.student_code)
                return student

            room_id = student.room_id
            if room_id:
                uow.lock(room_key(room_id))
                uow.session.refresh(student)
                if not student.is_active:
                    return student
                room_id = student.room_id

            student = students.update(
                student,
                {
                    "status": StudentStatus.REMOVED,
                    "room_id": None,
                    "room_number": None,
                    "bed_number": None,
                },
            )
            if room_id:
                apply_occupancy_delta(self._get_room_repo(uow), room_id, -1)

        logger.info("Removed student %s (released room %s)", student.student_code, room_id)
        return student

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def get_student(self, student_ref: str) -> Student:
        """Look a student up by primary key or student code."""
        with UnitOfWork(self._session_factory) as uow:
            return self._require_student(uow, student_ref)

    def find_by_code(self, student_code: str) -> Optional[Student]:
        with UnitOfWork(self._session_factory) as uow:
            return self._get_student_repo(uow).get_by_code(student_code)

    def list_students(
        self,
        block: Optional[Block] = None,
        status: Optional[StudentStatus] = None,
    ) -> List[Student]:
        with UnitOfWork(self._session_factory) as uow:
            return self._get_student_repo(uow).list_students(block=block, status=status)
