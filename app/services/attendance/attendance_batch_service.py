# app/services/attendance/attendance_batch_service.py
"""
Bulk attendance marking for a block's daily roster.

A submission is a full replace of (block, date): existing records for the
day are deleted and the resolved roster is inserted, inside one
transaction and under one per-day lock. Readers see either the old day or
the new one.
"""
from __future__ import annotations

import calendar
import logging
import re
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config.settings import Settings, get_settings
from app.models.attendance import AttendanceRecord
from app.models.base.enums import AttendanceStatus, Block, StudentStatus, UnresolvedRosterPolicy
from app.models.student import Student
from app.repositories.attendance import AttendanceRecordRepository
from app.repositories.core import StudentRepository
from app.schemas.attendance import (
    AttendanceRecordResponse,
    BulkAttendanceResponse,
    RosterDayEntry,
    RosterEntry,
    SkippedRosterEntry,
)
from app.services.common import UnitOfWork, errors
from app.services.common.locking import attendance_key

logger = logging.getLogger(__name__)

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def month_bounds(month: str) -> Tuple[date, date]:
    """First and last day of a ``YYYY-MM`` month."""
    match = _MONTH_PATTERN.match(month)
    if match is None:
        raise errors.ValidationError(f"Month must look like YYYY-MM, got {month!r}", field="month")
    year, mon = int(match.group(1)), int(match.group(2))
    if not 1 <= mon <= 12:
        raise errors.ValidationError(f"Month {mon} is out of range", field="month")
    return date(year, mon, 1), date(year, mon, calendar.monthrange(year, mon)[1])


class AttendanceBatchService:
    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        settings: Optional[Settings] = None,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings or get_settings()

    def _get_record_repo(self, uow: UnitOfWork) -> AttendanceRecordRepository:
        return uow.get_repo(AttendanceRecordRepository)

    def _get_student_repo(self, uow: UnitOfWork) -> StudentRepository:
        return uow.get_repo(StudentRepository)

    # ------------------------------------------------------------------ #
    # Roster resolution
    # ------------------------------------------------------------------ #
    @staticmethod
    def _resolve(
        block: Block,
        roster: Sequence[RosterEntry],
        found: Sequence[Student],
    ) -> Tuple[List[Tuple[Student, RosterEntry]], List[SkippedRosterEntry]]:
        by_ref: Dict[str, Student] = {}
        for student in found:
            by_ref[student.id] = student
            by_ref[student.student_code] = student

        resolved: List[Tuple[Student, RosterEntry]] = []
        skipped: List[SkippedRosterEntry] = []
        seen: set[str] = set()

        for entry in roster:
            student = by_ref.get(entry.student_ref)
            if student is None:
                reason = "not_found"
            elif student.status != StudentStatus.ACTIVE:
                reason = "inactive"
            elif student.block != block:
                reason = "other_block"
            elif student.id in seen:
                reason = "duplicate"
            else:
                seen.add(student.id)
                resolved.append((student, entry))
                continue
            skipped.append(SkippedRosterEntry(student_ref=entry.student_ref, reason=reason))

        return resolved, skipped

    # ------------------------------------------------------------------ #
    # Marking
    # ------------------------------------------------------------------ #
    def mark_bulk_attendance(
        self,
        block: Block,
        day: date,
        roster: Sequence[RosterEntry],
        marked_by: str,
        policy: Optional[UnresolvedRosterPolicy] = None,
    ) -> BulkAttendanceResponse:
        """
        Replace the attendance of block on day with roster.

        Unresolved entries (unknown, inactive, other block or repeated
        students) are skipped and reported, or abort the whole batch with
        NotFoundError under the fail_fast policy.
        """
        policy = UnresolvedRosterPolicy(policy or self._settings.ATTENDANCE_UNRESOLVED_POLICY)

        with UnitOfWork(self._session_factory) as uow:
            uow.lock(attendance_key(block, day))
            records = self._get_record_repo(uow)

            found = self._get_student_repo(uow).get_many_by_refs(
                [entry.student_ref for entry in roster]
            )
            resolved, skipped = self._resolve(block, roster, found)

            if skipped and policy == UnresolvedRosterPolicy.FAIL_FAST:
                refs = ", ".join(item.student_ref for item in skipped)
                raise errors.NotFoundError(
                    "Student",
                    refs,
                    details={"unresolved": [item.model_dump() for item in skipped]},
                )

            removed = records.delete_for_day(block, day)
            try:
                created = records.bulk_create(
                    [
                        {
                            "student_id": student.id,
                            "student_code": student.student_code,
                            "student_name": student.name,
                            "block": block,
                            "room_number": entry.room_number or student.room_number or "",
                            "date": day,
                            "status": entry.status,
                            "marked_by": marked_by,
                        }
                        for student, entry in resolved
                    ]
                )
            except IntegrityError as exc:
                raise errors.ConflictError(
                    f"Attendance for block {Block(block).value} on {day} changed concurrently",
                ) from exc

            result = BulkAttendanceResponse(
                block=block,
                date=day,
                recorded=len(created),
                records=[AttendanceRecordResponse.model_validate(r) for r in created],
                skipped=skipped,
            )

        if skipped:
            logger.warning(
                "Skipped %s unresolved roster entr%s for block %s on %s",
                len(skipped), "y" if len(skipped) == 1 else "ies", Block(block).value, day,
            )
        logger.info(
            "Attendance for block %s on %s replaced: %s removed, %s recorded by %s",
            Block(block).value, day, removed, len(created), marked_by,
        )
        return result

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def get_attendance(self, block: Block, day: date) -> List[AttendanceRecord]:
        with UnitOfWork(self._session_factory) as uow:
            return self._get_record_repo(uow).list_for_day(block, day)

    def get_student_attendance(
        self,
        student_ref: str,
        month: Optional[str] = None,
    ) -> List[AttendanceRecord]:
        start, end = month_bounds(month) if month else (None, None)
        with UnitOfWork(self._session_factory) as uow:
            student = self._get_student_repo(uow).get_by_ref(student_ref)
            if student is None:
                raise errors.NotFoundError("Student", student_ref)
            return self._get_record_repo(uow).list_for_student(student.id, start=start, end=end)

    def roster_for_day(self, block: Block, day: date) -> List[RosterDayEntry]:
        """Active students of block with their status for day (present if unmarked)."""
        with UnitOfWork(self._session_factory) as uow:
            students = self._get_student_repo(uow).list_students(
                block=block, status=StudentStatus.ACTIVE
            )
            marked = {r.student_id: r for r in self._get_record_repo(uow).list_for_day(block, day)}

        roster = []
        for student in students:
            record = marked.get(student.id)
            roster.append(
                RosterDayEntry(
                    student_id=student.id,
                    student_code=student.student_code,
                    student_name=student.name,
                    room_number=student.room_number,
                    status=record.status if record else AttendanceStatus.PRESENT,
                    marked=record is not None,
                )
            )
        roster.sort(key=lambda item: (item.room_number or "", item.student_code))
        return roster
