# app/repositories/attendance/attendance_record_repository.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.attendance import AttendanceRecord
from app.models.base.enums import Block
from app.repositories.base import BaseRepository


class AttendanceRecordRepository(BaseRepository[AttendanceRecord]):
    def __init__(self, session: Session):
        super().__init__(session, AttendanceRecord)

    def delete_for_day(self, block: Block, day: date) -> int:
        return self.bulk_delete({"block": block, "date": day})

    def list_for_day(self, block: Block, day: date) -> List[AttendanceRecord]:
        stmt = (
            self._base_select()
            .where(AttendanceRecord.block == block, AttendanceRecord.date == day)
            .order_by(AttendanceRecord.room_number.asc(), AttendanceRecord.student_code.asc())
        )
        return list(self.session.execute(stmt).scalars().all())

    def list_for_student(
        self,
        student_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[AttendanceRecord]:
        stmt = self._base_select().where(AttendanceRecord.student_id == student_id)
        if start is not None:
            stmt = stmt.where(AttendanceRecord.date >= start)
        if end is not None:
            stmt = stmt.where(AttendanceRecord.date <= end)
        stmt = stmt.order_by(AttendanceRecord.date.asc())
        return list(self.session.execute(stmt).scalars().all())
