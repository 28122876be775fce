# app/models/attendance/attendance_record.py
"""
Daily attendance record.

At most one record exists per student per day. A block's records for a day
are replaced as a whole by the batch recorder rather than edited one by one.
"""

from datetime import date as Date

from sqlalchemy import Date as SQLDate, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel, enum_column
from app.models.base.enums import AttendanceStatus, Block
from app.models.base.mixins import TimestampMixin

__all__ = ["AttendanceRecord"]


class AttendanceRecord(BaseModel, TimestampMixin):
    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("student_id", "date", name="uq_attendance_student_date"),
        Index("ix_attendance_block_date", "block", "date"),
    )

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_code: Mapped[str] = mapped_column(String(32), nullable=False)
    student_name: Mapped[str] = mapped_column(String(255), nullable=False)
    block: Mapped[Block] = mapped_column(enum_column(Block, length=2), nullable=False)
    room_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default="",
        comment="Room number snapshot at marking time",
    )
    date: Mapped[Date] = mapped_column(SQLDate, nullable=False, index=True)
    status: Mapped[AttendanceStatus] = mapped_column(
        enum_column(AttendanceStatus),
        nullable=False,
        default=AttendanceStatus.PRESENT,
    )
    marked_by: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        comment="Actor who submitted the roster",
    )

    def __repr__(self) -> str:
        return (
            f"<AttendanceRecord(student={self.student_code}, date={self.date}, "
            f"status={self.status})>"
        )
