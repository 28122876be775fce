# app/models/leave/leave_application.py
"""
Leave application model.

Status moves pending -> approved | rejected; both outcomes are terminal.
"""

from datetime import date as Date
from typing import Optional

from sqlalchemy import Date as SQLDate, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel, enum_column
from app.models.base.enums import Block, LeaveStatus
from app.models.base.mixins import TimestampMixin

__all__ = ["LeaveApplication"]


class LeaveApplication(BaseModel, TimestampMixin):
    __tablename__ = "leave_applications"
    __table_args__ = (
        Index("ix_leave_applications_block_status", "block", "status"),
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
    room_number: Mapped[str] = mapped_column(String(50), nullable=False, default="")

    start_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    end_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[LeaveStatus] = mapped_column(
        enum_column(LeaveStatus),
        nullable=False,
        default=LeaveStatus.PENDING,
    )
    approved_by: Mapped[Optional[str]] = mapped_column(
        String(36),
        nullable=True,
        comment="Actor who approved or rejected the request",
    )

    @property
    def is_pending(self) -> bool:
        return self.status == LeaveStatus.PENDING

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def __repr__(self) -> str:
        return f"<LeaveApplication(id={self.id}, student={self.student_code}, status={self.status})>"
