# app/models/complaint/complaint.py
"""
Complaint model.

Status moves new -> in_progress -> resolved, and new may jump straight to
resolved. Resolved is terminal. Student details are snapshotted at filing.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel, enum_column
from app.models.base.enums import Block, ComplaintCategory, ComplaintStatus
from app.models.base.mixins import TimestampMixin

__all__ = ["Complaint"]


class Complaint(BaseModel, TimestampMixin):
    __tablename__ = "complaints"
    __table_args__ = (
        Index("ix_complaints_block_status", "block", "status"),
    )

    complaint_code: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        unique=True,
        index=True,
        comment="Sequential code, e.g. CMPL001",
    )

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_code: Mapped[str] = mapped_column(String(32), nullable=False)
    student_name: Mapped[str] = mapped_column(String(255), nullable=False)
    student_mobile: Mapped[str] = mapped_column(String(20), nullable=False)
    block: Mapped[Block] = mapped_column(enum_column(Block, length=2), nullable=False)
    room_number: Mapped[str] = mapped_column(String(50), nullable=False, default="")

    category: Mapped[ComplaintCategory] = mapped_column(
        enum_column(ComplaintCategory),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[ComplaintStatus] = mapped_column(
        enum_column(ComplaintStatus),
        nullable=False,
        default=ComplaintStatus.NEW,
    )
    admin_note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    handled_by: Mapped[Optional[str]] = mapped_column(
        String(36),
        nullable=True,
        comment="Actor who last changed the status",
    )

    @property
    def is_resolved(self) -> bool:
        return self.status == ComplaintStatus.RESOLVED

    def __repr__(self) -> str:
        return f"<Complaint(code={self.complaint_code}, status={self.status})>"
