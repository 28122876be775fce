# app/models/student/student.py
"""
Student core model.

Represents a resident admitted to a block. A student holds a room/bed
assignment only while active; removal clears it and is terminal.
"""

from datetime import date as Date
from typing import Optional

from sqlalchemy import Date as SQLDate, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel, enum_column
from app.models.base.enums import Block, StudentStatus
from app.models.base.mixins import TimestampMixin

__all__ = ["Student"]


class Student(BaseModel, TimestampMixin):
    """
    Core student model.

    Lifecycle:
        1. Admitted (active), optionally with a room and bed
        2. Transferred between rooms while active
        3. Removed (terminal); re-admission creates a new record
    """

    __tablename__ = "students"
    __table_args__ = (
        Index("ix_students_block_status", "block", "status"),
        # One bed per active occupant within a room.
        Index(
            "uq_students_active_room_bed",
            "room_id",
            "bed_number",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )

    student_code: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        unique=True,
        index=True,
        comment="Block-scoped sequential code, e.g. HSTL2025A001",
    )

    # Profile
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    mobile: Mapped[str] = mapped_column(String(20), nullable=False)
    parent_mobile: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)

    block: Mapped[Block] = mapped_column(enum_column(Block, length=2), nullable=False)
    admission_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    status: Mapped[StudentStatus] = mapped_column(
        enum_column(StudentStatus),
        nullable=False,
        default=StudentStatus.ACTIVE,
    )

    # Accommodation
    room_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
        comment="Current room assignment (null if not assigned)",
    )
    room_number: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        comment="Denormalized room number for display",
    )
    bed_number: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        comment="1-based bed slot within the room",
    )

    @property
    def is_active(self) -> bool:
        return self.status == StudentStatus.ACTIVE

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, code={self.student_code}, status={self.status})>"
