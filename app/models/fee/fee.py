# app/models/fee/fee.py
"""
Fee ledger entry.

Tracks the total due and the amount paid for a student. Status is derived:
a fee is ``paid`` exactly when paid_amount >= total_amount.
"""

from datetime import date as Date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date as SQLDate, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel, enum_column
from app.models.base.enums import Block, FeeStatus
from app.models.base.mixins import TimestampMixin

__all__ = ["Fee"]


class Fee(BaseModel, TimestampMixin):
    __tablename__ = "fees"
    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_fees_total_non_negative"),
        CheckConstraint("paid_amount >= 0", name="ck_fees_paid_non_negative"),
    )

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_name: Mapped[str] = mapped_column(String(255), nullable=False)
    student_code: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    block: Mapped[Block] = mapped_column(enum_column(Block, length=2), nullable=False)

    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
    )
    paid_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        nullable=False,
        default=Decimal("0.00"),
    )
    due_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    status: Mapped[FeeStatus] = mapped_column(
        enum_column(FeeStatus),
        nullable=False,
        default=FeeStatus.PENDING,
        index=True,
    )

    @property
    def balance(self) -> Decimal:
        return Decimal(self.total_amount) - Decimal(self.paid_amount)

    @property
    def is_settled(self) -> bool:
        return Decimal(self.paid_amount) >= Decimal(self.total_amount)

    def __repr__(self) -> str:
        return (
            f"<Fee(id={self.id}, student={self.student_code}, "
            f"paid={self.paid_amount}/{self.total_amount}, status={self.status})>"
        )
