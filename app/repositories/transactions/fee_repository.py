# app/repositories/transactions/fee_repository.py
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.models.base.enums import Block, FeeStatus
from app.models.fee import Fee
from app.repositories.base import BaseRepository


class FeeRepository(BaseRepository[Fee]):
    def __init__(self, session: Session):
        super().__init__(session, Fee)

    def reload(self, fee_id: str) -> Optional[Fee]:
        return self.session.get(Fee, fee_id, populate_existing=True)

    def add_payment(
        self,
        fee_id: str,
        amount: Decimal,
        *,
        cap_at_total: bool,
    ) -> bool:
        """
        Add amount to paid_amount in one statement.

        With cap_at_total the row only matches while the new paid amount
        stays within the total, so racing payments cannot overshoot it.
        """
        stmt = update(Fee).where(Fee.id == fee_id)
        if cap_at_total:
            stmt = stmt.where(Fee.paid_amount + amount <= Fee.total_amount)
        stmt = stmt.values(paid_amount=Fee.paid_amount + amount).execution_options(
            synchronize_session=False
        )
        return self.session.execute(stmt).rowcount == 1

    def list_fees(
        self,
        *,
        student_id: Optional[str] = None,
        block: Optional[Block] = None,
        status: Optional[FeeStatus] = None,
    ) -> List[Fee]:
        stmt = self._apply_filters(
            self._base_select(),
            {"student_id": student_id, "block": block, "status": status},
        )
        stmt = stmt.order_by(Fee.due_date.asc(), Fee.created_at.asc())
        return list(self.session.execute(stmt).scalars().all())

    def mark_overdue(self, as_of: date) -> int:
        """Flip pending fees whose due date has passed. Returns rows changed."""
        stmt = (
            update(Fee)
            .where(
                Fee.status == FeeStatus.PENDING,
                Fee.due_date < as_of,
                Fee.paid_amount < Fee.total_amount,
            )
            .values(status=FeeStatus.OVERDUE)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount or 0
