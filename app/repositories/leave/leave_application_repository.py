# app/repositories/leave/leave_application_repository.py
from __future__ import annotations

from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from app.models.base.enums import Block, LeaveStatus
from app.models.leave import LeaveApplication
from app.repositories.base import BaseRepository


class LeaveApplicationRepository(BaseRepository[LeaveApplication]):
    def __init__(self, session: Session):
        super().__init__(session, LeaveApplication)

    def reload(self, leave_id: str) -> Optional[LeaveApplication]:
        return self.session.get(LeaveApplication, leave_id, populate_existing=True)

    def decide(self, leave_id: str, status: LeaveStatus, decided_by: str) -> bool:
        """Record a decision only if the leave is still pending."""
        stmt = (
            update(LeaveApplication)
            .where(
                LeaveApplication.id == leave_id,
                LeaveApplication.status == LeaveStatus.PENDING,
            )
            .values(status=status, approved_by=decided_by)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount == 1

    def list_leaves(
        self,
        *,
        block: Optional[Block] = None,
        status: Optional[LeaveStatus] = None,
        student_id: Optional[str] = None,
    ) -> List[LeaveApplication]:
        stmt = self._apply_filters(
            self._base_select(),
            {"block": block, "status": status, "student_id": student_id},
        )
        stmt = stmt.order_by(LeaveApplication.start_date.asc(), LeaveApplication.created_at.asc())
        return list(self.session.execute(stmt).scalars().all())
