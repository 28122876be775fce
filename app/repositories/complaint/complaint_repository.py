# app/repositories/complaint/complaint_repository.py
from __future__ import annotations

from typing import Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from app.models.base.enums import Block, ComplaintStatus
from app.models.complaint import Complaint
from app.repositories.base import BaseRepository


class ComplaintRepository(BaseRepository[Complaint]):
    def __init__(self, session: Session):
        super().__init__(session, Complaint)

    def reload(self, complaint_id: str) -> Optional[Complaint]:
        return self.session.get(Complaint, complaint_id, populate_existing=True)

    def get_by_ref(self, ref: str) -> Optional[Complaint]:
        """Resolve either a primary key or a complaint code."""
        found = self.get(ref)
        if found is not None:
            return found
        stmt = self._base_select().where(Complaint.complaint_code == ref)
        return self.session.execute(stmt).scalar_one_or_none()

    def change_status(
        self,
        complaint_id: str,
        expected: ComplaintStatus,
        status: ComplaintStatus,
        handled_by: str,
        admin_note: Optional[str] = None,
    ) -> bool:
        """Move a complaint only if it is still in the expected status."""
        values = {"status": status, "handled_by": handled_by}
        if admin_note is not None:
            values["admin_note"] = admin_note
        stmt = (
            update(Complaint)
            .where(Complaint.id == complaint_id, Complaint.status == expected)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount == 1

    def list_complaints(
        self,
        *,
        block: Optional[Block] = None,
        status: Optional[ComplaintStatus] = None,
        student_id: Optional[str] = None,
    ) -> List[Complaint]:
        stmt = self._apply_filters(
            self._base_select(),
            {"block": block, "status": status, "student_id": student_id},
        )
        stmt = stmt.order_by(Complaint.created_at.desc(), Complaint.complaint_code.desc())
        return list(self.session.execute(stmt).scalars().all())

    def count_by_status(self, *, block: Optional[Block] = None) -> Dict[ComplaintStatus, int]:
        stmt = select(Complaint.status, func.count()).group_by(Complaint.status)
        if block is not None:
            stmt = stmt.where(Complaint.block == block)
        return {status: count for status, count in self.session.execute(stmt).all()}
