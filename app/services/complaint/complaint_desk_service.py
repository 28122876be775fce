# app/services/complaint/complaint_desk_service.py
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.models.base.enums import Block, ComplaintStatus
from app.models.complaint import Complaint
from app.models.counter import CodeCounter
from app.repositories.complaint import ComplaintRepository
from app.repositories.core import CodeCounterRepository, StudentRepository
from app.schemas.complaint import ComplaintCreate, ComplaintStats
from app.services.common import UnitOfWork, errors
from app.services.common.permissions import (
    PermissionDenied,
    Principal,
    require_block_access,
)

logger = logging.getLogger(__name__)

COMPLAINT_CODE_PREFIX = "CMPL"

_NEXT_STATUSES = {
    ComplaintStatus.NEW: frozenset({ComplaintStatus.IN_PROGRESS, ComplaintStatus.RESOLVED}),
    ComplaintStatus.IN_PROGRESS: frozenset({ComplaintStatus.IN_PROGRESS, ComplaintStatus.RESOLVED}),
    ComplaintStatus.RESOLVED: frozenset(),
}


def format_complaint_code(seq: int) -> str:
    return f"{COMPLAINT_CODE_PREFIX}{seq:03d}"


class ComplaintDeskService:
    """
    Student complaints and their handling by wardens and admins.

    Codes come from the same durable counter table as student codes and are
    never reused, even after a complaint is deleted.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_complaint_repo(self, uow: UnitOfWork) -> ComplaintRepository:
        return uow.get_repo(ComplaintRepository)

    def _require_complaint(self, uow: UnitOfWork, complaint_ref: str) -> Complaint:
        complaint = self._get_complaint_repo(uow).get_by_ref(complaint_ref)
        if complaint is None:
            raise errors.NotFoundError("Complaint", complaint_ref)
        return complaint

    # ------------------------------------------------------------------ #
    # Filing
    # ------------------------------------------------------------------ #
    def create_complaint(
        self,
        data: ComplaintCreate,
        actor: Optional[Principal] = None,
    ) -> Complaint:
        with UnitOfWork(self._session_factory) as uow:
            student = uow.get_repo(StudentRepository).get_by_ref(data.student_ref)
            if student is None:
                raise errors.NotFoundError("Student", data.student_ref)

            if actor is not None:
                if actor.is_admin or actor.is_warden:
                    require_block_access(actor, student.block)
                elif actor.user_id not in (student.id, student.student_code):
                    raise PermissionDenied(
                        "Students can only file their own complaints",
                        user_id=actor.user_id,
                        role=actor.role,
                    )

            if not student.is_active:
                raise errors.InvalidStateError(
                    f"Student {student.student_code} has been removed",
                    current_state=student.status.value,
                )

            seq = uow.get_repo(CodeCounterRepository).next_value(CodeCounter.COMPLAINT_KEY)
            complaint = self._get_complaint_repo(uow).create(
                {
                    "complaint_code": format_complaint_code(seq),
                    "student_id": student.id,
                    "student_code": student.student_code,
                    "student_name": student.name,
                    "student_mobile": student.mobile,
                    "block": student.block,
                    "room_number": student.room_number or "",
                    "category": data.category,
                    "title": data.title,
                    "description": data.description,
                    "status": ComplaintStatus.NEW,
                }
            )

        logger.info(
            "Complaint %s filed by %s (%s)",
            complaint.complaint_code, complaint.student_code, complaint.category.value,
        )
        return complaint

    # ------------------------------------------------------------------ #
    # Handling
    # ------------------------------------------------------------------ #
    def update_complaint_status(
        self,
        complaint_ref: str,
        status: ComplaintStatus,
        actor: Principal,
        admin_note: Optional[str] = None,
    ) -> Complaint:
        """
        Move a complaint forward and optionally attach a note.

        Raises:
            NotFoundError: Unknown complaint
            PermissionDenied: Actor is not staff of the complaint's block
            InvalidStateError: Complaint is resolved, the move goes backwards,
                or another handler changed it first
        """
        with UnitOfWork(self._session_factory) as uow:
            complaint = self._require_complaint(uow, complaint_ref)
            require_block_access(actor, complaint.block)

            current = complaint.status
            if status not in _NEXT_STATUSES[current]:
                raise errors.InvalidStateError(
                    f"Cannot move complaint {complaint.complaint_code} "
                    f"from '{current.value}' to '{ComplaintStatus(status).value}'",
                    current_state=current.value,
                )

            complaints = self._get_complaint_repo(uow)
            if not complaints.change_status(
                complaint.id, current, status, actor.user_id, admin_note
            ):
                latest = complaints.reload(complaint.id)
                raise errors.InvalidStateError(
                    f"Complaint {complaint.complaint_code} was updated concurrently",
                    current_state=latest.status.value if latest else None,
                )
            complaint = complaints.reload(complaint.id)

        logger.info(
            "Complaint %s moved to %s by %s",
            complaint.complaint_code, complaint.status.value, actor.user_id,
        )
        return complaint

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def get_complaint(self, complaint_ref: str) -> Complaint:
        with UnitOfWork(self._session_factory) as uow:
            return self._require_complaint(uow, complaint_ref)

    def list_complaints(
        self,
        block: Optional[Block] = None,
        status: Optional[ComplaintStatus] = None,
        student_ref: Optional[str] = None,
    ) -> List[Complaint]:
        with UnitOfWork(self._session_factory) as uow:
            student_id = None
            if student_ref is not None:
                student = uow.get_repo(StudentRepository).get_by_ref(student_ref)
                if student is None:
                    raise errors.NotFoundError("Student", student_ref)
                student_id = student.id
            return self._get_complaint_repo(uow).list_complaints(
                block=block, status=status, student_id=student_id
            )

    def complaint_stats(self, block: Optional[Block] = None) -> ComplaintStats:
        with UnitOfWork(self._session_factory) as uow:
            counts = self._get_complaint_repo(uow).count_by_status(block=block)
        return ComplaintStats(
            new=counts.get(ComplaintStatus.NEW, 0),
            in_progress=counts.get(ComplaintStatus.IN_PROGRESS, 0),
            resolved=counts.get(ComplaintStatus.RESOLVED, 0),
            total=sum(counts.values()),
        )

    def delete_complaint(self, complaint_ref: str) -> None:
        with UnitOfWork(self._session_factory) as uow:
            complaint = self._require_complaint(uow, complaint_ref)
            self._get_complaint_repo(uow).delete(complaint)
        logger.info("Deleted complaint %s", complaint_ref)
