# app/services/leave/leave_workflow_service.py
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.models.base.enums import Block, LeaveStatus
from app.models.leave import LeaveApplication
from app.repositories.core import StudentRepository
from app.repositories.leave import LeaveApplicationRepository
from app.schemas.leave import LeaveCreate
from app.services.common import UnitOfWork, errors
from app.services.common.permissions import (
    PermissionDenied,
    Principal,
    can_access_block,
    require_block_access,
)

logger = logging.getLogger(__name__)

_DECISIONS = frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED})


def can_transition(actor: Principal, leave: LeaveApplication) -> bool:
    """
    Whether actor may decide on leave.

    Admins decide on any leave, wardens only on leaves from their own block,
    students never.
    """
    return can_access_block(actor, leave.block)


class LeaveWorkflowService:
    """
    Leave applications: pending -> approved | rejected.

    Both outcomes are terminal; a decided leave cannot be reopened.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_leave_repo(self, uow: UnitOfWork) -> LeaveApplicationRepository:
        return uow.get_repo(LeaveApplicationRepository)

    def _require_leave(self, uow: UnitOfWork, leave_id: str) -> LeaveApplication:
        leave = self._get_leave_repo(uow).get(leave_id)
        if leave is None:
            raise errors.NotFoundError("LeaveApplication", leave_id)
        return leave

    # ------------------------------------------------------------------ #
    # Applying
    # ------------------------------------------------------------------ #
    def create_leave(
        self,
        data: LeaveCreate,
        actor: Optional[Principal] = None,
    ) -> LeaveApplication:
        """
        File a leave application for a student.

        When an actor is given, students may only apply for themselves and
        wardens only for students of their block.
        """
        if data.end_date < data.start_date:
            raise errors.ValidationError(
                "Leave cannot end before it starts", field="end_date"
            )

        with UnitOfWork(self._session_factory) as uow:
            student = uow.get_repo(StudentRepository).get_by_ref(data.student_ref)
            if student is None:
                raise errors.NotFoundError("Student", data.student_ref)

            if actor is not None:
                if actor.is_admin or actor.is_warden:
                    require_block_access(actor, student.block)
                elif actor.user_id not in (student.id, student.student_code):
                    raise PermissionDenied(
                        "Students can only apply for their own leave",
                        user_id=actor.user_id,
                        role=actor.role,
                    )

            if not student.is_active:
                raise errors.InvalidStateError(
                    f"Student {student.student_code} has been removed",
                    current_state=student.status.value,
                )

            leave = self._get_leave_repo(uow).create(
                {
                    "student_id": student.id,
                    "student_code": student.student_code,
                    "student_name": student.name,
                    "block": student.block,
                    "room_number": student.room_number or "",
                    "start_date": data.start_date,
                    "end_date": data.end_date,
                    "reason": data.reason,
                    "status": LeaveStatus.PENDING,
                }
            )

        logger.info(
            "Leave %s filed for %s (%s to %s)",
            leave.id, leave.student_code, leave.start_date, leave.end_date,
        )
        return leave

    # ------------------------------------------------------------------ #
    # Deciding
    # ------------------------------------------------------------------ #
    def update_leave_status(
        self,
        leave_id: str,
        status: LeaveStatus,
        actor: Principal,
    ) -> LeaveApplication:
        """
        Approve or reject a pending leave.

        Raises:
            NotFoundError: Unknown leave
            PermissionDenied: Actor may not decide on this leave
            InvalidStateError: Leave already decided, or target is not a decision
        """
        with UnitOfWork(self._session_factory) as uow:
            leave = self._require_leave(uow, leave_id)

            if not can_transition(actor, leave):
                logger.warning(
                    "User %s (%s) denied decision on leave %s of block %s",
                    actor.user_id, actor.role.value, leave_id, leave.block.value,
                )
                raise PermissionDenied(
                    f"User {actor.user_id} cannot decide leaves of block {leave.block.value}",
                    user_id=actor.user_id,
                    role=actor.role,
                )

            if not leave.is_pending:
                raise errors.InvalidStateError(
                    f"Leave {leave_id} has already been {leave.status.value}",
                    current_state=leave.status.value,
                )
            if status not in _DECISIONS:
                raise errors.InvalidStateError(
                    f"Cannot move a leave to '{LeaveStatus(status).value}'",
                    current_state=leave.status.value,
                )

            leaves = self._get_leave_repo(uow)
            if not leaves.decide(leave_id, status, actor.user_id):
                current = leaves.reload(leave_id)
                raise errors.InvalidStateError(
                    f"Leave {leave_id} was decided concurrently",
                    current_state=current.status.value if current else None,
                )
            leave = leaves.reload(leave_id)

        logger.info("Leave %s %s by %s", leave_id, leave.status.value, actor.user_id)
        return leave

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def get_leave(self, leave_id: str) -> LeaveApplication:
        with UnitOfWork(self._session_factory) as uow:
            return self._require_leave(uow, leave_id)

    def list_leaves(
        self,
        block: Optional[Block] = None,
        status: Optional[LeaveStatus] = None,
        student_ref: Optional[str] = None,
    ) -> List[LeaveApplication]:
        with UnitOfWork(self._session_factory) as uow:
            student_id = None
            if student_ref is not None:
                student = uow.get_repo(StudentRepository).get_by_ref(student_ref)
                if student is None:
                    raise errors.NotFoundError("Student", student_ref)
                student_id = student.id
            return self._get_leave_repo(uow).list_leaves(
                block=block, status=status, student_id=student_id
            )

    def pending_for_block(self, block: Block) -> List[LeaveApplication]:
        return self.list_leaves(block=block, status=LeaveStatus.PENDING)

    def delete_leave(self, leave_id: str) -> None:
        with UnitOfWork(self._session_factory) as uow:
            leave = self._require_leave(uow, leave_id)
            self._get_leave_repo(uow).delete(leave)
        logger.info("Deleted leave %s", leave_id)
