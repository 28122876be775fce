# app/api/deps.py
"""
FastAPI dependencies: session factory, services and the acting user.

Authentication happens upstream; the gateway forwards the verified actor in
the X-Actor-Id, X-Actor-Role and X-Actor-Block headers.
"""

from typing import Callable, Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.models.base.enums import Block, UserRole
from app.services.attendance import AttendanceBatchService
from app.services.common.permissions import Principal, require_block_access, require_role as _require_role
from app.services.complaint import ComplaintDeskService
from app.services.fee import FeeLedgerService
from app.services.leave import LeaveWorkflowService
from app.services.room import RoomLedgerService
from app.services.student import StudentLifecycleService
from app.services.warden import WardenService

# --- Database -------------------------------------------------------------------


def get_session_factory() -> Callable[[], Session]:
    """Overridden in tests to point the services at another database."""
    return SessionLocal


# --- Services -------------------------------------------------------------------


def get_room_service(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> RoomLedgerService:
    return RoomLedgerService(session_factory)


def get_student_service(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> StudentLifecycleService:
    return StudentLifecycleService(session_factory)


def get_fee_service(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> FeeLedgerService:
    return FeeLedgerService(session_factory)


def get_attendance_service(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> AttendanceBatchService:
    return AttendanceBatchService(session_factory)


def get_leave_service(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> LeaveWorkflowService:
    return LeaveWorkflowService(session_factory)


def get_warden_service(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> WardenService:
    return WardenService(session_factory)


def get_complaint_service(
    session_factory: Callable[[], Session] = Depends(get_session_factory),
) -> ComplaintDeskService:
    return ComplaintDeskService(session_factory)


# --- Acting user ----------------------------------------------------------------


def get_current_actor(
    x_actor_id: Optional[str] = Header(default=None),
    x_actor_role: Optional[str] = Header(default=None),
    x_actor_block: Optional[str] = Header(default=None),
) -> Principal:
    if not x_actor_id or not x_actor_role:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing actor identity headers",
        )
    try:
        role = UserRole(x_actor_role.lower())
        block = Block(x_actor_block.upper()) if x_actor_block else None
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid actor role or block",
        ) from None
    return Principal(user_id=x_actor_id, role=role, block=block)


def require_role(*roles: UserRole):
    """
    Create a dependency that requires one of roles
    """
    def role_dependency(actor: Principal = Depends(get_current_actor)) -> Principal:
        _require_role(actor, roles)
        return actor

    return role_dependency


require_admin = require_role(UserRole.ADMIN)
require_staff = require_role(UserRole.ADMIN, UserRole.WARDEN)


def scoped_block(actor: Principal, block: Optional[Block]) -> Optional[Block]:
    """
    Block filter an actor may query with.

    Wardens default to their own block and may not look elsewhere; admins
    keep whatever they asked for.
    """
    if actor.is_warden:
        block = block or actor.block
        require_block_access(actor, block)
    return block
