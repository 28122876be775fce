# app/api/v1/attendance.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends

from app.api.deps import get_attendance_service, get_student_service, require_staff
from app.models.base.enums import Block
from app.schemas.attendance import (
    AttendanceRecordResponse,
    BulkAttendanceRequest,
    BulkAttendanceResponse,
    RosterDayEntry,
)
from app.services.attendance import AttendanceBatchService
from app.services.common.permissions import Principal, require_block_access
from app.services.student import StudentLifecycleService

router = APIRouter(prefix="/attendance", tags=["Attendance"])


@router.post("/bulk", response_model=BulkAttendanceResponse)
def mark_bulk_attendance(
    payload: BulkAttendanceRequest,
    actor: Principal = Depends(require_staff),
    service: AttendanceBatchService = Depends(get_attendance_service),
) -> BulkAttendanceResponse:
    require_block_access(actor, payload.block)
    return service.mark_bulk_attendance(
        payload.block,
        payload.date,
        payload.entries,
        marked_by=actor.user_id,
        policy=payload.policy,
    )


@router.get("/blocks/{block}/{day}", response_model=List[AttendanceRecordResponse])
def get_attendance(
    block: Block,
    day: date,
    actor: Principal = Depends(require_staff),
    service: AttendanceBatchService = Depends(get_attendance_service),
) -> List[AttendanceRecordResponse]:
    require_block_access(actor, block)
    return [AttendanceRecordResponse.model_validate(r) for r in service.get_attendance(block, day)]


@router.get("/blocks/{block}/{day}/roster", response_model=List[RosterDayEntry])
def roster_for_day(
    block: Block,
    day: date,
    actor: Principal = Depends(require_staff),
    service: AttendanceBatchService = Depends(get_attendance_service),
) -> List[RosterDayEntry]:
    require_block_access(actor, block)
    return service.roster_for_day(block, day)


@router.get("/students/{student_ref}", response_model=List[AttendanceRecordResponse])
def get_student_attendance(
    student_ref: str,
    month: Optional[str] = None,
    actor: Principal = Depends(require_staff),
    service: AttendanceBatchService = Depends(get_attendance_service),
    students: StudentLifecycleService = Depends(get_student_service),
) -> List[AttendanceRecordResponse]:
    require_block_access(actor, students.get_student(student_ref).block)
    records = service.get_student_attendance(student_ref, month)
    return [AttendanceRecordResponse.model_validate(r) for r in records]
