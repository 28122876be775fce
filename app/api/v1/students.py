# app/api/v1/students.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.api.deps import get_student_service, require_admin, require_staff, scoped_block
from app.models.base.enums import Block, StudentStatus
from app.schemas.student import (
    RoomTransferRequest,
    StudentAdmit,
    StudentResponse,
    StudentUpdate,
)
from app.services.common.permissions import Principal, require_block_access
from app.services.student import StudentLifecycleService

router = APIRouter(prefix="/students", tags=["Students"])


@router.post("", response_model=StudentResponse, status_code=status.HTTP_201_CREATED)
def admit_student(
    payload: StudentAdmit,
    _=Depends(require_admin),
    service: StudentLifecycleService = Depends(get_student_service),
) -> StudentResponse:
    return StudentResponse.model_validate(service.admit_student(payload))


@router.get("", response_model=List[StudentResponse])
def list_students(
    block: Optional[Block] = None,
    student_status: Optional[StudentStatus] = None,
    actor: Principal = Depends(require_staff),
    service: StudentLifecycleService = Depends(get_student_service),
) -> List[StudentResponse]:
    block = scoped_block(actor, block)
    return [
        StudentResponse.model_validate(s)
        for s in service.list_students(block=block, status=student_status)
    ]


@router.get("/{student_ref}", response_model=StudentResponse)
def get_student(
    student_ref: str,
    actor: Principal = Depends(require_staff),
    service: StudentLifecycleService = Depends(get_student_service),
) -> StudentResponse:
    student = service.get_student(student_ref)
    require_block_access(actor, student.block)
    return StudentResponse.model_validate(student)


@router.patch("/{student_ref}", response_model=StudentResponse)
def update_student(
    student_ref: str,
    payload: StudentUpdate,
    _=Depends(require_admin),
    service: StudentLifecycleService = Depends(get_student_service),
) -> StudentResponse:
    return StudentResponse.model_validate(service.update_student(student_ref, payload))


@router.post("/{student_ref}/transfer", response_model=StudentResponse)
def transfer_room(
    student_ref: str,
    payload: RoomTransferRequest,
    _=Depends(require_admin),
    service: StudentLifecycleService = Depends(get_student_service),
) -> StudentResponse:
    student = service.transfer_room(student_ref, payload.room_id, payload.bed_number)
    return StudentResponse.model_validate(student)


@router.delete("/{student_ref}", response_model=StudentResponse)
def remove_student(
    student_ref: str,
    _=Depends(require_admin),
    service: StudentLifecycleService = Depends(get_student_service),
) -> StudentResponse:
    return StudentResponse.model_validate(service.remove_student(student_ref))
