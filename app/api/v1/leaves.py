# app/api/v1/leaves.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.api.deps import get_current_actor, get_leave_service, require_admin, require_staff, scoped_block
from app.models.base.enums import Block, LeaveStatus
from app.schemas.leave import LeaveCreate, LeaveResponse, LeaveStatusUpdate
from app.services.common.permissions import Principal, require_block_access
from app.services.leave import LeaveWorkflowService

router = APIRouter(prefix="/leaves", tags=["Leaves"])


@router.post("", response_model=LeaveResponse, status_code=status.HTTP_201_CREATED)
def create_leave(
    payload: LeaveCreate,
    actor: Principal = Depends(get_current_actor),
    service: LeaveWorkflowService = Depends(get_leave_service),
) -> LeaveResponse:
    return LeaveResponse.model_validate(service.create_leave(payload, actor))


@router.get("", response_model=List[LeaveResponse])
def list_leaves(
    block: Optional[Block] = None,
    leave_status: Optional[LeaveStatus] = None,
    student_ref: Optional[str] = None,
    actor: Principal = Depends(require_staff),
    service: LeaveWorkflowService = Depends(get_leave_service),
) -> List[LeaveResponse]:
    block = scoped_block(actor, block)
    leaves = service.list_leaves(block=block, status=leave_status, student_ref=student_ref)
    return [LeaveResponse.model_validate(item) for item in leaves]


@router.get("/pending/{block}", response_model=List[LeaveResponse])
def pending_for_block(
    block: Block,
    actor: Principal = Depends(require_staff),
    service: LeaveWorkflowService = Depends(get_leave_service),
) -> List[LeaveResponse]:
    require_block_access(actor, block)
    return [LeaveResponse.model_validate(item) for item in service.pending_for_block(block)]


@router.patch("/{leave_id}/status", response_model=LeaveResponse)
def update_leave_status(
    leave_id: str,
    payload: LeaveStatusUpdate,
    actor: Principal = Depends(get_current_actor),
    service: LeaveWorkflowService = Depends(get_leave_service),
) -> LeaveResponse:
    return LeaveResponse.model_validate(
        service.update_leave_status(leave_id, payload.status, actor)
    )


@router.delete("/{leave_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_leave(
    leave_id: str,
    _=Depends(require_admin),
    service: LeaveWorkflowService = Depends(get_leave_service),
) -> None:
    service.delete_leave(leave_id)
