# app/api/v1/complaints.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.api.deps import (
    get_complaint_service,
    get_current_actor,
    require_admin,
    require_staff,
    scoped_block,
)
from app.models.base.enums import Block, ComplaintStatus
from app.schemas.complaint import (
    ComplaintCreate,
    ComplaintResponse,
    ComplaintStats,
    ComplaintStatusUpdate,
)
from app.services.common.permissions import Principal, require_block_access
from app.services.complaint import ComplaintDeskService

router = APIRouter(prefix="/complaints", tags=["Complaints"])


@router.post("", response_model=ComplaintResponse, status_code=status.HTTP_201_CREATED)
def create_complaint(
    payload: ComplaintCreate,
    actor: Principal = Depends(get_current_actor),
    service: ComplaintDeskService = Depends(get_complaint_service),
) -> ComplaintResponse:
    return ComplaintResponse.model_validate(service.create_complaint(payload, actor))


@router.get("", response_model=List[ComplaintResponse])
def list_complaints(
    block: Optional[Block] = None,
    complaint_status: Optional[ComplaintStatus] = None,
    student_ref: Optional[str] = None,
    actor: Principal = Depends(require_staff),
    service: ComplaintDeskService = Depends(get_complaint_service),
) -> List[ComplaintResponse]:
    block = scoped_block(actor, block)
    complaints = service.list_complaints(
        block=block, status=complaint_status, student_ref=student_ref
    )
    return [ComplaintResponse.model_validate(item) for item in complaints]


@router.get("/stats", response_model=ComplaintStats)
def complaint_stats(
    block: Optional[Block] = None,
    actor: Principal = Depends(require_staff),
    service: ComplaintDeskService = Depends(get_complaint_service),
) -> ComplaintStats:
    return service.complaint_stats(scoped_block(actor, block))


@router.get("/{complaint_ref}", response_model=ComplaintResponse)
def get_complaint(
    complaint_ref: str,
    actor: Principal = Depends(require_staff),
    service: ComplaintDeskService = Depends(get_complaint_service),
) -> ComplaintResponse:
    complaint = service.get_complaint(complaint_ref)
    require_block_access(actor, complaint.block)
    return ComplaintResponse.model_validate(complaint)


@router.patch("/{complaint_ref}/status", response_model=ComplaintResponse)
def update_complaint_status(
    complaint_ref: str,
    payload: ComplaintStatusUpdate,
    actor: Principal = Depends(get_current_actor),
    service: ComplaintDeskService = Depends(get_complaint_service),
) -> ComplaintResponse:
    return ComplaintResponse.model_validate(
        service.update_complaint_status(
            complaint_ref, payload.status, actor, admin_note=payload.admin_note
        )
    )


@router.delete("/{complaint_ref}", status_code=status.HTTP_204_NO_CONTENT)
def delete_complaint(
    complaint_ref: str,
    _=Depends(require_admin),
    service: ComplaintDeskService = Depends(get_complaint_service),
) -> None:
    service.delete_complaint(complaint_ref)
