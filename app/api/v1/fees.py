# app/api/v1/fees.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.api.deps import get_fee_service, require_admin, require_staff, scoped_block
from app.models.base.enums import Block, FeeStatus
from app.schemas.fee import (
    FeeCreate,
    FeeResponse,
    FeeUpdate,
    OverdueSweepRequest,
    OverdueSweepResponse,
    PaymentRequest,
)
from app.services.common.permissions import Principal, require_block_access
from app.services.fee import FeeLedgerService

router = APIRouter(prefix="/fees", tags=["Fees"])


@router.post("", response_model=FeeResponse, status_code=status.HTTP_201_CREATED)
def create_fee(
    payload: FeeCreate,
    _=Depends(require_admin),
    service: FeeLedgerService = Depends(get_fee_service),
) -> FeeResponse:
    return FeeResponse.model_validate(service.create_fee(payload))


@router.get("", response_model=List[FeeResponse])
def list_fees(
    student_ref: Optional[str] = None,
    block: Optional[Block] = None,
    fee_status: Optional[FeeStatus] = None,
    actor: Principal = Depends(require_staff),
    service: FeeLedgerService = Depends(get_fee_service),
) -> List[FeeResponse]:
    block = scoped_block(actor, block)
    fees = service.list_fees(student_ref=student_ref, block=block, status=fee_status)
    return [FeeResponse.model_validate(f) for f in fees]


@router.post("/mark-overdue", response_model=OverdueSweepResponse)
def mark_overdue(
    payload: OverdueSweepRequest,
    _=Depends(require_admin),
    service: FeeLedgerService = Depends(get_fee_service),
) -> OverdueSweepResponse:
    as_of = payload.as_of or date.today()
    return OverdueSweepResponse(as_of=as_of, updated=service.mark_overdue_fees(as_of))


@router.get("/{fee_id}", response_model=FeeResponse)
def get_fee(
    fee_id: str,
    actor: Principal = Depends(require_staff),
    service: FeeLedgerService = Depends(get_fee_service),
) -> FeeResponse:
    fee = service.get_fee(fee_id)
    require_block_access(actor, fee.block)
    return FeeResponse.model_validate(fee)


@router.post("/{fee_id}/payments", response_model=FeeResponse)
def record_payment(
    fee_id: str,
    payload: PaymentRequest,
    _=Depends(require_admin),
    service: FeeLedgerService = Depends(get_fee_service),
) -> FeeResponse:
    return FeeResponse.model_validate(service.record_payment(fee_id, payload.amount))


@router.patch("/{fee_id}", response_model=FeeResponse)
def update_fee(
    fee_id: str,
    payload: FeeUpdate,
    _=Depends(require_admin),
    service: FeeLedgerService = Depends(get_fee_service),
) -> FeeResponse:
    return FeeResponse.model_validate(service.update_fee_fields(fee_id, payload))


@router.delete("/{fee_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_fee(
    fee_id: str,
    _=Depends(require_admin),
    service: FeeLedgerService = Depends(get_fee_service),
) -> None:
    service.delete_fee(fee_id)
