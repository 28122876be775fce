# app/api/v1/wardens.py
from typing import List

from fastapi import APIRouter, Depends, status

from app.api.deps import get_warden_service, require_admin, require_staff
from app.models.base.enums import Block
from app.schemas.warden import WardenAssign, WardenResponse
from app.services.common.errors import NotFoundError
from app.services.warden import WardenService

router = APIRouter(prefix="/wardens", tags=["Wardens"])


@router.post("", response_model=WardenResponse, status_code=status.HTTP_201_CREATED)
def assign_warden(
    payload: WardenAssign,
    _=Depends(require_admin),
    service: WardenService = Depends(get_warden_service),
) -> WardenResponse:
    return WardenResponse.model_validate(service.assign_warden(payload))


@router.get("", response_model=List[WardenResponse])
def list_wardens(
    _=Depends(require_staff),
    service: WardenService = Depends(get_warden_service),
) -> List[WardenResponse]:
    return [WardenResponse.model_validate(w) for w in service.list_wardens()]


@router.get("/blocks/{block}", response_model=WardenResponse)
def get_warden_for_block(
    block: Block,
    _=Depends(require_staff),
    service: WardenService = Depends(get_warden_service),
) -> WardenResponse:
    warden = service.get_warden_for_block(block)
    if warden is None:
        raise NotFoundError("Warden", block.value)
    return WardenResponse.model_validate(warden)


@router.delete("/{warden_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_warden(
    warden_id: str,
    _=Depends(require_admin),
    service: WardenService = Depends(get_warden_service),
) -> None:
    service.remove_warden(warden_id)
