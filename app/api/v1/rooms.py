# app/api/v1/rooms.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.api.deps import get_room_service, require_admin, require_staff
from app.models.base.enums import Block
from app.schemas.room import (
    OccupancyAdjust,
    OccupancyCorrectionResponse,
    OccupancyOverride,
    RoomCreate,
    RoomResponse,
    RoomUpdate,
)
from app.services.room import RoomLedgerService

router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
    payload: RoomCreate,
    _=Depends(require_admin),
    service: RoomLedgerService = Depends(get_room_service),
) -> RoomResponse:
    return RoomResponse.model_validate(service.create_room(payload))


@router.get("", response_model=List[RoomResponse])
def list_rooms(
    block: Optional[Block] = None,
    _=Depends(require_staff),
    service: RoomLedgerService = Depends(get_room_service),
) -> List[RoomResponse]:
    return [RoomResponse.model_validate(r) for r in service.list_rooms(block)]


@router.get("/available", response_model=List[RoomResponse])
def list_available_rooms(
    block: Optional[Block] = None,
    _=Depends(require_staff),
    service: RoomLedgerService = Depends(get_room_service),
) -> List[RoomResponse]:
    return [RoomResponse.model_validate(r) for r in service.list_available_rooms(block)]


@router.post("/reconcile", response_model=List[OccupancyCorrectionResponse])
def reconcile_occupancy(
    _=Depends(require_admin),
    service: RoomLedgerService = Depends(get_room_service),
) -> List[OccupancyCorrectionResponse]:
    return [
        OccupancyCorrectionResponse.model_validate(c, from_attributes=True)
        for c in service.reconcile_occupancy()
    ]


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: str,
    _=Depends(require_staff),
    service: RoomLedgerService = Depends(get_room_service),
) -> RoomResponse:
    return RoomResponse.model_validate(service.get_room(room_id))


@router.patch("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: str,
    payload: RoomUpdate,
    _=Depends(require_admin),
    service: RoomLedgerService = Depends(get_room_service),
) -> RoomResponse:
    return RoomResponse.model_validate(service.update_room(room_id, payload))


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_room(
    room_id: str,
    _=Depends(require_admin),
    service: RoomLedgerService = Depends(get_room_service),
) -> None:
    service.delete_room(room_id)


@router.post("/{room_id}/occupancy", response_model=RoomResponse)
def adjust_occupancy(
    room_id: str,
    payload: OccupancyAdjust,
    _=Depends(require_admin),
    service: RoomLedgerService = Depends(get_room_service),
) -> RoomResponse:
    return RoomResponse.model_validate(service.increment_occupied(room_id, payload.delta))


@router.put("/{room_id}/occupancy", response_model=RoomResponse)
def override_occupancy(
    room_id: str,
    payload: OccupancyOverride,
    _=Depends(require_admin),
    service: RoomLedgerService = Depends(get_room_service),
) -> RoomResponse:
    return RoomResponse.model_validate(service.set_occupied_directly(room_id, payload.occupied))
