# app/services/room/__init__.py
"""
Room services: inventory, occupancy counter and bed selection.
"""
from .bed_assignment import free_beds, resolve_bed
from .room_ledger_service import OccupancyCorrection, RoomLedgerService, apply_occupancy_delta

__all__ = [
    "RoomLedgerService",
    "OccupancyCorrection",
    "apply_occupancy_delta",
    "resolve_bed",
    "free_beds",
]
