# app/services/room/bed_assignment.py
"""
Bed selection within a room.

Beds are numbered 1..capacity. The resolver never touches storage; callers
pass the beds already taken by the room's active occupants.
"""
from __future__ import annotations

from typing import Iterable, Optional

from app.services.common.errors import RoomFullError


def free_beds(capacity: int, used_beds: Iterable[int]) -> list[int]:
    used = set(used_beds)
    return [bed for bed in range(1, capacity + 1) if bed not in used]


def resolve_bed(
    capacity: int,
    used_beds: Iterable[int],
    preferred: Optional[int] = None,
) -> int:
    """
    Pick a bed for a new occupant.

    The preferred bed wins when it lies within the room and is free;
    otherwise the lowest free bed is returned.

    Raises:
        RoomFullError: If every bed is taken
    """
    used = set(used_beds)
    if preferred is not None and 1 <= preferred <= capacity and preferred not in used:
        return preferred

    available = free_beds(capacity, used)
    if not available:
        raise RoomFullError(capacity=capacity)
    return available[0]
