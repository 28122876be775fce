import pytest

from app.services.common.errors import RoomFullError
from app.services.room.bed_assignment import free_beds, resolve_bed


def test_lowest_free_bed_is_chosen():
    assert resolve_bed(4, {1, 2}) == 3
    assert resolve_bed(4, set()) == 1


def test_gap_is_reused():
    assert resolve_bed(3, {1, 3}) == 2


def test_free_preferred_bed_wins():
    assert resolve_bed(4, {1}, preferred=4) == 4


@pytest.mark.parametrize("preferred", [2, 0, 5, -1])
def test_taken_or_out_of_range_preference_falls_back(preferred):
    assert resolve_bed(4, {2}, preferred=preferred) == 1


def test_full_room_raises():
    with pytest.raises(RoomFullError) as exc_info:
        resolve_bed(2, {1, 2})
    assert exc_info.value.code == "ROOM_FULL"


def test_free_beds_lists_in_order():
    assert free_beds(5, [4, 1]) == [2, 3, 5]
