import pytest

from app.models.base.enums import Block
from app.schemas.room import RoomCreate, RoomUpdate
from app.services.common.errors import (
    AlreadyExistsError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    RoomFullError,
    ValidationError,
)


def test_create_room_starts_empty(make_room):
    room = make_room(capacity=3)
    assert room.occupied == 0
    assert room.available_beds == 3


def test_room_number_unique_per_block(make_room):
    make_room(Block.A, "101")
    make_room(Block.B, "101")
    with pytest.raises(AlreadyExistsError):
        make_room(Block.A, "101")


def test_counter_moves_by_one_within_bounds(room_service, make_room):
    room = make_room(capacity=2)
    assert room_service.increment_occupied(room.id, 1).occupied == 1
    assert room_service.increment_occupied(room.id, 1).occupied == 2
    with pytest.raises(RoomFullError):
        room_service.increment_occupied(room.id, 1)

    assert room_service.increment_occupied(room.id, -1).occupied == 1
    assert room_service.increment_occupied(room.id, -1).occupied == 0
    with pytest.raises(InvalidStateError):
        room_service.increment_occupied(room.id, -1)
    assert room_service.get_room(room.id).occupied == 0


@pytest.mark.parametrize("delta", [0, 2, -3])
def test_counter_rejects_other_deltas(room_service, make_room, delta):
    room = make_room()
    with pytest.raises(ValidationError):
        room_service.increment_occupied(room.id, delta)


def test_unknown_room(room_service):
    with pytest.raises(NotFoundError):
        room_service.increment_occupied("missing", 1)
    with pytest.raises(NotFoundError):
        room_service.get_room("missing")


def test_available_rooms_exclude_full_ones(room_service, make_room):
    full = make_room(Block.A, "101", capacity=1)
    open_room = make_room(Block.A, "102", capacity=2)
    make_room(Block.B, "201", capacity=2)
    room_service.increment_occupied(full.id, 1)

    available = room_service.list_available_rooms(Block.A)
    assert [r.id for r in available] == [open_room.id]
    assert len(room_service.list_rooms()) == 3


def test_capacity_cannot_drop_below_occupancy(room_service, make_room, admit):
    room = make_room(capacity=3)
    admit(room_id=room.id)
    admit(room_id=room.id)

    with pytest.raises(InvalidStateError):
        room_service.update_room(room.id, RoomUpdate(capacity=1))
    assert room_service.update_room(room.id, RoomUpdate(capacity=2)).capacity == 2


def test_capacity_cannot_drop_below_highest_used_bed(room_service, student_service, make_room, admit):
    room = make_room(capacity=3)
    admit(room_id=room.id)
    middle = admit(room_id=room.id)
    last = admit(room_id=room.id)
    student_service.remove_student(middle.id)

    with pytest.raises(InvalidStateError):
        room_service.update_room(room.id, RoomUpdate(capacity=2))
    assert room_service.get_room(room.id).capacity == 3
    assert student_service.get_student(last.id).bed_number == 3

    student_service.transfer_room(last.id, room.id, bed_preference=2)
    assert room_service.update_room(room.id, RoomUpdate(capacity=2)).capacity == 2


def test_rename_updates_occupants_room_number(room_service, student_service, make_room, admit):
    room = make_room(Block.A, "101", capacity=2)
    occupants = [admit(room_id=room.id), admit(room_id=room.id)]
    bystander = admit(room_id=make_room(Block.A, "102").id)

    renamed = room_service.update_room(room.id, RoomUpdate(room_number="202"))

    assert renamed.room_number == "202"
    for student in occupants:
        assert student_service.get_student(student.id).room_number == "202"
    assert student_service.get_student(bystander.id).room_number == "102"


def test_occupied_room_cannot_change_block(room_service, make_room, admit):
    room = make_room()
    admit(room_id=room.id)
    with pytest.raises(InvalidStateError):
        room_service.update_room(room.id, RoomUpdate(block=Block.B))


def test_rename_to_existing_number_conflicts(room_service, make_room):
    make_room(Block.A, "101")
    other = make_room(Block.A, "102")
    with pytest.raises(AlreadyExistsError):
        room_service.update_room(other.id, RoomUpdate(room_number="101"))


def test_delete_room_with_occupants_conflicts(room_service, make_room, admit, student_service):
    room = make_room()
    student = admit(room_id=room.id)
    with pytest.raises(ConflictError):
        room_service.delete_room(room.id)

    student_service.remove_student(student.id)
    room_service.delete_room(room.id)
    with pytest.raises(NotFoundError):
        room_service.get_room(room.id)


def test_direct_override_is_bounded(room_service, make_room):
    room = make_room(capacity=2)
    assert room_service.set_occupied_directly(room.id, 2).occupied == 2
    with pytest.raises(InvalidStateError):
        room_service.set_occupied_directly(room.id, 3)
    with pytest.raises(InvalidStateError):
        room_service.set_occupied_directly(room.id, -1)


def test_reconcile_repairs_drift(room_service, make_room, admit):
    drifted = make_room(Block.A, "101", capacity=3)
    healthy = make_room(Block.A, "102", capacity=3)
    admit(room_id=drifted.id)
    admit(room_id=healthy.id)
    room_service.set_occupied_directly(drifted.id, 3)

    corrections = room_service.reconcile_occupancy()

    assert len(corrections) == 1
    fix = corrections[0]
    assert (fix.room_id, fix.recorded, fix.actual) == (drifted.id, 3, 1)
    assert room_service.get_room(drifted.id).occupied == 1
    assert room_service.reconcile_occupancy() == []


def test_room_create_schema_bounds():
    with pytest.raises(ValueError):
        RoomCreate(block=Block.A, room_number="101", capacity=0)
