import random

import pytest

from app.models.base.enums import Block, StudentStatus
from app.schemas.student import StudentUpdate
from app.services.common.errors import (
    AlreadyExistsError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    RoomFullError,
)

from conftest import admission


def _occupancy_matches(room_service, student_service, room_id):
    room = room_service.get_room(room_id)
    occupants = [
        s for s in student_service.list_students(status=StudentStatus.ACTIVE)
        if s.room_id == room_id
    ]
    beds = [s.bed_number for s in occupants]
    return room.occupied == len(occupants) and len(beds) == len(set(beds))


def test_admission_fills_room_then_rejects(room_service, student_service, make_room, admit):
    room = make_room(Block.A, "101", capacity=2)

    first = admit(room_id=room.id)
    second = admit(room_id=room.id)
    assert (first.bed_number, second.bed_number) == (1, 2)
    assert first.room_number == "101"
    assert room_service.get_room(room.id).occupied == 2

    with pytest.raises(RoomFullError):
        admit(room_id=room.id)
    assert room_service.get_room(room.id).occupied == 2
    assert len(student_service.list_students()) == 2


def test_codes_are_sequential_per_block(admit):
    a1 = admit(block=Block.A)
    a2 = admit(block=Block.A)
    b1 = admit(block=Block.B)
    assert a1.student_code == "HSTL2025A001"
    assert a2.student_code == "HSTL2025A002"
    assert b1.student_code == "HSTL2025B001"


def test_codes_are_not_reused_after_removal(admit, student_service):
    first = admit(block=Block.C)
    student_service.remove_student(first.student_code)
    assert admit(block=Block.C).student_code == "HSTL2025C002"


def test_failed_admission_consumes_no_code(make_room, admit):
    room = make_room(capacity=1)
    admit(room_id=room.id)
    with pytest.raises(RoomFullError):
        admit(room_id=room.id)
    assert admit().student_code == "HSTL2025A002"


def test_admission_without_room(admit):
    student = admit()
    assert student.room_id is None
    assert student.bed_number is None
    assert student.status == StudentStatus.ACTIVE


def test_room_must_be_in_students_block(make_room, admit):
    room = make_room(Block.B, "201")
    with pytest.raises(InvalidStateError):
        admit(block=Block.A, room_id=room.id)


def test_unknown_room_on_admission(admit):
    with pytest.raises(NotFoundError):
        admit(room_id="missing")


def test_duplicate_email_rejected(admit):
    admit(email="same@hostel.edu")
    with pytest.raises(AlreadyExistsError):
        admit(email="SAME@hostel.edu")


def test_preferred_bed_is_honoured(make_room, admit):
    room = make_room(capacity=3)
    assert admit(room_id=room.id, bed_number=3).bed_number == 3
    assert admit(room_id=room.id, bed_number=3).bed_number == 1


def test_removal_frees_bed_and_is_idempotent(room_service, student_service, make_room, admit):
    room = make_room(capacity=2)
    student = admit(room_id=room.id)
    admit(room_id=room.id)

    removed = student_service.remove_student(student.id)
    assert removed.status == StudentStatus.REMOVED
    assert removed.room_id is None
    assert removed.bed_number is None
    assert room_service.get_room(room.id).occupied == 1

    again = student_service.remove_student(student.student_code)
    assert again.status == StudentStatus.REMOVED
    assert room_service.get_room(room.id).occupied == 1

    assert admit(room_id=room.id).bed_number == 1


def test_remove_unknown_student(student_service):
    with pytest.raises(NotFoundError):
        student_service.remove_student("HSTL2025A999")


def test_transfer_moves_both_counters(room_service, student_service, make_room, admit):
    source = make_room(Block.A, "101", capacity=2)
    target = make_room(Block.A, "102", capacity=2)
    student = admit(room_id=source.id)

    moved = student_service.transfer_room(student.id, target.id)

    assert moved.room_id == target.id
    assert moved.room_number == "102"
    assert moved.bed_number == 1
    assert room_service.get_room(source.id).occupied == 0
    assert room_service.get_room(target.id).occupied == 1
    assert _occupancy_matches(room_service, student_service, source.id)
    assert _occupancy_matches(room_service, student_service, target.id)


def test_transfer_into_full_room_changes_nothing(room_service, student_service, make_room, admit):
    source = make_room(Block.A, "101", capacity=2)
    target = make_room(Block.A, "102", capacity=1)
    student = admit(room_id=source.id)
    admit(room_id=target.id)

    with pytest.raises(RoomFullError):
        student_service.transfer_room(student.id, target.id)

    assert student_service.get_student(student.id).room_id == source.id
    assert room_service.get_room(source.id).occupied == 1
    assert room_service.get_room(target.id).occupied == 1


def test_transfer_within_same_room_keeps_counter(room_service, student_service, make_room, admit):
    room = make_room(capacity=3)
    student = admit(room_id=room.id)

    same = student_service.transfer_room(student.id, room.id)
    assert same.bed_number == student.bed_number

    moved = student_service.transfer_room(student.id, room.id, bed_preference=3)
    assert moved.bed_number == 3
    assert room_service.get_room(room.id).occupied == 1


def test_transfer_of_unassigned_student_takes_a_bed(room_service, student_service, make_room, admit):
    room = make_room(capacity=2)
    student = admit()
    moved = student_service.transfer_room(student.id, room.id)
    assert moved.bed_number == 1
    assert room_service.get_room(room.id).occupied == 1


def test_transfer_to_other_block_rejected(student_service, make_room, admit):
    source = make_room(Block.A, "101")
    other = make_room(Block.B, "201")
    student = admit(room_id=source.id)
    with pytest.raises(InvalidStateError):
        student_service.transfer_room(student.id, other.id)


def test_removed_student_cannot_transfer(student_service, make_room, admit):
    room = make_room()
    student = admit(room_id=room.id)
    student_service.remove_student(student.id)
    with pytest.raises(InvalidStateError):
        student_service.transfer_room(student.id, room.id)


def test_profile_update_and_email_clash(student_service, admit):
    first = admit(email="first@hostel.edu")
    second = admit(email="second@hostel.edu")

    updated = student_service.update_student(first.id, StudentUpdate(name="Renamed Student"))
    assert updated.name == "Renamed Student"
    assert updated.student_code == first.student_code

    with pytest.raises(ConflictError):
        student_service.update_student(second.id, StudentUpdate(email="first@hostel.edu"))


def test_lookup_by_code_or_id(student_service, admit):
    student = admit()
    assert student_service.get_student(student.student_code).id == student.id
    assert student_service.find_by_code(student.student_code).id == student.id
    assert student_service.find_by_code("HSTL2025A999") is None


def test_list_filters_by_block_and_status(student_service, admit):
    a = admit(block=Block.A)
    admit(block=Block.B)
    student_service.remove_student(a.id)

    assert [s.block for s in student_service.list_students(block=Block.B)] == [Block.B]
    removed = student_service.list_students(status=StudentStatus.REMOVED)
    assert [s.id for s in removed] == [a.id]


def test_admission_profile_is_normalized():
    data = admission(email="Mixed.Case@Hostel.edu")
    assert data.email == "mixed.case@hostel.edu"
    assert set(data.profile.model_dump()) == {"name", "email", "mobile", "parent_mobile", "address"}


def test_random_operations_keep_counters_consistent(room_service, student_service, make_room, admit):
    rng = random.Random(20250301)
    rooms = [make_room(Block.A, f"1{i:02d}", capacity=rng.randint(1, 3)) for i in range(4)]
    active = []

    for _ in range(60):
        action = rng.choice(["admit", "transfer", "remove"])
        try:
            if action == "admit" or not active:
                active.append(admit(room_id=rng.choice(rooms).id))
            elif action == "transfer":
                student = rng.choice(active)
                student_service.transfer_room(student.id, rng.choice(rooms).id)
            else:
                student = active.pop(rng.randrange(len(active)))
                student_service.remove_student(student.id)
        except RoomFullError:
            pass

    for room in rooms:
        assert _occupancy_matches(room_service, student_service, room.id)
        assert 0 <= room_service.get_room(room.id).occupied <= room.capacity
    assert room_service.reconcile_occupancy() == []
