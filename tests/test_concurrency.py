import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from decimal import Decimal

from app.models.base.enums import (
    AttendanceStatus,
    Block,
    FeeStatus,
    LeaveStatus,
    StudentStatus,
    UserRole,
)
from app.schemas.attendance import RosterEntry
from app.schemas.fee import FeeCreate
from app.schemas.leave import LeaveCreate
from app.services.common.errors import InvalidAmountError, InvalidStateError, RoomFullError
from app.services.common.locking import KeyedLockRegistry, attendance_key
from app.services.common.permissions import Principal

from conftest import TODAY, admission


def _run_all(fn, args, workers=8):
    """Run fn over args in threads; return (results, errors)."""
    results, errors = [], []
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(fn, arg) for arg in args]
        for future in futures:
            try:
                results.append(future.result())
            except Exception as exc:  # collected for assertions
                errors.append(exc)
    return results, errors


def test_parallel_admissions_never_overfill(room_service, student_service, make_room):
    room = make_room(Block.A, "101", capacity=3)
    requests = [admission(room_id=room.id) for _ in range(8)]

    admitted, errors = _run_all(student_service.admit_student, requests)

    assert len(admitted) == 3
    assert len(errors) == 5
    assert all(isinstance(exc, RoomFullError) for exc in errors)
    assert sorted(s.bed_number for s in admitted) == [1, 2, 3]
    assert room_service.get_room(room.id).occupied == 3

    codes = [s.student_code for s in student_service.list_students(status=StudentStatus.ACTIVE)]
    assert codes == ["HSTL2025A001", "HSTL2025A002", "HSTL2025A003"]


def test_parallel_transfers_into_last_bed(room_service, student_service, make_room, admit):
    target = make_room(Block.A, "900", capacity=1)
    sources = [make_room(Block.A, f"10{i}", capacity=1) for i in range(4)]
    students = [admit(room_id=room.id) for room in sources]

    moved, errors = _run_all(
        lambda student: student_service.transfer_room(student.id, target.id), students
    )

    assert len(moved) == 1
    assert all(isinstance(exc, RoomFullError) for exc in errors)
    assert room_service.get_room(target.id).occupied == 1
    assert sum(room_service.get_room(r.id).occupied for r in sources) == 3
    assert room_service.reconcile_occupancy() == []


def test_parallel_payments_are_all_counted(fee_service, admit):
    student = admit()
    fee = fee_service.create_fee(
        FeeCreate(student_ref=student.id, total_amount=Decimal("1000.00"), due_date=TODAY)
    )

    paid, errors = _run_all(
        lambda amount: fee_service.record_payment(fee.id, amount), [Decimal("100.00")] * 10
    )

    assert errors == []
    assert len(paid) == 10
    final = fee_service.get_fee(fee.id)
    assert Decimal(final.paid_amount) == Decimal("1000.00")
    assert final.status == FeeStatus.PAID


def test_parallel_payments_cannot_overpay(fee_service, admit):
    student = admit()
    fee = fee_service.create_fee(
        FeeCreate(student_ref=student.id, total_amount=Decimal("500.00"), due_date=TODAY)
    )

    paid, errors = _run_all(
        lambda amount: fee_service.record_payment(fee.id, amount), [Decimal("200.00")] * 4
    )

    assert len(paid) == 2
    assert all(isinstance(exc, InvalidAmountError) for exc in errors)
    assert Decimal(fee_service.get_fee(fee.id).paid_amount) == Decimal("400.00")


def test_readers_never_see_a_half_replaced_day(attendance_service, make_room, admit):
    room = make_room(Block.A, "101", capacity=3)
    s1, s2, s3 = [admit(room_id=room.id) for _ in range(3)]
    day = date(2025, 3, 3)
    full_day = [
        RosterEntry(student_ref=s.id, status=AttendanceStatus.PRESENT) for s in (s1, s2, s3)
    ]
    short_day = [
        RosterEntry(student_ref=s1.id, status=AttendanceStatus.ABSENT),
        RosterEntry(student_ref=s2.id, status=AttendanceStatus.ABSENT),
    ]
    expected = {
        frozenset((e.student_ref, e.status) for e in full_day),
        frozenset((e.student_ref, e.status) for e in short_day),
    }
    attendance_service.mark_bulk_attendance(Block.A, day, full_day, marked_by="warden-a")

    done = threading.Event()
    seen = []

    def write():
        try:
            for i in range(20):
                roster = short_day if i % 2 == 0 else full_day
                attendance_service.mark_bulk_attendance(Block.A, day, roster, marked_by="warden-a")
        finally:
            done.set()

    def read():
        while True:
            finished = done.is_set()
            records = attendance_service.get_attendance(Block.A, day)
            seen.append(frozenset((r.student_id, r.status) for r in records))
            if finished:
                return

    _, errors = _run_all(lambda task: task(), [write, read, read], workers=3)

    assert errors == []
    assert seen
    assert set(seen) <= expected


def test_racing_leave_decisions_keep_the_first(leave_service, admit, monkeypatch):
    student = admit()
    leave = leave_service.create_leave(
        LeaveCreate(
            student_ref=student.id,
            start_date=date(2025, 3, 10),
            end_date=date(2025, 3, 12),
            reason="Family function",
        )
    )
    admin = Principal(user_id="admin-1", role=UserRole.ADMIN)

    # Both deciders load the leave while it is still pending.
    both_loaded = threading.Barrier(2, timeout=5)
    load = leave_service._require_leave

    def load_together(uow, leave_id):
        found = load(uow, leave_id)
        both_loaded.wait()
        return found

    monkeypatch.setattr(leave_service, "_require_leave", load_together)

    decided, errors = _run_all(
        lambda status: leave_service.update_leave_status(leave.id, status, admin),
        [LeaveStatus.APPROVED, LeaveStatus.REJECTED],
        workers=2,
    )

    assert len(decided) == 1
    assert len(errors) == 1
    assert isinstance(errors[0], InvalidStateError)
    monkeypatch.undo()
    assert leave_service.get_leave(leave.id).status == decided[0].status


def test_lock_registry_forgets_released_keys():
    registry = KeyedLockRegistry()
    keys = [attendance_key(Block.A, date(2025, 3, day)) for day in range(1, 11)]

    for key in keys:
        with registry.acquire(key, ("room", "r1")):
            assert len(registry) == 2
    assert len(registry) == 0

    holding = registry.acquire(keys[0])
    waiter_started = threading.Event()

    def wait_for_key():
        waiter_started.set()
        with registry.acquire(keys[0]):
            pass

    waiter = threading.Thread(target=wait_for_key)
    waiter.start()
    waiter_started.wait(timeout=5)
    holding.close()
    waiter.join(timeout=5)

    assert not waiter.is_alive()
    assert len(registry) == 0
