from decimal import Decimal

import pytest

from conftest import ADMIN, warden_headers

API = "/api/v1"


def _student_payload(email, block="A", room_id=None):
    return {
        "name": "Asha Verma",
        "email": email,
        "mobile": "+91 98765 43210",
        "parent_mobile": "+91 91234 56789",
        "address": "12 College Road, Pune",
        "block": block,
        "admission_date": "2025-03-01",
        "room_id": room_id,
    }


@pytest.fixture
def room(client):
    response = client.post(
        f"{API}/rooms",
        json={"block": "A", "room_number": "101", "floor": 1, "capacity": 1},
        headers=ADMIN,
    )
    assert response.status_code == 201
    return response.json()


def test_missing_actor_headers_is_unauthorized(client):
    assert client.get(f"{API}/rooms").status_code == 401


def test_non_admin_cannot_create_rooms(client):
    response = client.post(
        f"{API}/rooms",
        json={"block": "A", "room_number": "102", "capacity": 2},
        headers=warden_headers("A"),
    )
    assert response.status_code == 403
    assert response.json()["error_code"] == "FORBIDDEN"


def test_admit_until_full(client, room):
    first = client.post(f"{API}/students", json=_student_payload("one@hostel.edu", room_id=room["id"]), headers=ADMIN)
    assert first.status_code == 201
    body = first.json()
    assert body["student_code"].startswith("HSTL")
    assert body["bed_number"] == 1

    second = client.post(f"{API}/students", json=_student_payload("two@hostel.edu", room_id=room["id"]), headers=ADMIN)
    assert second.status_code == 409
    error = second.json()
    assert error["success"] is False
    assert error["error_code"] == "ROOM_FULL"
    assert error["path"] == f"{API}/students"

    room_now = client.get(f"{API}/rooms/{room['id']}", headers=ADMIN).json()
    assert room_now["occupied"] == 1
    assert room_now["is_full"] is True


def test_unknown_room_is_not_found(client):
    response = client.get(f"{API}/rooms/missing", headers=ADMIN)
    assert response.status_code == 404
    assert response.json()["error_code"] == "NOT_FOUND"


def test_payment_flow(client):
    student = client.post(f"{API}/students", json=_student_payload("pay@hostel.edu"), headers=ADMIN).json()
    fee = client.post(
        f"{API}/fees",
        json={"student_ref": student["student_code"], "total_amount": "1000", "due_date": "2030-01-01"},
        headers=ADMIN,
    ).json()

    partial = client.post(f"{API}/fees/{fee['id']}/payments", json={"amount": "600"}, headers=ADMIN)
    assert partial.status_code == 200
    assert partial.json()["status"] == "pending"

    too_much = client.post(f"{API}/fees/{fee['id']}/payments", json={"amount": "500"}, headers=ADMIN)
    assert too_much.status_code == 422
    assert too_much.json()["error_code"] == "INVALID_AMOUNT"

    settled = client.post(f"{API}/fees/{fee['id']}/payments", json={"amount": "400"}, headers=ADMIN).json()
    assert settled["status"] == "paid"
    assert Decimal(settled["balance"]) == Decimal("0")


def test_warden_is_scoped_to_block(client):
    client.post(f"{API}/students", json=_student_payload("a@hostel.edu", block="A"), headers=ADMIN)
    other = client.post(f"{API}/students", json=_student_payload("b@hostel.edu", block="B"), headers=ADMIN).json()

    listed = client.get(f"{API}/students", headers=warden_headers("A"))
    assert listed.status_code == 200
    assert {s["block"] for s in listed.json()} == {"A"}

    assert client.get(f"{API}/students?block=B", headers=warden_headers("A")).status_code == 403
    assert client.get(f"{API}/students/{other['id']}", headers=warden_headers("A")).status_code == 403


def test_bulk_attendance_reports_skipped(client):
    student = client.post(f"{API}/students", json=_student_payload("att@hostel.edu"), headers=ADMIN).json()
    response = client.post(
        f"{API}/attendance/bulk",
        json={
            "block": "A",
            "date": "2025-03-03",
            "entries": [
                {"student_ref": student["student_code"], "status": "absent"},
                {"student_ref": "ghost"},
            ],
        },
        headers=warden_headers("A"),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["recorded"] == 1
    assert body["records"][0]["marked_by"] == "warden-A"
    assert body["skipped"] == [{"student_ref": "ghost", "reason": "not_found"}]

    fail_fast = client.post(
        f"{API}/attendance/bulk",
        json={"block": "A", "date": "2025-03-03", "entries": [{"student_ref": "ghost"}], "policy": "fail_fast"},
        headers=ADMIN,
    )
    assert fail_fast.status_code == 404
    assert {"field": "ghost", "message": "not_found", "code": "UNRESOLVED", "location": None} in fail_fast.json()["errors"]

    day = client.get(f"{API}/attendance/blocks/A/2025-03-03", headers=ADMIN).json()
    assert [r["status"] for r in day] == ["absent"]


def test_leave_decision_by_other_block_warden_is_forbidden(client):
    student = client.post(f"{API}/students", json=_student_payload("leave@hostel.edu"), headers=ADMIN).json()
    leave = client.post(
        f"{API}/leaves",
        json={
            "student_ref": student["id"],
            "start_date": "2025-03-10",
            "end_date": "2025-03-12",
            "reason": "Family function",
        },
        headers={"X-Actor-Id": student["id"], "X-Actor-Role": "student"},
    )
    assert leave.status_code == 201
    leave_id = leave.json()["id"]

    denied = client.patch(f"{API}/leaves/{leave_id}/status", json={"status": "approved"}, headers=warden_headers("B"))
    assert denied.status_code == 403

    approved = client.patch(f"{API}/leaves/{leave_id}/status", json={"status": "approved"}, headers=warden_headers("A"))
    assert approved.status_code == 200
    assert approved.json()["approved_by"] == "warden-A"

    again = client.patch(f"{API}/leaves/{leave_id}/status", json={"status": "rejected"}, headers=ADMIN)
    assert again.status_code == 409
    assert again.json()["error_code"] == "INVALID_STATE"


def test_warden_registry(client):
    created = client.post(
        f"{API}/wardens",
        json={"name": "Ravi Kumar", "email": "ravi@hostel.edu", "mobile": "+91 99887 76655", "block": "C"},
        headers=ADMIN,
    )
    assert created.status_code == 201
    assert client.get(f"{API}/wardens/blocks/C", headers=ADMIN).json()["email"] == "ravi@hostel.edu"
    assert client.get(f"{API}/wardens/blocks/D", headers=ADMIN).status_code == 404

    clash = client.post(
        f"{API}/wardens",
        json={"name": "Meera Iyer", "email": "meera@hostel.edu", "mobile": "+91 99887 76600", "block": "C"},
        headers=ADMIN,
    )
    assert clash.status_code == 409
    assert clash.json()["error_code"] == "CONFLICT"


def test_complaint_desk(client):
    student = client.post(f"{API}/students", json=_student_payload("cmpl@hostel.edu"), headers=ADMIN).json()
    filed = client.post(
        f"{API}/complaints",
        json={
            "student_ref": student["student_code"],
            "category": "cleanliness",
            "title": "Corridor not cleaned",
            "description": "The second floor corridor was skipped today.",
        },
        headers={"X-Actor-Id": student["student_code"], "X-Actor-Role": "student"},
    )
    assert filed.status_code == 201
    code = filed.json()["complaint_code"]
    assert code == "CMPL001"

    assert client.get(f"{API}/complaints/{code}", headers=warden_headers("B")).status_code == 403

    moved = client.patch(
        f"{API}/complaints/{code}/status",
        json={"status": "resolved", "admin_note": "Cleaned"},
        headers=warden_headers("A"),
    )
    assert moved.status_code == 200
    assert moved.json()["status"] == "resolved"

    reopened = client.patch(f"{API}/complaints/{code}/status", json={"status": "new"}, headers=ADMIN)
    assert reopened.status_code == 409

    stats = client.get(f"{API}/complaints/stats", headers=warden_headers("A")).json()
    assert stats == {"new": 0, "in_progress": 0, "resolved": 1, "total": 1}
