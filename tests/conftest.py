from datetime import date
from itertools import count

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_session_factory
from app.config.settings import Settings
from app.db.init_db import init_db
from app.db.session import build_engine, build_session_factory
from app.main import create_app
from app.models.base.enums import Block
from app.schemas.room import RoomCreate
from app.schemas.student import StudentAdmit
from app.services.attendance import AttendanceBatchService
from app.services.complaint import ComplaintDeskService
from app.services.fee import FeeLedgerService
from app.services.leave import LeaveWorkflowService
from app.services.room import RoomLedgerService
from app.services.student import StudentLifecycleService
from app.services.warden import WardenService

TODAY = date(2025, 3, 1)

_emails = count(1)


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'hostel.db'}")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def room_service(session_factory):
    return RoomLedgerService(session_factory)


@pytest.fixture
def student_service(session_factory, settings):
    return StudentLifecycleService(session_factory, settings=settings, today=lambda: TODAY)


@pytest.fixture
def fee_service(session_factory, settings):
    return FeeLedgerService(session_factory, settings=settings, today=lambda: TODAY)


@pytest.fixture
def attendance_service(session_factory, settings):
    return AttendanceBatchService(session_factory, settings=settings)


@pytest.fixture
def leave_service(session_factory):
    return LeaveWorkflowService(session_factory)


@pytest.fixture
def warden_service(session_factory):
    return WardenService(session_factory)


@pytest.fixture
def complaint_service(session_factory):
    return ComplaintDeskService(session_factory)


@pytest.fixture
def make_room(room_service):
    def _make(block=Block.A, number="101", capacity=2, floor=1):
        return room_service.create_room(
            RoomCreate(block=block, room_number=number, floor=floor, capacity=capacity)
        )

    return _make


def admission(block=Block.A, room_id=None, bed_number=None, name="Test Student", email=None):
    return StudentAdmit(
        name=name,
        email=email or f"student{next(_emails)}@hostel.edu",
        mobile="+91 98765 43210",
        parent_mobile="+91 91234 56789",
        address="12 College Road, Pune",
        block=block,
        admission_date=TODAY,
        room_id=room_id,
        bed_number=bed_number,
    )


@pytest.fixture
def admit(student_service):
    def _admit(**kwargs):
        return student_service.admit_student(admission(**kwargs))

    return _admit


@pytest.fixture
def client(session_factory):
    app = create_app(create_schema=False)
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    return TestClient(app)


ADMIN = {"X-Actor-Id": "admin-1", "X-Actor-Role": "admin"}


def warden_headers(block):
    return {"X-Actor-Id": f"warden-{block}", "X-Actor-Role": "warden", "X-Actor-Block": block}
