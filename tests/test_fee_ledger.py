from datetime import date, timedelta
from decimal import Decimal

import pytest

from app.config.settings import Settings
from app.models.base.enums import Block, FeeStatus
from app.schemas.fee import FeeCreate, FeeUpdate
from app.services.common.errors import InvalidAmountError, InvalidStateError, NotFoundError
from app.services.fee import FeeLedgerService, derive_fee_status

from conftest import TODAY


@pytest.fixture
def fee(fee_service, admit):
    student = admit()
    return fee_service.create_fee(
        FeeCreate(student_ref=student.student_code, total_amount=Decimal("1000"), due_date=TODAY)
    )


def test_new_fee_is_pending(fee):
    assert fee.status == FeeStatus.PENDING
    assert Decimal(fee.paid_amount) == Decimal("0")
    assert fee.student_code == "HSTL2025A001"
    assert fee.block == Block.A


def test_partial_then_full_payment(fee_service, fee):
    after_first = fee_service.record_payment(fee.id, Decimal("600"))
    assert after_first.status == FeeStatus.PENDING
    assert Decimal(after_first.paid_amount) == Decimal("600")

    after_second = fee_service.record_payment(fee.id, Decimal("400"))
    assert after_second.status == FeeStatus.PAID
    assert after_second.balance == Decimal("0")


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-50")])
def test_non_positive_payment_rejected(fee_service, fee, amount):
    with pytest.raises(InvalidAmountError):
        fee_service.record_payment(fee.id, amount)
    assert Decimal(fee_service.get_fee(fee.id).paid_amount) == Decimal("0")


def test_overpayment_rejected_by_default(fee_service, fee):
    fee_service.record_payment(fee.id, Decimal("900"))
    with pytest.raises(InvalidAmountError):
        fee_service.record_payment(fee.id, Decimal("200"))
    assert Decimal(fee_service.get_fee(fee.id).paid_amount) == Decimal("900")


def test_overpayment_allowed_when_configured(session_factory, fee):
    service = FeeLedgerService(
        session_factory, settings=Settings(ALLOW_OVERPAYMENT=True), today=lambda: TODAY
    )
    updated = service.record_payment(fee.id, Decimal("1200"))
    assert updated.status == FeeStatus.PAID
    assert Decimal(updated.paid_amount) == Decimal("1200")


def test_payment_on_unknown_fee(fee_service):
    with pytest.raises(NotFoundError):
        fee_service.record_payment("missing", Decimal("10"))


def test_payment_on_overdue_fee_keeps_overdue_until_settled(fee_service, fee):
    fee_service.mark_overdue_fees(as_of=TODAY + timedelta(days=1))
    partial = fee_service.record_payment(fee.id, Decimal("100"))
    assert partial.status == FeeStatus.OVERDUE
    settled = fee_service.record_payment(fee.id, Decimal("900"))
    assert settled.status == FeeStatus.PAID


def test_fee_for_unknown_student(fee_service):
    with pytest.raises(NotFoundError):
        fee_service.create_fee(
            FeeCreate(student_ref="HSTL2025A999", total_amount=Decimal("10"), due_date=TODAY)
        )


def test_lowering_total_to_paid_amount_settles_fee(fee_service, fee):
    fee_service.record_payment(fee.id, Decimal("600"))
    updated = fee_service.update_fee_fields(fee.id, FeeUpdate(total_amount=Decimal("600")))
    assert updated.status == FeeStatus.PAID


def test_cannot_mark_paid_with_balance(fee_service, fee):
    fee_service.record_payment(fee.id, Decimal("600"))
    with pytest.raises(InvalidStateError):
        fee_service.update_fee_fields(fee.id, FeeUpdate(status=FeeStatus.PAID))
    assert fee_service.get_fee(fee.id).status == FeeStatus.PENDING


def test_raising_total_reopens_paid_fee(fee_service, fee):
    fee_service.record_payment(fee.id, Decimal("1000"))
    updated = fee_service.update_fee_fields(fee.id, FeeUpdate(total_amount=Decimal("1500")))
    assert updated.status == FeeStatus.PENDING


def test_explicit_overdue_status(fee_service, fee):
    updated = fee_service.update_fee_fields(fee.id, FeeUpdate(status=FeeStatus.OVERDUE))
    assert updated.status == FeeStatus.OVERDUE


def test_mark_overdue_only_touches_unpaid_past_due(fee_service, admit):
    student = admit()
    past = fee_service.create_fee(
        FeeCreate(student_ref=student.id, total_amount=Decimal("100"), due_date=TODAY - timedelta(days=3))
    )
    future = fee_service.create_fee(
        FeeCreate(student_ref=student.id, total_amount=Decimal("100"), due_date=TODAY + timedelta(days=3))
    )
    settled = fee_service.create_fee(
        FeeCreate(student_ref=student.id, total_amount=Decimal("100"), due_date=TODAY - timedelta(days=3))
    )
    fee_service.record_payment(settled.id, Decimal("100"))

    assert fee_service.mark_overdue_fees() == 1
    assert fee_service.get_fee(past.id).status == FeeStatus.OVERDUE
    assert fee_service.get_fee(future.id).status == FeeStatus.PENDING
    assert fee_service.get_fee(settled.id).status == FeeStatus.PAID
    assert fee_service.mark_overdue_fees() == 0


def test_list_and_delete(fee_service, fee, admit):
    other = admit(block=Block.B)
    fee_service.create_fee(FeeCreate(student_ref=other.id, total_amount=Decimal("5"), due_date=TODAY))

    assert len(fee_service.list_fees()) == 2
    assert [f.id for f in fee_service.list_fees(block=Block.A)] == [fee.id]
    assert [f.id for f in fee_service.list_fees(student_ref=fee.student_code)] == [fee.id]

    fee_service.delete_fee(fee.id)
    with pytest.raises(NotFoundError):
        fee_service.get_fee(fee.id)


def test_derive_status_rules():
    due = date(2025, 1, 10)
    later = date(2025, 2, 1)
    assert derive_fee_status(Decimal("10"), Decimal("10"), due, FeeStatus.OVERDUE, later) == FeeStatus.PAID
    assert derive_fee_status(Decimal("5"), Decimal("10"), due, FeeStatus.PENDING, later) == FeeStatus.PENDING
    assert derive_fee_status(Decimal("5"), Decimal("10"), due, FeeStatus.PAID, later) == FeeStatus.OVERDUE
    assert derive_fee_status(Decimal("5"), Decimal("10"), later, FeeStatus.PAID, due) == FeeStatus.PENDING
