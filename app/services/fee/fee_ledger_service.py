# app/services/fee/fee_ledger_service.py
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app.config.settings import Settings, get_settings
from app.models.base.enums import Block, FeeStatus
from app.models.fee import Fee
from app.repositories.core import StudentRepository
from app.repositories.transactions import FeeRepository
from app.schemas.fee import FeeCreate, FeeUpdate
from app.services.common import UnitOfWork, errors

logger = logging.getLogger(__name__)


def derive_fee_status(
    paid: Decimal,
    total: Decimal,
    due_date: date,
    current: FeeStatus,
    as_of: date,
) -> FeeStatus:
    """
    Status implied by the amounts.

    A settled fee is always ``paid``. An unsettled fee keeps ``pending`` or
    ``overdue``; a stale ``paid`` falls back to whichever the due date implies.
    """
    if paid >= total:
        return FeeStatus.PAID
    if current != FeeStatus.PAID:
        return current
    return FeeStatus.OVERDUE if due_date < as_of else FeeStatus.PENDING


class FeeLedgerService:
    """
    Fee records and payments.

    Payments are applied with a single guarded UPDATE on paid_amount, so two
    concurrent payments are both counted and, unless over-payment is
    allowed, can never together exceed the total.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        settings: Optional[Settings] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings or get_settings()
        self._today = today

    def _get_fee_repo(self, uow: UnitOfWork) -> FeeRepository:
        return uow.get_repo(FeeRepository)

    def _require_fee(self, uow: UnitOfWork, fee_id: str) -> Fee:
        fee = self._get_fee_repo(uow).get(fee_id)
        if fee is None:
            raise errors.NotFoundError("Fee", fee_id)
        return fee

    # ------------------------------------------------------------------ #
    # CRUD
    # ------------------------------------------------------------------ #
    def create_fee(self, data: FeeCreate) -> Fee:
        total = Decimal(data.total_amount)
        if total < 0:
            raise errors.InvalidAmountError("Total amount cannot be negative", amount=total)

        with UnitOfWork(self._session_factory) as uow:
            student = uow.get_repo(StudentRepository).get_by_ref(data.student_ref)
            if student is None:
                raise errors.NotFoundError("Student", data.student_ref)

            fee = self._get_fee_repo(uow).create(
                {
                    "student_id": student.id,
                    "student_name": student.name,
                    "student_code": student.student_code,
                    "block": student.block,
                    "total_amount": total,
                    "paid_amount": Decimal("0.00"),
                    "due_date": data.due_date,
                    "status": FeeStatus.PENDING,
                }
            )

        logger.info("Created fee %s for %s: %s due %s", fee.id, fee.student_code, total, fee.due_date)
        return fee

    def get_fee(self, fee_id: str) -> Fee:
        with UnitOfWork(self._session_factory) as uow:
            return self._require_fee(uow, fee_id)

    def list_fees(
        self,
        student_ref: Optional[str] = None,
        block: Optional[Block] = None,
        status: Optional[FeeStatus] = None,
    ) -> List[Fee]:
        with UnitOfWork(self._session_factory) as uow:
            student_id = None
            if student_ref is not None:
                student = uow.get_repo(StudentRepository).get_by_ref(student_ref)
                if student is None:
                    raise errors.NotFoundError("Student", student_ref)
                student_id = student.id
            return self._get_fee_repo(uow).list_fees(
                student_id=student_id, block=block, status=status
            )

    def delete_fee(self, fee_id: str) -> None:
        with UnitOfWork(self._session_factory) as uow:
            fee = self._require_fee(uow, fee_id)
            self._get_fee_repo(uow).delete(fee)
        logger.info("Deleted fee %s", fee_id)

    # ------------------------------------------------------------------ #
    # Payments
    # ------------------------------------------------------------------ #
    def record_payment(self, fee_id: str, amount: Decimal) -> Fee:
        """
        Add a payment to a fee and re-derive its status.

        Raises:
            InvalidAmountError: If amount is not positive, or would overpay
                the fee while over-payment is disallowed
            NotFoundError: If the fee does not exist
        """
        amount = Decimal(amount)
        if amount <= 0:
            raise errors.InvalidAmountError("Payment amount must be positive", amount=amount)

        with UnitOfWork(self._session_factory) as uow:
            fees = self._get_fee_repo(uow)
            self._require_fee(uow, fee_id)

            capped = not self._settings.ALLOW_OVERPAYMENT
            if not fees.add_payment(fee_id, amount, cap_at_total=capped):
                fee = fees.reload(fee_id)
                raise errors.InvalidAmountError(
                    f"Payment of {amount} exceeds the outstanding balance",
                    amount=amount,
                    details={"balance": str(fee.balance) if fee else None},
                )

            fee = fees.reload(fee_id)
            status = derive_fee_status(
                Decimal(fee.paid_amount),
                Decimal(fee.total_amount),
                fee.due_date,
                fee.status,
                self._today(),
            )
            if status != fee.status:
                fee = fees.update(fee, {"status": status})

        logger.info(
            "Recorded payment of %s on fee %s (paid %s/%s, %s)",
            amount, fee_id, fee.paid_amount, fee.total_amount, fee.status.value,
        )
        return fee

    def update_fee_fields(self, fee_id: str, data: FeeUpdate) -> Fee:
        patch = data.model_dump(exclude_unset=True, exclude_none=True)

        with UnitOfWork(self._session_factory) as uow:
            fees = self._get_fee_repo(uow)
            fee = self._require_fee(uow, fee_id)

            total = Decimal(patch.get("total_amount", fee.total_amount))
            if total < 0:
                raise errors.InvalidAmountError("Total amount cannot be negative", amount=total)
            due_date = patch.get("due_date", fee.due_date)
            paid = Decimal(fee.paid_amount)
            requested = patch.get("status")

            if paid >= total:
                status = FeeStatus.PAID
            elif requested == FeeStatus.PAID:
                raise errors.InvalidStateError(
                    f"Fee cannot be marked paid with {paid} of {total} received",
                    current_state=fee.status.value,
                    details={"paid_amount": str(paid), "total_amount": str(total)},
                )
            elif requested is not None:
                status = requested
            else:
                status = derive_fee_status(paid, total, due_date, fee.status, self._today())

            fee = fees.update(
                fee,
                {"total_amount": total, "due_date": due_date, "status": status},
            )

        logger.info("Updated fee %s: %s -> %s", fee_id, sorted(patch), fee.status.value)
        return fee

    def mark_overdue_fees(self, as_of: Optional[date] = None) -> int:
        """Flag unpaid fees past their due date. Returns how many changed."""
        as_of = as_of or self._today()
        with UnitOfWork(self._session_factory) as uow:
            updated = self._get_fee_repo(uow).mark_overdue(as_of)
        logger.info("Marked %s fee(s) overdue as of %s", updated, as_of)
        return updated
