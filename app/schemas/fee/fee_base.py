# --- File: app/schemas/fee/fee_base.py ---
"""
Fee ledger request schemas.

Amounts are Decimals with two decimal places. A payment amount is not
range-checked here so that the ledger can report non-positive amounts with
its own error.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import Field

from app.models.base.enums import FeeStatus
from app.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "FeeCreate",
    "FeeUpdate",
    "PaymentRequest",
    "OverdueSweepRequest",
]


class FeeCreate(BaseCreateSchema):
    student_ref: str = Field(
        ...,
        description="Student id or student code",
        examples=["HSTL2025A001"],
    )
    total_amount: Decimal = Field(
        ..., ge=0, max_digits=10, decimal_places=2, description="Amount due"
    )
    due_date: Date = Field(..., description="Date the fee falls due")


class FeeUpdate(BaseUpdateSchema):
    """
    Administrative edit of a fee.

    Status is re-derived from the amounts: a fully paid fee is always
    ``paid`` and ``paid`` cannot be set while a balance remains.
    """

    total_amount: Optional[Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]] = None
    due_date: Optional[Date] = None
    status: Optional[FeeStatus] = None


class PaymentRequest(BaseSchema):
    amount: Decimal = Field(
        ..., max_digits=10, decimal_places=2, description="Amount received"
    )


class OverdueSweepRequest(BaseSchema):
    as_of: Optional[Date] = Field(
        default=None,
        description="Reference date; defaults to today",
    )
