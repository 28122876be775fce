# --- File: app/schemas/fee/fee_response.py ---
"""
Fee ledger response schemas.
"""

from __future__ import annotations

from datetime import date as Date
from decimal import Decimal

from pydantic import Field, computed_field

from app.models.base.enums import Block, FeeStatus
from app.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = ["FeeResponse", "OverdueSweepResponse"]


class FeeResponse(BaseResponseSchema):
    student_id: str
    student_code: str
    student_name: str
    block: Block
    total_amount: Decimal
    paid_amount: Decimal
    due_date: Date
    status: FeeStatus

    @computed_field  # type: ignore[prop-decorator]
    @property
    def balance(self) -> Decimal:
        return self.total_amount - self.paid_amount


class OverdueSweepResponse(BaseSchema):
    as_of: Date
    updated: int = Field(..., ge=0, description="Fees newly marked overdue")
