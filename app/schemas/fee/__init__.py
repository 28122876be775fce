# --- File: app/schemas/fee/__init__.py ---
"""
Fee schemas package.
"""

from app.schemas.fee.fee_base import (
    FeeCreate,
    FeeUpdate,
    OverdueSweepRequest,
    PaymentRequest,
)
from app.schemas.fee.fee_response import FeeResponse, OverdueSweepResponse

__all__ = [
    "FeeCreate",
    "FeeUpdate",
    "PaymentRequest",
    "OverdueSweepRequest",
    "FeeResponse",
    "OverdueSweepResponse",
]
