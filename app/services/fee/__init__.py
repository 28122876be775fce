# app/services/fee/__init__.py
from .fee_ledger_service import FeeLedgerService, derive_fee_status

__all__ = ["FeeLedgerService", "derive_fee_status"]
