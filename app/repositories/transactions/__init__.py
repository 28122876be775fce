# app/repositories/transactions/__init__.py
from .fee_repository import FeeRepository

__all__ = ["FeeRepository"]
