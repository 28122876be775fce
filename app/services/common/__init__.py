# app/services/common/__init__.py
"""
Shared service-layer infrastructure.

- **UnitOfWork**: transaction boundary, repository factory and lock holder
- **locking**: in-process keyed locks for rooms and attendance days
- **permissions**: the acting user and role/block checks
- **errors**: service-layer exception hierarchy

Example usage:
    >>> from app.services.common import UnitOfWork, errors
    >>> with UnitOfWork(session_factory) as uow:
    ...     room = uow.get_repo(RoomRepository).get(room_id)
    ...     if room is None:
    ...         raise errors.NotFoundError("Room", room_id)
"""
from __future__ import annotations

from . import errors, locking, permissions
from .unit_of_work import TransactionError, UnitOfWork

__all__ = [
    "errors",
    "locking",
    "permissions",
    "UnitOfWork",
    "TransactionError",
]
