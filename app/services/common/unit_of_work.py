# app/services/common/unit_of_work.py
"""
Unit of Work pattern implementation.

Provides transaction management and repository coordination
for the service layer with SQLAlchemy. A unit of work can also hold
keyed in-process locks; they are released only after the transaction
has committed or rolled back.
"""
from __future__ import annotations

import logging
from collections.abc import Hashable
from contextlib import AbstractContextManager, ExitStack
from typing import Any, Callable, Optional, Type, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import ServiceError
from .locking import KeyedLockRegistry, lock_registry

logger = logging.getLogger(__name__)

TRepository = TypeVar("TRepository")


class TransactionError(ServiceError):
    """Raised when a database transaction fails."""

    code = "TRANSACTION_ERROR"

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message, details={"error_type": type(original_error).__name__})
        self.original_error = original_error


class UnitOfWork(AbstractContextManager["UnitOfWork"]):
    """
    Unit of Work for managing one database transaction.

    Usage:
        >>> with UnitOfWork(session_factory) as uow:
        ...     uow.lock(room_key(room_id))
        ...     rooms = uow.get_repo(RoomRepository)
        ...     rooms.try_increment_occupied(room_id)
        ...     # Auto-commits on __exit__ if no exception

    Any exception raised inside the block rolls the whole transaction back.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        locks: Optional[KeyedLockRegistry] = None,
    ) -> None:
        self._session_factory = session_factory
        self._locks = locks or lock_registry

        self.session: Optional[Session] = None
        self._repo_cache: dict[type, Any] = {}
        self._held: Optional[ExitStack] = None

    # ------------------------------------------------------------------ #
    # Context manager protocol
    # ------------------------------------------------------------------ #

    def __enter__(self) -> "UnitOfWork":
        if self.session is not None:
            raise RuntimeError("UnitOfWork context already entered")

        self.session = self._session_factory()
        self._repo_cache.clear()
        self._held = ExitStack()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> bool:
        if self.session is None:
            return False

        try:
            if exc_type is None:
                try:
                    self.session.commit()
                except SQLAlchemyError as exc:
                    logger.error("Auto-commit failed: %s", exc)
                    self.session.rollback()
                    raise TransactionError("Failed to commit transaction", exc) from exc
            else:
                self.session.rollback()
                logger.debug("UnitOfWork rolled back due to %s", exc_type.__name__)
        finally:
            self.session.close()
            self.session = None
            self._repo_cache.clear()
            if self._held is not None:
                self._held.close()
                self._held = None

        return False

    # ------------------------------------------------------------------ #
    # Locks
    # ------------------------------------------------------------------ #

    def lock(self, *keys: Hashable) -> None:
        """
        Hold in-process locks for keys until the transaction ends.

        All keys a unit of work needs should be passed in one call so they
        are taken in a consistent order.
        """
        if self._held is None:
            raise RuntimeError("UnitOfWork.lock() called outside of context")
        self._held.enter_context(self._locks.acquire(*keys))

    # ------------------------------------------------------------------ #
    # Repository factory
    # ------------------------------------------------------------------ #

    def get_repo(self, repo_cls: Type[TRepository]) -> TRepository:
        """
        Get or create a repository instance bound to this UnitOfWork's session.

        Repositories are cached per UnitOfWork instance for consistency.
        """
        if self.session is None:
            raise RuntimeError("UnitOfWork.get_repo() called outside of context")

        if repo_cls in self._repo_cache:
            return self._repo_cache[repo_cls]

        repo_instance = repo_cls(self.session)  # type: ignore[call-arg]
        self._repo_cache[repo_cls] = repo_instance
        return repo_instance

