# app/services/warden/warden_service.py
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.base.enums import Block
from app.models.warden import Warden
from app.repositories.core import WardenRepository
from app.schemas.warden import WardenAssign
from app.services.common import UnitOfWork, errors

logger = logging.getLogger(__name__)


class WardenService:
    """Registry of block wardens."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_warden_repo(self, uow: UnitOfWork) -> WardenRepository:
        return uow.get_repo(WardenRepository)

    def assign_warden(self, data: WardenAssign) -> Warden:
        with UnitOfWork(self._session_factory) as uow:
            wardens = self._get_warden_repo(uow)
            if wardens.get_by_block(data.block):
                raise errors.AlreadyExistsError("Warden", "block", data.block.value)
            if wardens.get_by_email(data.email):
                raise errors.AlreadyExistsError("Warden", "email", data.email)
            try:
                warden = wardens.create(data.model_dump())
            except IntegrityError as exc:
                raise errors.ConflictError(
                    f"Block {data.block.value} was assigned concurrently",
                    conflicting_field="block",
                ) from exc

        logger.info("Assigned warden %s to block %s", warden.email, warden.block.value)
        return warden

    def get_warden_for_block(self, block: Block) -> Optional[Warden]:
        with UnitOfWork(self._session_factory) as uow:
            return self._get_warden_repo(uow).get_by_block(block)

    def list_wardens(self) -> List[Warden]:
        with UnitOfWork(self._session_factory) as uow:
            return self._get_warden_repo(uow).list_wardens()

    def remove_warden(self, warden_id: str) -> None:
        with UnitOfWork(self._session_factory) as uow:
            wardens = self._get_warden_repo(uow)
            warden = wardens.get(warden_id)
            if warden is None:
                raise errors.NotFoundError("Warden", warden_id)
            wardens.delete(warden)
        logger.info("Removed warden %s", warden_id)
