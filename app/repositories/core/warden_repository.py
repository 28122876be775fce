# app/repositories/core/warden_repository.py
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.base.enums import Block
from app.models.warden import Warden
from app.repositories.base import BaseRepository


class WardenRepository(BaseRepository[Warden]):
    def __init__(self, session: Session):
        super().__init__(session, Warden)

    def get_by_block(self, block: Block) -> Optional[Warden]:
        stmt = self._base_select().where(Warden.block == block)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_email(self, email: str) -> Optional[Warden]:
        stmt = self._base_select().where(Warden.email == email)
        return self.session.execute(stmt).scalar_one_or_none()

    def list_wardens(self) -> List[Warden]:
        stmt = self._base_select().order_by(Warden.block.asc())
        return list(self.session.execute(stmt).scalars().all())
