# app/models/warden/warden.py
"""
Warden model. Each block has at most one warden.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel, enum_column
from app.models.base.enums import Block
from app.models.base.mixins import TimestampMixin

__all__ = ["Warden"]


class Warden(BaseModel, TimestampMixin):
    __tablename__ = "wardens"

    user_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        nullable=True,
        index=True,
        comment="Identity of the warden's login account, managed externally",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    mobile: Mapped[str] = mapped_column(String(20), nullable=False)
    block: Mapped[Block] = mapped_column(
        enum_column(Block, length=2),
        nullable=False,
        unique=True,
    )

    def __repr__(self) -> str:
        return f"<Warden(id={self.id}, name={self.name}, block={self.block})>"
