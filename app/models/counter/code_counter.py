# app/models/counter/code_counter.py
"""
Durable counters backing human-readable codes.

One row per counter key: ``student_<year>_<block>`` for student codes and
``complaint`` for complaint codes. A counter is only advanced by an atomic
increment, so a code is never issued twice, even after deletions.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import Base

__all__ = ["CodeCounter"]


class CodeCounter(Base):
    __tablename__ = "code_counters"

    COMPLAINT_KEY = "complaint"

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        comment="Counter key, e.g. student_2025_A",
    )
    seq: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @staticmethod
    def student_key(year: int, block: str) -> str:
        return f"student_{year}_{block}"

    def __repr__(self) -> str:
        return f"<CodeCounter(id={self.id}, seq={self.seq})>"
