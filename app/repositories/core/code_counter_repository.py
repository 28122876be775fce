# app/repositories/core/code_counter_repository.py
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.counter import CodeCounter


class CodeCounterRepository:
    """Durable named counters used to mint student and complaint codes."""

    def __init__(self, session: Session):
        self.session = session

    def next_value(self, key: str) -> int:
        """
        Advance the counter for key and return the new value.

        The increment is a single UPDATE so two transactions can never read
        the same value. The first use of a key inserts the row; a concurrent
        insert of the same row is resolved by retrying the UPDATE.
        """
        if self._bump(key):
            return self._current(key)

        try:
            with self.session.begin_nested():
                self.session.add(CodeCounter(id=key, seq=1))
            return 1
        except IntegrityError:
            if not self._bump(key):
                raise
            return self._current(key)

    def _bump(self, key: str) -> bool:
        stmt = (
            update(CodeCounter)
            .where(CodeCounter.id == key)
            .values(seq=CodeCounter.seq + 1)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount == 1

    def _current(self, key: str) -> int:
        stmt = select(CodeCounter.seq).where(CodeCounter.id == key)
        return self.session.execute(stmt).scalar_one()
