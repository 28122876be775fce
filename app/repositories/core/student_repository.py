# app/repositories/core/student_repository.py
from typing import List, Optional, Sequence, Set

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.models.base.enums import Block, StudentStatus
from app.models.student import Student
from app.repositories.base import BaseRepository


class StudentRepository(BaseRepository[Student]):
    def __init__(self, session: Session):
        super().__init__(session, Student)

    def get_by_code(self, student_code: str) -> Optional[Student]:
        stmt = self._base_select().where(Student.student_code == student_code)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_email(self, email: str) -> Optional[Student]:
        stmt = self._base_select().where(Student.email == email)
        return self.session.execute(stmt).scalar_one_or_none()

    def get_by_ref(self, ref: str) -> Optional[Student]:
        """Resolve either a primary key or a student code."""
        return self.get(ref) or self.get_by_code(ref)

    def used_beds(self, room_id: str, *, exclude_student_id: Optional[str] = None) -> Set[int]:
        stmt = select(Student.bed_number).where(
            Student.room_id == room_id,
            Student.status == StudentStatus.ACTIVE,
            Student.bed_number.is_not(None),
        )
        if exclude_student_id is not None:
            stmt = stmt.where(Student.id != exclude_student_id)
        return set(self.session.execute(stmt).scalars().all())

    def list_students(
        self,
        *,
        block: Optional[Block] = None,
        status: Optional[StudentStatus] = None,
        room_id: Optional[str] = None,
    ) -> List[Student]:
        stmt = self._apply_filters(
            self._base_select(),
            {"block": block, "status": status, "room_id": room_id},
        )
        stmt = stmt.order_by(Student.student_code.asc())
        return list(self.session.execute(stmt).scalars().all())

    def get_many_by_refs(self, refs: Sequence[str]) -> List[Student]:
        """Students whose id or code appears in refs, in no particular order."""
        if not refs:
            return []
        stmt = self._base_select().where(
            Student.id.in_(refs) | Student.student_code.in_(refs)
        )
        return list(self.session.execute(stmt).scalars().all())

    def set_room_number(self, room_id: str, room_number: str) -> int:
        """Rewrite the denormalized room number on everyone assigned to room_id."""
        stmt = (
            update(Student)
            .where(Student.room_id == room_id)
            .values(room_number=room_number)
            .execution_options(synchronize_session=False)
        )
        return self.session.execute(stmt).rowcount
