# app/repositories/base.py
from __future__ import annotations

from typing import Any, Dict, Generic, Iterable, Optional, Sequence, Type, TypeVar

from sqlalchemy import Select, delete, func, select
from sqlalchemy.orm import Session

from app.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository with common CRUD and query helpers.

    - Does not commit/rollback; caller manages transactions.
    - Counter and balance columns are never written here; domain
      repositories expose guarded UPDATE statements for those.
    """

    def __init__(self, session: Session, model: Type[ModelType]):
        self.session = session
        self.model = model

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #
    def _base_select(self) -> Select[tuple[ModelType]]:
        return select(self.model)

    def _apply_filters(
        self,
        stmt: Select[Any],
        filters: Optional[Dict[str, Any]] = None,
    ) -> Select[Any]:
        if not filters:
            return stmt

        for key, value in filters.items():
            if value is None:
                continue
            column = getattr(self.model, key, None)
            if column is None:
                continue

            if isinstance(value, (list, tuple, set)):
                stmt = stmt.where(column.in_(value))
            else:
                stmt = stmt.where(column == value)
        return stmt

    # ------------------------------------------------------------------ #
    # Basic CRUD
    # ------------------------------------------------------------------ #
    def get(self, id_: str) -> Optional[ModelType]:
        return self.session.get(self.model, id_)

    def get_multi(
        self,
        *,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[Iterable[Any]] = None,
    ) -> Sequence[ModelType]:
        stmt = self._apply_filters(self._base_select(), filters)

        if order_by:
            stmt = stmt.order_by(*order_by)

        if skip:
            stmt = stmt.offset(skip)
        if limit:
            stmt = stmt.limit(limit)

        return self.session.execute(stmt).scalars().all()

    def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        stmt = self._apply_filters(select(func.count()).select_from(self.model), filters)
        return self.session.execute(stmt).scalar_one()

    def create(self, obj_in: Dict[str, Any] | ModelType) -> ModelType:
        if isinstance(obj_in, self.model):
            db_obj = obj_in
        else:
            db_obj = self.model(**obj_in)  # type: ignore[arg-type]
        self.session.add(db_obj)
        # flush to populate PK and surface constraint violations early
        self.session.flush()
        return db_obj

    def update(self, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        for field, value in obj_in.items():
            if hasattr(db_obj, field) and field != "id":
                setattr(db_obj, field, value)

        self.session.flush()
        return db_obj

    def delete(self, db_obj: ModelType) -> None:
        self.session.delete(db_obj)
        self.session.flush()

    # ------------------------------------------------------------------ #
    # Bulk helpers
    # ------------------------------------------------------------------ #
    def bulk_create(self, objs: Iterable[Dict[str, Any] | ModelType]) -> Sequence[ModelType]:
        instances: list[ModelType] = []
        for obj in objs:
            if isinstance(obj, self.model):
                instances.append(obj)
            else:
                instances.append(self.model(**obj))  # type: ignore[arg-type]
        self.session.add_all(instances)
        self.session.flush()
        return instances

    def bulk_delete(self, filters: Dict[str, Any]) -> int:
        stmt = delete(self.model)
        for key, value in filters.items():
            column = getattr(self.model, key, None)
            if column is not None:
                stmt = stmt.where(column == value)
        result = self.session.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount or 0
