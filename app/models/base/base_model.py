"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and the abstract model every table
inherits: a string UUID primary key, and a readable repr.
"""

import enum
from typing import Type
from uuid import uuid4

from sqlalchemy import Enum, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Root SQLAlchemy base class."""
    pass


def enum_column(enum_cls: Type[enum.Enum], length: int = 20) -> Enum:
    """
    Portable enum column type.

    Values (not member names) are stored so raw SQL and partial index
    predicates can compare against the lowercase literals.
    """
    return Enum(
        enum_cls,
        native_enum=False,
        length=length,
        values_callable=lambda members: [m.value for m in members],
    )


class BaseModel(Base):
    """
    Abstract base model with common fields and methods.
    """

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        nullable=False,
        comment="Primary key (UUID)"
    )

    def __repr__(self) -> str:
        """String representation of model instance."""
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"
