# app/db/init_db.py
"""Database initialization utilities."""
import logging
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from app.db.base import Base

logger = logging.getLogger(__name__)


def _resolve_engine(bind: Optional[Engine]) -> Engine:
    if bind is not None:
        return bind
    from app.db.session import engine

    return engine


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Initialize the database by creating all tables.

    Note: This is suitable for development/testing only.
    For production, use migrations instead.
    """
    engine = _resolve_engine(bind)
    try:
        existing_tables = inspect(engine).get_table_names()
        Base.metadata.create_all(bind=engine)
        if existing_tables:
            logger.info("Database already initialized with %d tables", len(existing_tables))
        else:
            logger.info("Database tables created successfully")
    except Exception as e:
        logger.error("Error initializing database: %s", e)
        raise

