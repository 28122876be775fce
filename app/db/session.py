"""Database session management."""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.config.settings import settings


def build_engine(database_url: str, *, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite connections are shared across request threads, so the
    same-thread check is disabled; other backends get a sized pool.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False, **settings.DB_CONNECT_ARGS},
        )
    return create_engine(
        database_url,
        pool_pre_ping=True,
        echo=echo,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_POOL_OVERFLOW,
        connect_args=settings.DB_CONNECT_ARGS,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


engine = build_engine(settings.get_database_url(), echo=settings.DB_ECHO)

SessionLocal = build_session_factory(engine)

