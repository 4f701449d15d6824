"""Database configuration and session management."""

from collections.abc import Iterator
from functools import lru_cache

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from recipefinder.config import get_settings
from recipefinder.logging_config import get_logger

logger = get_logger(__name__)

_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Build an engine for ``database_url``.

    SQLite connections are shared across the threads FastAPI runs sync
    dependencies in, and an in-memory database keeps a single connection
    so every session sees the same tables.
    """
    kwargs: dict = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in _IN_MEMORY_URLS:
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    return create_db_engine(settings.database_url, echo=settings.sql_echo)


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False)


def init_db(engine: Engine | None = None) -> None:
    """Create any missing tables."""
    # Register the mapped tables on Base.metadata
    from recipefinder import models  # noqa: F401

    engine = engine or get_engine()
    Base.metadata.create_all(engine)
    logger.info(f"Database ready at {engine.url.render_as_string(hide_password=True)}")


def get_db() -> Iterator[Session]:
    """Dependency for FastAPI endpoints."""
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()
