"""Database configuration and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from userstamp.config import Settings, get_settings
from .current_user import CURRENT_USER_ID_KEY
from .stamping import install_default_stamper


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


class StampingSession(Session):
    """Session carrying the id of the user acting through it."""

    def __init__(self, *args: Any, current_user_id: Any = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        if current_user_id is not None:
            self.current_user_id = current_user_id

    @property
    def current_user_id(self) -> Any:
        return self.info.get(CURRENT_USER_ID_KEY)

    @current_user_id.setter
    def current_user_id(self, value: Any) -> None:
        self.info[CURRENT_USER_ID_KEY] = value


settings = get_settings()

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Create the SQLAlchemy engine for the configured database."""

    engine_kwargs: dict[str, object] = {"echo": settings.sql_echo}
    if settings.database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if settings.database_url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs["poolclass"] = StaticPool
    logger.debug("Creating engine for %s", settings.database_url.split("://", 1)[0])
    return create_engine(settings.database_url, **engine_kwargs)


engine = build_engine(settings)
SessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=engine, class_=StampingSession
)

install_default_stamper(StampingSession)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    Base.metadata.create_all(bind=engine, checkfirst=True)


def get_db() -> Generator:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope(current_user_id: Any = None) -> Iterator[StampingSession]:
    """Provide a transactional session acting as ``current_user_id``."""

    session = SessionLocal(current_user_id=current_user_id)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "Base",
    "SessionLocal",
    "StampingSession",
    "build_engine",
    "engine",
    "get_db",
    "initialize_database",
    "session_scope",
]
