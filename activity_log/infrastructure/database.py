"""Database configuration and session management."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


def _engine_options(database_url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        # Sessions are opened from the API worker threads and the consumer thread.
        options["connect_args"] = {"check_same_thread": False}
    return options


class Database:
    """Owns the SQLAlchemy engine and session factory for one process.

    Created once at startup, connected explicitly, handed to whatever needs a
    session and disposed on shutdown.
    """

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker[Session] | None = None

    @property
    def connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    def connect(self) -> None:
        """Create the engine and make sure the tables exist."""

        if self.connected:
            return
        self._engine = create_engine(self.database_url, **_engine_options(self.database_url))
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self._engine
        )
        initialize_database(self._engine)
        logger.info("Database connected (%s)", self._engine.url.render_as_string(hide_password=True))

    def disconnect(self) -> None:
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database disconnected")

    def session(self) -> Session:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session and close it afterwards."""

        session = self.session()
        try:
            yield session
        finally:
            session.close()


def initialize_database(engine: Engine) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from activity_log.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)


__all__ = ["Base", "Database", "initialize_database"]
