"""FastAPI dependency utilities."""

from collections.abc import Generator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from activity_log.application.ports import ActivityLogPublisher
from activity_log.domain.repositories import UserActivityLogRepository
from activity_log.infrastructure.database import Database
from activity_log.infrastructure.repositories import SqlAlchemyUserActivityLogRepository


def get_database(request: Request) -> Database:
    """Return the database handle created by the application lifespan."""

    database: Database | None = getattr(request.app.state, "database", None)
    if database is None or not database.connected:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database not available",
        )
    return database


def get_db(database: Database = Depends(get_database)) -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    with database.session_scope() as session:
        yield session


def get_repository(db: Session = Depends(get_db)) -> UserActivityLogRepository:
    return SqlAlchemyUserActivityLogRepository(db)


def get_publisher(request: Request) -> ActivityLogPublisher:
    """Return the channel publisher created by the application lifespan."""

    publisher: ActivityLogPublisher | None = getattr(request.app.state, "publisher", None)
    if publisher is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Kafka producer not available",
        )
    return publisher


__all__ = ["get_database", "get_db", "get_publisher", "get_repository"]
