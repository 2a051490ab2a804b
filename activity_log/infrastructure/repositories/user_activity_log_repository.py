"""Persistence layer for user activity logs."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from sqlalchemy import asc, desc, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from activity_log.domain.entities import UserActivityLog
from activity_log.domain.errors import DuplicateEventError, PersistenceError
from activity_log.domain.repositories import (
    DEFAULT_SORT,
    ActivityLogFilter,
    SortOrder,
    UserActivityLogRepository,
)
from activity_log.domain.value_objects import (
    ActivityType,
    EventId,
    IpAddress,
    LogTimestamp,
    Metadata,
    SessionId,
    UserAgent,
    UserId,
)
from activity_log.infrastructure.database import Database
from activity_log.infrastructure.models import UserActivityLogModel
from activity_log.utils import ensure_utc, ensure_utc_naive

_SORT_COLUMNS = {
    "timestamp": UserActivityLogModel.timestamp,
    "user_id": UserActivityLogModel.user_id,
    "activity_type": UserActivityLogModel.activity_type,
    "event_id": UserActivityLogModel.event_id,
}


class SqlAlchemyUserActivityLogRepository(UserActivityLogRepository):
    """Store :class:`UserActivityLog` entries in a relational database."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def save(self, log: UserActivityLog) -> None:
        model = UserActivityLogModel()
        self._apply_entity_to_model(model, log)
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateEventError(str(log.event_id)) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(
                f"Could not store activity log {log.event_id}: {exc}"
            ) from exc

    def find_by_id(self, event_id: str) -> UserActivityLog | None:
        query = select(UserActivityLogModel).where(
            UserActivityLogModel.event_id == event_id
        )
        model = self._execute(lambda: self.session.scalars(query).first())
        if model is None:
            return None
        return self._to_entity(model)

    def find_by_user_id(self, user_id: str) -> Sequence[UserActivityLog]:
        query = (
            select(UserActivityLogModel)
            .where(UserActivityLogModel.user_id == user_id)
            .order_by(desc(UserActivityLogModel.timestamp), desc(UserActivityLogModel.id))
        )
        models = self._execute(lambda: self.session.scalars(query).all())
        return [self._to_entity(model) for model in models]

    def find_all(
        self,
        log_filter: ActivityLogFilter,
        *,
        page: int,
        limit: int,
        sort: SortOrder | None = None,
    ) -> tuple[list[UserActivityLog], int]:
        sort = sort or DEFAULT_SORT
        column = _SORT_COLUMNS[sort.field]
        direction = desc if sort.descending else asc

        query = self._apply_filter(select(UserActivityLogModel), log_filter)
        query = (
            query.order_by(direction(column), direction(UserActivityLogModel.id))
            .offset((page - 1) * limit)
            .limit(limit)
        )
        count_query = self._apply_filter(
            select(func.count()).select_from(UserActivityLogModel), log_filter
        )

        models = self._execute(lambda: self.session.scalars(query).all())
        total = self._execute(lambda: self.session.scalar(count_query)) or 0
        return [self._to_entity(model) for model in models], int(total)

    def _execute(self, operation):
        try:
            return operation()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(f"Could not read activity logs: {exc}") from exc

    @staticmethod
    def _apply_filter(query: Select, log_filter: ActivityLogFilter) -> Select:
        if log_filter.user_id is not None:
            query = query.where(UserActivityLogModel.user_id == str(log_filter.user_id))
        if log_filter.activity_type is not None:
            query = query.where(
                UserActivityLogModel.activity_type == str(log_filter.activity_type)
            )
        if log_filter.start is not None:
            query = query.where(
                UserActivityLogModel.timestamp >= ensure_utc_naive(log_filter.start)
            )
        if log_filter.end is not None:
            query = query.where(
                UserActivityLogModel.timestamp <= ensure_utc_naive(log_filter.end)
            )
        return query

    @staticmethod
    def _to_entity(model: UserActivityLogModel) -> UserActivityLog:
        return UserActivityLog(
            user_id=UserId(model.user_id),
            activity_type=ActivityType(model.activity_type),
            timestamp=LogTimestamp(ensure_utc(model.timestamp)),
            metadata=Metadata(model.metadata_ or {}),
            event_id=EventId(model.event_id),
            session_id=SessionId(model.session_id) if model.session_id else None,
            ip_address=IpAddress(model.ip_address) if model.ip_address else None,
            user_agent=UserAgent(model.user_agent) if model.user_agent else None,
        )

    @staticmethod
    def _apply_entity_to_model(model: UserActivityLogModel, log: UserActivityLog) -> None:
        model.event_id = str(log.event_id)
        model.user_id = str(log.user_id)
        model.activity_type = str(log.activity_type)
        model.timestamp = ensure_utc_naive(log.timestamp.to_datetime())
        model.metadata_ = log.metadata.to_dict()
        model.session_id = str(log.session_id) if log.session_id else None
        model.ip_address = str(log.ip_address) if log.ip_address else None
        model.user_agent = str(log.user_agent) if log.user_agent else None


@contextmanager
def repository_scope(database: Database) -> Iterator[SqlAlchemyUserActivityLogRepository]:
    """Yield a repository bound to a fresh session of ``database``."""

    with database.session_scope() as session:
        yield SqlAlchemyUserActivityLogRepository(session)


__all__ = ["SqlAlchemyUserActivityLogRepository", "repository_scope"]
