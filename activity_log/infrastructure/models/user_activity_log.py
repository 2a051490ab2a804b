"""SQLAlchemy model for persisted activity logs."""

from sqlalchemy import Column, DateTime, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON

from activity_log.infrastructure.database import Base
from activity_log.utils import ensure_utc_naive, now_utc

_metadata_json_type = JSONB().with_variant(JSON(), "sqlite").with_variant(JSON(), "mysql")


def _now_naive():
    return ensure_utc_naive(now_utc())


class UserActivityLogModel(Base):
    """Database representation of a user activity log."""

    __tablename__ = "user_activity_logs"
    __table_args__ = (
        Index("ix_user_activity_logs_user_id_timestamp", "user_id", "timestamp"),
        Index(
            "ix_user_activity_logs_activity_type_timestamp",
            "activity_type",
            "timestamp",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String(36), nullable=False, unique=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    activity_type = Column(String(32), nullable=False, index=True)
    timestamp = Column(DateTime, nullable=False, index=True)
    metadata_ = Column("metadata", _metadata_json_type, nullable=False, default=dict)
    session_id = Column(String(255), nullable=True)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(String(1024), nullable=True)
    created_at = Column(DateTime, nullable=False, default=_now_naive)


__all__ = ["UserActivityLogModel"]
